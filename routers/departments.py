from fastapi import APIRouter, Depends, HTTPException
from typing import List

from models.schemas import ActionResult, Department, NameBody, NamesBody, SectionBody
from routers.dependencies import get_department_store
from service.departments import DepartmentStore

# Create a router instance
router = APIRouter()

DEPARTMENT = "/departments/{department_id}"
PROGRAM = DEPARTMENT + "/programs/{program_id}"
YEAR = PROGRAM + "/years/{year_id}"


@router.get("/departments", response_model=List[Department])
async def list_departments(store: DepartmentStore = Depends(get_department_store)):
    return store.list()


@router.get(DEPARTMENT, response_model=Department)
async def get_department(department_id: str, store: DepartmentStore = Depends(get_department_store)):
    department = store.get(department_id)
    if department is None:
        raise HTTPException(status_code=404, detail="Department not found.")
    return department


@router.post("/departments", response_model=ActionResult)
async def create_department(body: NameBody, store: DepartmentStore = Depends(get_department_store)):
    return store.create(body.name)


@router.put(DEPARTMENT, response_model=ActionResult)
async def update_department(department_id: str, body: NameBody,
                            store: DepartmentStore = Depends(get_department_store)):
    return store.update(department_id, body.name)


@router.delete(DEPARTMENT, response_model=ActionResult)
async def delete_department(department_id: str, store: DepartmentStore = Depends(get_department_store)):
    """Removes the department with all of its programs, years and sections."""
    return store.delete(department_id)


# ===========================
# Programs
# ===========================

@router.post(DEPARTMENT + "/programs", response_model=ActionResult)
async def add_program(department_id: str, body: NameBody, store: DepartmentStore = Depends(get_department_store)):
    return store.add_program(department_id, body.name)


@router.put(PROGRAM, response_model=ActionResult)
async def update_program(department_id: str, program_id: str, body: NameBody,
                         store: DepartmentStore = Depends(get_department_store)):
    return store.update_program(department_id, program_id, body.name)


@router.delete(PROGRAM, response_model=ActionResult)
async def delete_program(department_id: str, program_id: str,
                         store: DepartmentStore = Depends(get_department_store)):
    return store.delete_program(department_id, program_id)


# ===========================
# Years
# ===========================

@router.post(PROGRAM + "/years", response_model=ActionResult)
async def add_years(department_id: str, program_id: str, body: NamesBody,
                    store: DepartmentStore = Depends(get_department_store)):
    """Bulk-add years, one per name."""
    return store.add_years(department_id, program_id, body.names)


@router.put(YEAR, response_model=ActionResult)
async def update_year(department_id: str, program_id: str, year_id: str, body: NameBody,
                      store: DepartmentStore = Depends(get_department_store)):
    return store.update_year(department_id, program_id, year_id, body.name)


@router.delete(YEAR, response_model=ActionResult)
async def delete_year(department_id: str, program_id: str, year_id: str,
                      store: DepartmentStore = Depends(get_department_store)):
    return store.delete_year(department_id, program_id, year_id)


# ===========================
# Sections
# ===========================

@router.post(YEAR + "/sections", response_model=ActionResult)
async def add_section(department_id: str, program_id: str, year_id: str, body: SectionBody,
                      store: DepartmentStore = Depends(get_department_store)):
    return store.add_section(department_id, program_id, year_id, body.name, body.student_count)


@router.put(YEAR + "/sections/{section_id}", response_model=ActionResult)
async def update_section(department_id: str, program_id: str, year_id: str, section_id: str,
                         body: SectionBody, store: DepartmentStore = Depends(get_department_store)):
    return store.update_section(department_id, program_id, year_id, section_id, body.name, body.student_count)


@router.delete(YEAR + "/sections/{section_id}", response_model=ActionResult)
async def delete_section(department_id: str, program_id: str, year_id: str, section_id: str,
                         store: DepartmentStore = Depends(get_department_store)):
    return store.delete_section(department_id, program_id, year_id, section_id)
