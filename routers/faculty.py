from fastapi import APIRouter, Depends, HTTPException
from typing import List

from models.schemas import ActionResult, FacultyCreate, FacultyProfile, FacultyUpdate
from routers.dependencies import get_faculty_store
from service.faculty import FacultyStore

# Create a router instance
router = APIRouter()


def _profile(member) -> FacultyProfile:
    return FacultyProfile.model_validate(member.model_dump())


@router.get("/faculty", response_model=List[FacultyProfile])
async def list_faculty(email: str = "", store: FacultyStore = Depends(get_faculty_store)):
    return [_profile(member) for member in store.list(email)]


@router.get("/faculty/{faculty_email}", response_model=FacultyProfile)
async def get_faculty(faculty_email: str, email: str = "", store: FacultyStore = Depends(get_faculty_store)):
    member = store.get(email, faculty_email)
    if member is None:
        raise HTTPException(status_code=404, detail="Faculty member not found.")
    return _profile(member)


@router.post("/faculty", response_model=ActionResult)
async def create_faculty(data: FacultyCreate, email: str = "", store: FacultyStore = Depends(get_faculty_store)):
    return store.create(email, data)


@router.put("/faculty", response_model=ActionResult)
async def update_faculty(data: FacultyUpdate, email: str = "", store: FacultyStore = Depends(get_faculty_store)):
    """Update a faculty member identified by the email in the body."""
    return store.update(email, data)


@router.delete("/faculty/{faculty_email}", response_model=ActionResult)
async def delete_faculty(faculty_email: str, email: str = "", store: FacultyStore = Depends(get_faculty_store)):
    return store.delete(email, faculty_email)


@router.post("/faculty/{faculty_email}/unlock", response_model=ActionResult)
async def unlock_faculty(faculty_email: str, email: str = "", store: FacultyStore = Depends(get_faculty_store)):
    return store.unlock(email, faculty_email)


@router.post("/faculty/{faculty_email}/disable-2fa", response_model=ActionResult)
async def disable_faculty_two_factor(faculty_email: str, email: str = "",
                                     store: FacultyStore = Depends(get_faculty_store)):
    return store.disable_two_factor(email, faculty_email)
