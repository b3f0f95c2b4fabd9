"""
Department -> Program -> Year -> Section hierarchy store.

The whole tree lives in one JSON array. Every operation re-reads the tree,
walks down by parent identifiers, mutates in place and rewrites the file.
Removing a node from its parent's list discards its subtree with it.
"""

import logging
from typing import List, Optional, Tuple

from models.schemas import ActionResult, Department, Program, Section, Year
from service.json_store import (
    RecordStore,
    StoreBackend,
    find_by_id,
    new_id,
    tenant_key,
)

logger = logging.getLogger(__name__)

DEPARTMENTS_FILE = "departments.json"


class DepartmentStore(RecordStore):
    """
    Hierarchy store over departments.json.

    Without an admin email the global file is used; with one, the tenant's
    own copy under admins/<tenant>/.
    """

    def __init__(self, backend: StoreBackend, admin_email: Optional[str] = None):
        super().__init__(backend)
        self.key = tenant_key(admin_email, DEPARTMENTS_FILE) if admin_email else DEPARTMENTS_FILE

    def _read(self) -> List[Department]:
        return self._load(self.key, Department)

    def _write(self, departments: List[Department], success_message: str) -> ActionResult:
        return self._save(self.key, departments, success_message)

    # ─── Departments ───

    def list(self) -> List[Department]:
        return self._read()

    def get(self, department_id: str) -> Optional[Department]:
        return find_by_id(self._read(), department_id)

    def create(self, name: str) -> ActionResult:
        departments = self._read()
        departments.append(Department(id=new_id(), name=name, programs=[]))
        return self._write(departments, "Department created successfully.")

    def update(self, department_id: str, name: str) -> ActionResult:
        departments = self._read()
        department = find_by_id(departments, department_id)
        if department is None:
            return ActionResult(success=False, message="Department not found.")
        department.name = name
        return self._write(departments, "Department updated successfully.")

    def delete(self, department_id: str) -> ActionResult:
        departments = self._read()
        remaining = [d for d in departments if d.id != department_id]
        if len(remaining) == len(departments):
            return ActionResult(success=False, message="Department not found.")
        return self._write(remaining, "Department deleted successfully.")

    # ─── Programs ───

    def _locate_program(self, departments: List[Department], department_id: str,
                        program_id: str) -> Tuple[Optional[Program], Optional[ActionResult]]:
        department = find_by_id(departments, department_id)
        if department is None:
            return None, ActionResult(success=False, message="Department not found.")
        program = find_by_id(department.programs, program_id)
        if program is None:
            return None, ActionResult(success=False, message="Program not found.")
        return program, None

    def add_program(self, department_id: str, name: str) -> ActionResult:
        departments = self._read()
        department = find_by_id(departments, department_id)
        if department is None:
            return ActionResult(success=False, message="Department not found.")
        department.programs.append(Program(id=new_id(), name=name, years=[]))
        return self._write(departments, "Program created successfully.")

    def update_program(self, department_id: str, program_id: str, name: str) -> ActionResult:
        departments = self._read()
        program, error = self._locate_program(departments, department_id, program_id)
        if error:
            return error
        program.name = name
        return self._write(departments, "Program updated successfully.")

    def delete_program(self, department_id: str, program_id: str) -> ActionResult:
        departments = self._read()
        department = find_by_id(departments, department_id)
        if department is None:
            return ActionResult(success=False, message="Department not found.")
        original_count = len(department.programs)
        department.programs = [p for p in department.programs if p.id != program_id]
        if len(department.programs) == original_count:
            return ActionResult(success=False, message="Program not found.")
        return self._write(departments, "Program deleted successfully.")

    # ─── Years ───

    def _locate_year(self, departments: List[Department], department_id: str, program_id: str,
                     year_id: str) -> Tuple[Optional[Year], Optional[ActionResult]]:
        program, error = self._locate_program(departments, department_id, program_id)
        if error:
            return None, error
        year = find_by_id(program.years, year_id)
        if year is None:
            return None, ActionResult(success=False, message="Year not found.")
        return year, None

    def add_years(self, department_id: str, program_id: str, names: List[str]) -> ActionResult:
        """Append one year per name in a single rewrite."""
        departments = self._read()
        program, error = self._locate_program(departments, department_id, program_id)
        if error:
            return error
        for name in names:
            program.years.append(Year(id=new_id(), name=name, sections=[]))
        noun = "Year" if len(names) == 1 else "Years"
        return self._write(departments, f"{noun} created successfully.")

    def update_year(self, department_id: str, program_id: str, year_id: str, name: str) -> ActionResult:
        departments = self._read()
        year, error = self._locate_year(departments, department_id, program_id, year_id)
        if error:
            return error
        year.name = name
        return self._write(departments, "Year updated successfully.")

    def delete_year(self, department_id: str, program_id: str, year_id: str) -> ActionResult:
        departments = self._read()
        program, error = self._locate_program(departments, department_id, program_id)
        if error:
            return error
        original_count = len(program.years)
        program.years = [y for y in program.years if y.id != year_id]
        if len(program.years) == original_count:
            return ActionResult(success=False, message="Year not found.")
        return self._write(departments, "Year deleted successfully.")

    # ─── Sections ───

    def add_section(self, department_id: str, program_id: str, year_id: str,
                    name: str, student_count: int) -> ActionResult:
        departments = self._read()
        year, error = self._locate_year(departments, department_id, program_id, year_id)
        if error:
            return error
        year.sections.append(Section(id=new_id(), name=name, student_count=student_count))
        return self._write(departments, "Section added successfully.")

    def update_section(self, department_id: str, program_id: str, year_id: str, section_id: str,
                       name: str, student_count: int) -> ActionResult:
        departments = self._read()
        year, error = self._locate_year(departments, department_id, program_id, year_id)
        if error:
            return error
        section = find_by_id(year.sections, section_id)
        if section is None:
            return ActionResult(success=False, message="Section not found.")
        section.name = name
        section.student_count = student_count
        return self._write(departments, "Section updated successfully.")

    def delete_section(self, department_id: str, program_id: str, year_id: str,
                       section_id: str) -> ActionResult:
        departments = self._read()
        year, error = self._locate_year(departments, department_id, program_id, year_id)
        if error:
            return error
        original_count = len(year.sections)
        year.sections = [s for s in year.sections if s.id != section_id]
        if len(year.sections) == original_count:
            return ActionResult(success=False, message="Section not found.")
        return self._write(departments, "Section deleted successfully.")
