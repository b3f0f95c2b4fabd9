"""
Tenant-scoped faculty roster keyed by email.
"""

import logging
from typing import List, Optional

from werkzeug.security import generate_password_hash

from models.schemas import ActionResult, Faculty, FacultyCreate, FacultyUpdate
from service.json_store import (
    ADMIN_REQUIRED,
    RecordStore,
    tenant_key,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

FACULTY_FILE = "faculty.json"
INTERNAL_ERROR = "An internal error occurred. Please try again."


class FacultyStore(RecordStore):
    def _read(self, admin_email: str) -> List[Faculty]:
        return self._load(tenant_key(admin_email, FACULTY_FILE), Faculty)

    def _write(self, admin_email: str, faculty: List[Faculty], success_message: str) -> ActionResult:
        return self._save(tenant_key(admin_email, FACULTY_FILE), faculty, success_message, INTERNAL_ERROR)

    def list(self, admin_email: str) -> List[Faculty]:
        if not admin_email:
            return []
        return self._read(admin_email)

    def get(self, admin_email: str, email: str) -> Optional[Faculty]:
        if not admin_email:
            return None
        return next((f for f in self._read(admin_email) if f.email == email), None)

    def create(self, admin_email: str, data: FacultyCreate) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        faculty = self._read(admin_email)
        if any(f.email == data.email for f in faculty):
            return ActionResult(success=False, message="A faculty member with this email already exists.")

        member = Faculty(**data.model_dump(exclude={"password"}),
                         password=generate_password_hash(data.password),
                         password_last_changed=utc_now_iso())
        faculty.append(member)
        return self._write(admin_email, faculty, "Faculty account created successfully.")

    def update(self, admin_email: str, data: FacultyUpdate) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        faculty = self._read(admin_email)
        member = next((f for f in faculty if f.email == data.email), None)
        if member is None:
            return ActionResult(success=False, message="Faculty member not found.")

        member.name = data.name
        member.abbreviation = data.abbreviation
        member.department = data.department
        member.weekly_max_hours = data.weekly_max_hours
        member.weekly_off_days = list(data.weekly_off_days)
        if data.password:
            member.password = generate_password_hash(data.password)
            member.password_last_changed = utc_now_iso()
        return self._write(admin_email, faculty, "Faculty account updated successfully.")

    def delete(self, admin_email: str, email: str) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        faculty = self._read(admin_email)
        remaining = [f for f in faculty if f.email != email]
        if len(remaining) == len(faculty):
            return ActionResult(success=False, message="Faculty member not found.")
        return self._write(admin_email, remaining, "Faculty account deleted successfully.")

    def unlock(self, admin_email: str, email: str) -> ActionResult:
        """Clear the lock flag and the failed-attempt counter."""
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        faculty = self._read(admin_email)
        member = next((f for f in faculty if f.email == email), None)
        if member is None:
            return ActionResult(success=False, message="Faculty member not found.")
        member.is_locked = False
        member.two_factor_attempts = 0
        return self._write(admin_email, faculty, "Faculty account unlocked successfully.")

    def disable_two_factor(self, admin_email: str, email: str) -> ActionResult:
        """Admin override: turn 2FA off, drop the PIN and remember who disabled it."""
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        faculty = self._read(admin_email)
        member = next((f for f in faculty if f.email == email), None)
        if member is None:
            return ActionResult(success=False, message="Faculty member not found.")
        member.is_two_factor_enabled = False
        member.two_factor_pin = None
        member.two_factor_attempts = 0
        member.two_factor_disabled_by_admin = True
        return self._write(admin_email, faculty, "Two-factor authentication disabled for faculty member.")
