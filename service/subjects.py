"""
Tenant-scoped subject catalogue. Subject codes are unique per tenant.
"""

import logging
from typing import List

from models.schemas import ActionResult, Subject, SubjectData
from service.json_store import (
    ADMIN_REQUIRED,
    RecordStore,
    new_id,
    tenant_key,
)

logger = logging.getLogger(__name__)

SUBJECTS_FILE = "subjects.json"


class SubjectStore(RecordStore):
    def _read(self, admin_email: str) -> List[Subject]:
        return self._load(tenant_key(admin_email, SUBJECTS_FILE), Subject)

    def _write(self, admin_email: str, subjects: List[Subject], success_message: str) -> ActionResult:
        return self._save(tenant_key(admin_email, SUBJECTS_FILE), subjects, success_message)

    def list(self, admin_email: str) -> List[Subject]:
        if not admin_email:
            return []
        return self._read(admin_email)

    def create(self, admin_email: str, data: SubjectData) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        subjects = self._read(admin_email)
        if any(s.code == data.code for s in subjects):
            return ActionResult(success=False, message="A subject with this code already exists.")
        subjects.append(Subject(id=new_id(), **data.model_dump()))
        return self._write(admin_email, subjects, "Subject created successfully.")

    def update(self, admin_email: str, subject: Subject) -> ActionResult:
        """Replace the stored record with the same id."""
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        subjects = self._read(admin_email)
        index = next((i for i, s in enumerate(subjects) if s.id == subject.id), None)
        if index is None:
            return ActionResult(success=False, message="Subject not found.")
        if any(s.code == subject.code and s.id != subject.id for s in subjects):
            return ActionResult(success=False, message="Another subject with this code already exists.")
        subjects[index] = subject
        return self._write(admin_email, subjects, "Subject updated successfully.")

    def delete(self, admin_email: str, subject_id: str) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        subjects = self._read(admin_email)
        remaining = [s for s in subjects if s.id != subject_id]
        if len(remaining) == len(subjects):
            return ActionResult(success=False, message="Subject not found.")
        return self._write(admin_email, remaining, "Subject deleted successfully.")
