"""
Global super-admin singleton: zero or one record in super-admin.json.
"""

import logging
from typing import Optional

from pydantic import ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from models.schemas import ActionResult, SuperAdmin, SuperAdminCreate, SuperAdminUpdate
from service.json_store import StoreBackend, commit

logger = logging.getLogger(__name__)

SUPER_ADMIN_FILE = "super-admin.json"
INTERNAL_ERROR = "An internal error occurred. Please try again."


class SuperAdminStore:
    def __init__(self, backend: StoreBackend):
        self.backend = backend

    def get(self) -> Optional[SuperAdmin]:
        raw = self.backend.read(SUPER_ADMIN_FILE)
        # "{}" is how an empty singleton looks on disk
        if not isinstance(raw, dict) or not raw:
            return None
        try:
            return SuperAdmin.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed super admin record: {e}")
            return None

    def exists(self) -> bool:
        """True once a record with an email is on disk, even one that no longer validates."""
        raw = self.backend.read(SUPER_ADMIN_FILE)
        return isinstance(raw, dict) and bool(raw.get("email"))

    def _write(self, admin: SuperAdmin, success_message: str) -> ActionResult:
        return commit(self.backend, SUPER_ADMIN_FILE, admin.model_dump(by_alias=True, exclude_none=True),
                      success_message, INTERNAL_ERROR)

    def create(self, data: SuperAdminCreate) -> ActionResult:
        """Refuses to overwrite: only one super admin may ever be signed up."""
        if self.exists():
            return ActionResult(success=False,
                                message="A super admin account already exists. Sign up is disabled.")
        admin = SuperAdmin(
            name=data.name,
            email=data.email,
            password=generate_password_hash(data.password),
            is_two_factor_enabled=False,
            two_factor_attempts=0,
            is_locked=False,
        )
        return self._write(admin, "Super admin account created successfully.")

    def update(self, data: SuperAdminUpdate) -> ActionResult:
        admin = self.get()
        if admin is None:
            return ActionResult(success=False, message="Super admin account not found.")
        if not check_password_hash(admin.password, data.current_password):
            return ActionResult(success=False, message="Incorrect current password. Changes not saved.")

        admin.name = data.name
        admin.email = data.email
        if data.password:
            admin.password = generate_password_hash(data.password)
        return self._write(admin, "Super admin account updated successfully.")
