"""
Global registry of tenant administrators in admin.json.

The super admin manages these accounts. Each admin's email is the tenant
key for everything under admins/<tenant>/. Unlocking a locked account needs
the adminUnlockKey from security-keys.json.
"""

import logging
from typing import List, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from models.schemas import ActionResult, Admin, AdminCreate, AdminUpdate
from service.json_store import RecordStore, utc_now_iso

logger = logging.getLogger(__name__)

ADMINS_FILE = "admin.json"
SECURITY_KEYS_FILE = "security-keys.json"
INTERNAL_ERROR = "An internal error occurred. Please try again."


class AdminStore(RecordStore):
    def _read(self) -> List[Admin]:
        return self._load(ADMINS_FILE, Admin)

    def _write(self, admins: List[Admin], success_message: str,
               failure_message: str = INTERNAL_ERROR) -> ActionResult:
        return self._save(ADMINS_FILE, admins, success_message, failure_message)

    def _unlock_key(self) -> Optional[str]:
        raw = self.backend.read(SECURITY_KEYS_FILE)
        if not isinstance(raw, dict):
            return None
        return raw.get("adminUnlockKey") or None

    def list(self) -> List[Admin]:
        return self._read()

    def emails(self) -> List[str]:
        return [admin.email for admin in self._read()]

    def get(self, email: str) -> Optional[Admin]:
        return next((a for a in self._read() if a.email == email), None)

    def create(self, data: AdminCreate) -> ActionResult:
        admins = self._read()
        if any(a.email == data.email for a in admins):
            return ActionResult(success=False, message="An admin with this email already exists.")
        admins.append(Admin(
            name=data.name,
            email=data.email,
            password=generate_password_hash(data.password),
            is_two_factor_enabled=False,
            two_factor_attempts=0,
            is_locked=False,
            password_last_changed=utc_now_iso(),
        ))
        return self._write(admins, "Admin account created successfully.")

    def update(self, data: AdminUpdate) -> ActionResult:
        """Rename, and replace the password when a new one comes with the current one."""
        admins = self._read()
        admin = next((a for a in admins if a.email == data.email), None)
        if admin is None:
            return ActionResult(success=False, message="Admin not found.")

        admin.name = data.name
        if data.password:
            if not data.current_password:
                return ActionResult(success=False,
                                    message="The admin's current password is required to make this change.")
            if not check_password_hash(admin.password, data.current_password):
                return ActionResult(success=False,
                                    message="Incorrect current password. Password change not authorized.")
            admin.password = generate_password_hash(data.password)
            admin.password_last_changed = utc_now_iso()
        return self._write(admins, "Admin account updated successfully.")

    def delete(self, email: str, password: str) -> ActionResult:
        """Remove an admin after confirming that admin's own password."""
        admins = self._read()
        admin = next((a for a in admins if a.email == email), None)
        if admin is None:
            return ActionResult(success=False, message="Admin not found.")
        if not check_password_hash(admin.password, password):
            return ActionResult(success=False, message="Incorrect password. Deletion failed.")
        remaining = [a for a in admins if a.email != email]
        return self._write(remaining, "Admin account deleted successfully.", "An internal error occurred.")

    def unlock(self, email: str, security_key: str) -> ActionResult:
        unlock_key = self._unlock_key()
        if not unlock_key or unlock_key != security_key:
            return ActionResult(success=False, message="The provided security key is incorrect.")
        admins = self._read()
        admin = next((a for a in admins if a.email == email), None)
        if admin is None:
            return ActionResult(success=False, message="Admin account not found.")
        admin.is_locked = False
        admin.two_factor_attempts = 0
        return self._write(admins, "Account unlocked successfully.", "Failed to unlock account.")

    def set_two_factor(self, email: str, is_enabled: bool, pin: Optional[str],
                       current_password: str) -> ActionResult:
        """Turn 2FA on (hashing the new PIN) or off (dropping the PIN)."""
        admins = self._read()
        admin = next((a for a in admins if a.email == email), None)
        if admin is None:
            return ActionResult(success=False, message="Admin account not found.")
        if not check_password_hash(admin.password, current_password):
            return ActionResult(success=False, message="Incorrect password. Settings not saved.")

        admin.is_two_factor_enabled = is_enabled
        if is_enabled and pin:
            admin.two_factor_pin = generate_password_hash(pin)
        elif not is_enabled:
            admin.two_factor_pin = None
        return self._write(admins, "2FA settings updated successfully.", "Failed to update 2FA settings.")
