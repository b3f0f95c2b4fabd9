"""
Tenant-scoped faculty login log, newest entry first, capped at MAX_LOGIN_LOGS.
"""

import logging
from typing import List

from models.schemas import ActionResult, FacultyLog
from service.json_store import ADMIN_REQUIRED, RecordStore, new_id, parse_iso, tenant_key, utc_now_iso

logger = logging.getLogger(__name__)

LOGS_FILE = "faculty-logs.json"
MAX_LOGIN_LOGS = 100


class FacultyLogStore(RecordStore):
    def _read(self, admin_email: str) -> List[FacultyLog]:
        return self._load(tenant_key(admin_email, LOGS_FILE), FacultyLog)

    def list(self, admin_email: str) -> List[FacultyLog]:
        if not admin_email:
            return []
        return sorted(self._read(admin_email), key=lambda log: parse_iso(log.timestamp), reverse=True)

    def add_login(self, admin_email: str, faculty_name: str, faculty_email: str) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        logs = self._read(admin_email)
        entry = FacultyLog(
            id=new_id(),
            faculty_name=faculty_name,
            faculty_email=faculty_email,
            timestamp=utc_now_iso(),
            type="login",
        )
        return self._save(tenant_key(admin_email, LOGS_FILE), ([entry] + logs)[:MAX_LOGIN_LOGS],
                          "Login recorded.")
