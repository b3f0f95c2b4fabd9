"""
Tenant-scoped log of whether each scheduled class was actually held.

One entry per (class slot, date, faculty member); setting a status again
replaces the entry. Entries older than RETENTION_DAYS are pruned on every
write.
"""

import logging
from datetime import date, timedelta
from typing import List

from models.schemas import ActionResult, ConductLogEntry, ConductStatus
from service.json_store import ADMIN_REQUIRED, RecordStore, tenant_key

logger = logging.getLogger(__name__)

CONDUCT_FILE = "conduct-status.json"
RETENTION_DAYS = 30


def _entry_date(entry: ConductLogEntry) -> date:
    try:
        return date.fromisoformat(entry.date)
    except ValueError:
        return date.min


class ConductLogStore(RecordStore):
    def _read(self, admin_email: str) -> List[ConductLogEntry]:
        return self._load(tenant_key(admin_email, CONDUCT_FILE), ConductLogEntry)

    def for_day(self, admin_email: str, day: date) -> List[ConductLogEntry]:
        if not admin_email:
            return []
        wanted = day.isoformat()
        return [entry for entry in self._read(admin_email) if entry.date == wanted]

    def set_status(self, admin_email: str, class_key: str, faculty_email: str, day: date,
                   status: ConductStatus) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        entries = self._read(admin_email)
        entry = ConductLogEntry(class_key=class_key, faculty_email=faculty_email,
                                date=day.isoformat(), status=status)

        index = next((i for i, e in enumerate(entries)
                      if e.class_key == entry.class_key
                      and e.date == entry.date
                      and e.faculty_email == entry.faculty_email), None)
        if index is None:
            entries.append(entry)
        else:
            entries[index] = entry

        cutoff = date.today() - timedelta(days=RETENTION_DAYS)
        recent = [e for e in entries if _entry_date(e) >= cutoff]
        if len(recent) < len(entries):
            logger.info(f"Pruned {len(entries) - len(recent)} conduct entries older than {cutoff}")
        return self._save(tenant_key(admin_email, CONDUCT_FILE), recent,
                          "Status updated.", "Failed to update status.")
