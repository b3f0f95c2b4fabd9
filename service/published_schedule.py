"""
Tenant-scoped store for the published Markdown schedule.

The document is a sequence of sections, each opened by a level-2 heading
("## <Title>"). Section deletion matches titles by prefix, so deleting "Math"
also removes "Mathematics 101". That ambiguity is kept as-is.
"""

import logging
import re
from typing import List, Optional

from pydantic import ValidationError

from models.schemas import ActionResult, PublishedSchedule
from service.json_store import ADMIN_REQUIRED, StoreBackend, commit, tenant_key, utc_now_iso

logger = logging.getLogger(__name__)

SCHEDULE_FILE = "published-schedule.json"

_SECTION_SPLIT = re.compile(r"\n## ")


def split_sections(content: str) -> List[str]:
    """
    Split a schedule document into section fragments.

    A newline is prepended so the first heading splits like the others; the
    "## " marker is consumed by the split and each fragment starts with its
    title. Empty fragments are dropped.
    """
    parts = _SECTION_SPLIT.split("\n" + content.strip())
    return [part for part in parts if part.strip()]


def join_sections(parts: List[str]) -> str:
    """Reassemble fragments produced by split_sections."""
    return "\n\n".join(f"## {part}" for part in parts).strip()


class PublishedScheduleStore:
    """One document per tenant in admins/<tenant>/published-schedule.json."""

    def __init__(self, backend: StoreBackend):
        self.backend = backend

    def _key(self, admin_email: str) -> str:
        return tenant_key(admin_email, SCHEDULE_FILE)

    def get(self, admin_email: str) -> Optional[PublishedSchedule]:
        if not admin_email:
            return None
        raw = self.backend.read(self._key(admin_email))
        if not isinstance(raw, dict):
            return None
        try:
            return PublishedSchedule.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed schedule for {admin_email}: {e}")
            return None

    def get_content(self, admin_email: str) -> str:
        schedule = self.get(admin_email)
        return schedule.content if schedule else ""

    def _save(self, admin_email: str, content: str, published_at: str,
              success_message: str, failure_message: str) -> ActionResult:
        schedule = PublishedSchedule(content=content, published_at=published_at)
        return commit(self.backend, self._key(admin_email), schedule.model_dump(by_alias=True),
                      success_message, failure_message)

    def publish(self, admin_email: str, content: str) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        return self._save(
            admin_email, content, utc_now_iso(),
            "Schedule published successfully.",
            "An internal error occurred while publishing the schedule.",
        )

    def delete_all(self, admin_email: str) -> ActionResult:
        """Leaves an empty document behind rather than removing the file."""
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        return self._save(
            admin_email, "", "",
            "All schedules deleted successfully.",
            "An internal error occurred while deleting the schedule.",
        )

    def delete_section(self, admin_email: str, title: str) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        schedule = self.get(admin_email)
        if not schedule or not schedule.content:
            return ActionResult(success=False, message="No schedule found to delete.")

        parts = split_sections(schedule.content)
        remaining = [part for part in parts if not part.strip().startswith(title)]
        if len(remaining) == len(parts):
            return ActionResult(success=False, message=f'Schedule for "{title}" not found.')

        return self._save(
            admin_email, join_sections(remaining), utc_now_iso(),
            f'Schedule for "{title}" deleted successfully.',
            "An internal error occurred.",
        )
