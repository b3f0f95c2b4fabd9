"""
Developer roster and the developer page copy. Both are global documents.
"""

import logging
from typing import List

from pydantic import ValidationError

from models.schemas import ActionResult, Developer, DeveloperPageContent
from service.json_store import RecordStore, commit

logger = logging.getLogger(__name__)

DEVELOPERS_FILE = "developers.json"
PAGE_CONTENT_FILE = "developer-page-content.json"

DEFAULT_PAGE_CONTENT = DeveloperPageContent(
    about_title="About Us",
    about_description=(
        "We are a small team of developers building tools that take the "
        "busywork out of academic scheduling."
    ),
    team_title="Meet the Team",
    team_description="The minds behind",
)


class DeveloperStore(RecordStore):
    def list(self) -> List[Developer]:
        return self._load(DEVELOPERS_FILE, Developer)

    def update(self, developer: Developer) -> ActionResult:
        """Replace the profile with the same id. The roster is never grown or shrunk here."""
        developers = self.list()
        index = next((i for i, d in enumerate(developers) if d.id == developer.id), None)
        if index is None:
            return ActionResult(success=False, message="Developer not found.")
        developers[index] = developer
        return self._save(DEVELOPERS_FILE, developers, "Developer profile updated successfully.")

    def get_page_content(self) -> DeveloperPageContent:
        raw = self.backend.read(PAGE_CONTENT_FILE)
        if not isinstance(raw, dict):
            return DEFAULT_PAGE_CONTENT.model_copy()
        try:
            return DeveloperPageContent.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Falling back to default developer page content: {e}")
            return DEFAULT_PAGE_CONTENT.model_copy()

    def update_page_content(self, content: DeveloperPageContent) -> ActionResult:
        return commit(self.backend, PAGE_CONTENT_FILE, content.model_dump(by_alias=True),
                      "Developer page content updated successfully.")
