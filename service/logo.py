"""
Application logo stored as a single PNG under the public static directory.
"""

import base64
import binascii
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from models.schemas import ActionResult
from service.json_store import write_atomically

logger = logging.getLogger(__name__)

LOGO_FILENAME = "logo.png"
STATIC_URL_PREFIX = "/static"


class LogoStore:
    """
    Writes the decoded logo to <public_dir>/logo.png.

    on_update is the cache invalidation signal for whatever serves the file;
    it is called after every successful write.
    """

    def __init__(self, public_dir: Union[str, Path], on_update: Optional[Callable[[], None]] = None):
        self.public_dir = Path(public_dir)
        self.on_update = on_update

    @property
    def path(self) -> Path:
        return self.public_dir / LOGO_FILENAME

    def get(self) -> Optional[str]:
        """Cache-busting URL of the logo, or None when no logo was uploaded."""
        try:
            mtime = self.path.stat().st_mtime
        except OSError:
            return None
        return f"{STATIC_URL_PREFIX}/{LOGO_FILENAME}?v={int(mtime * 1000)}"

    def update(self, data_url: str) -> ActionResult:
        # Strip "data:image/png;base64," if present
        _, _, encoded = data_url.rpartition(",")
        try:
            image = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            return ActionResult(success=False, message="Invalid logo data.")
        if not image:
            return ActionResult(success=False, message="Invalid logo data.")

        try:
            write_atomically(self.path, image)
        except OSError:
            logger.error("Failed to update logo", exc_info=True)
            return ActionResult(success=False, message="An internal error occurred.")

        if self.on_update:
            self.on_update()
        logger.info(f"Logo updated ({len(image)} bytes)")
        return ActionResult(success=True, message="Logo updated successfully.")
