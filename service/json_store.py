"""
Persistence backends for the JSON file stores.

Every store performs read-whole-file -> mutate -> write-whole-file against a
single key. Keys are relative paths ("departments.json",
"admins/<tenant>/room-requests.json"). Reads never raise: a missing, empty,
unreadable or malformed file reads as None. Writes raise OSError on failure.

A record that fails validation is never dropped: RecordStore keeps the raw
item and writes it back after the valid records on every rewrite.
"""

import json
import logging
import os
import random
import re
import string
import tempfile
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from models.schemas import ActionResult

logger = logging.getLogger(__name__)

TENANTS_DIR = "admins"
INTERNAL_ERROR = "An internal error occurred."
ADMIN_REQUIRED = "Admin email is required."

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_BASE36 = string.digits + string.ascii_lowercase

M = TypeVar("M", bound=BaseModel)


def tenant_key(admin_email: str, filename: str) -> str:
    """Resolve a tenant's file key from the administrator's email."""
    sanitized = _UNSAFE_CHARS.sub("_", admin_email)
    return f"{TENANTS_DIR}/{sanitized}/{filename}"


def new_id() -> str:
    """Time-based identifier with a random base-36 suffix. Not cryptographically unique."""
    suffix = "".join(random.choices(_BASE36, k=7))
    return f"{int(time.time() * 1000)}-{suffix}"


def utc_now_iso() -> str:
    """Current time as ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T10:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; unparsable values sort as the oldest."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def write_atomically(path: Path, data: bytes) -> None:
    """Write to a temporary sibling file, then move it over path with os.replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class StoreBackend(ABC):
    """Key/value persistence for whole JSON documents."""

    @abstractmethod
    def read(self, key: str) -> Optional[Any]:
        """Return the decoded document, or None if absent/empty/malformed."""

    @abstractmethod
    def write(self, key: str, data: Any) -> None:
        """Replace the whole document. Raises OSError on failure."""


class JsonFileBackend(StoreBackend):
    """
    Stores each key as a JSON file under a root directory.

    Writes land in a temporary sibling file first and are moved into place
    with os.replace, so readers never observe a half-written document.
    Concurrent read-modify-write cycles still race: the last writer wins.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / key

    def read(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            content = path.read_text(encoding="utf-8")
            if not content.strip():
                return None
            return json.loads(content)
        except (OSError, ValueError) as e:
            logger.warning(f"Treating unreadable store file {path} as empty: {e}")
            return None

    def write(self, key: str, data: Any) -> None:
        content = json.dumps(data, indent=2, ensure_ascii=False)
        write_atomically(self.path_for(key), content.encode("utf-8"))


class InMemoryBackend(StoreBackend):
    """Process-local backend keeping serialized documents in a dict."""

    def __init__(self):
        self.documents: Dict[str, str] = {}

    def read(self, key: str) -> Optional[Any]:
        content = self.documents.get(key)
        if content is None or not content.strip():
            return None
        try:
            return json.loads(content)
        except ValueError:
            return None

    def write(self, key: str, data: Any) -> None:
        self.documents[key] = json.dumps(data, indent=2)


def split_records(raw: List[Any], model: Type[M]) -> Tuple[List[M], List[Any]]:
    """Validate each item on its own; return (valid records, raw items that failed)."""
    records: List[M] = []
    unparsed: List[Any] = []
    for item in raw:
        try:
            records.append(model.model_validate(item))
        except ValidationError:
            unparsed.append(item)
    return records, unparsed


def dump_records(records: List[BaseModel]) -> List[dict]:
    return [record.model_dump(mode="json", by_alias=True, exclude_none=True) for record in records]


def commit(backend: StoreBackend, key: str, data: Any, success_message: str,
           failure_message: str = INTERNAL_ERROR) -> ActionResult:
    """Write the whole document and turn the outcome into an ActionResult."""
    try:
        backend.write(key, data)
    except OSError:
        logger.error(f"Failed to write {key}", exc_info=True)
        return ActionResult(success=False, message=failure_message)
    logger.info(f"{key}: {success_message}")
    return ActionResult(success=True, message=success_message)


def find_by_id(items: Sequence[M], item_id: str) -> Optional[M]:
    return next((item for item in items if item.id == item_id), None)


class RecordStore:
    """
    Base for stores over JSON arrays of records.

    _load remembers the items of each key that failed validation and _save
    appends them, untouched, after the valid records. A key whose document
    is not an array at all is read as empty and refuses writes until it is
    repaired.
    """

    def __init__(self, backend: StoreBackend):
        self.backend = backend
        self._unparsed: Dict[str, List[Any]] = {}
        self._wrong_shape: Set[str] = set()

    def _load(self, key: str, model: Type[M]) -> List[M]:
        raw = self.backend.read(key)
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning(f"Expected a JSON array in {key}, got {type(raw).__name__}; reading as empty")
                self._wrong_shape.add(key)
            self._unparsed[key] = []
            return []
        self._wrong_shape.discard(key)
        records, unparsed = split_records(raw, model)
        if unparsed:
            logger.warning(f"{key}: {len(unparsed)} record(s) failed validation and will be kept as-is")
        self._unparsed[key] = unparsed
        return records

    def _save(self, key: str, records: List[BaseModel], success_message: str,
              failure_message: str = INTERNAL_ERROR) -> ActionResult:
        if key in self._wrong_shape:
            logger.error(f"Refusing to overwrite {key}: its document is not a JSON array")
            return ActionResult(success=False, message=failure_message)
        data = dump_records(records) + self._unparsed.get(key, [])
        return commit(self.backend, key, data, success_message, failure_message)
