"""
Tenant-scoped room request store.

Requests move pending -> approved / rejected, but the store is permissive:
update_status overwrites whatever status is stored. A room release is a
request created directly in the approved state.
"""

import logging
from typing import List, Optional

from models.schemas import ActionResult, RequestStatus, RoomRequest, RoomRequestData
from service.json_store import (
    ADMIN_REQUIRED,
    RecordStore,
    new_id,
    parse_iso,
    tenant_key,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

REQUESTS_FILE = "room-requests.json"


class RoomRequestStore(RecordStore):
    """Room requests persisted in admins/<tenant>/room-requests.json."""

    def _read(self, admin_email: str) -> List[RoomRequest]:
        return self._load(tenant_key(admin_email, REQUESTS_FILE), RoomRequest)

    def _write(self, admin_email: str, requests: List[RoomRequest], success_message: str) -> ActionResult:
        return self._save(tenant_key(admin_email, REQUESTS_FILE), requests, success_message)

    def list(self, admin_email: str) -> List[RoomRequest]:
        """All requests, newest first."""
        if not admin_email:
            return []
        requests = self._read(admin_email)
        return sorted(requests, key=lambda r: parse_iso(r.requested_at), reverse=True)

    def list_for_faculty(self, admin_email: str, faculty_email: str) -> List[RoomRequest]:
        if not admin_email or not faculty_email:
            return []
        return [r for r in self.list(admin_email) if r.faculty_email == faculty_email]

    def list_approved(self, admin_email: str) -> List[RoomRequest]:
        """Approved requests in file order (not re-sorted)."""
        if not admin_email:
            return []
        return [r for r in self._read(admin_email) if r.status == "approved"]

    def _append(self, admin_email: str, data: RoomRequestData, status: RequestStatus,
                success_message: str) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        requests = self._read(admin_email)
        new_request = RoomRequest(
            **data.model_dump(),
            id=new_id(),
            status=status,
            requested_at=utc_now_iso(),
        )
        requests.append(new_request)
        return self._write(admin_email, requests, success_message)

    def create(self, admin_email: str, data: RoomRequestData) -> ActionResult:
        return self._append(admin_email, data, "pending", "Room request submitted successfully.")

    def release(self, admin_email: str, data: RoomRequestData) -> ActionResult:
        return self._append(admin_email, data, "approved", "Room released successfully.")

    def update_status(self, admin_email: str, request_id: str, status: RequestStatus,
                      admin_reason: Optional[str] = None) -> ActionResult:
        if not admin_email:
            return ActionResult(success=False, message=ADMIN_REQUIRED)
        requests = self._read(admin_email)
        target = next((r for r in requests if r.id == request_id), None)
        if target is None:
            return ActionResult(success=False, message="Request not found.")
        target.status = status
        if admin_reason is not None:
            target.admin_reason = admin_reason
        return self._write(admin_email, requests, f"Request has been {status}.")
