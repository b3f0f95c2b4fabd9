from fastapi import APIRouter, Depends
from typing import List

from models.schemas import ActionResult, RequestStatusUpdate, RoomRequest, RoomRequestData
from routers.dependencies import get_room_request_store
from service.room_requests import RoomRequestStore

# Create a router instance
router = APIRouter()


@router.get("/room-requests", response_model=List[RoomRequest])
async def list_room_requests(email: str = "", store: RoomRequestStore = Depends(get_room_request_store)):
    """All room requests of the admin tenant, newest first."""
    return store.list(email)


@router.get("/room-requests/faculty", response_model=List[RoomRequest])
async def list_faculty_room_requests(faculty_email: str, email: str = "",
                                     store: RoomRequestStore = Depends(get_room_request_store)):
    """Requests filed by one faculty member."""
    return store.list_for_faculty(email, faculty_email)


@router.get("/room-requests/approved", response_model=List[RoomRequest])
async def list_approved_room_requests(email: str = "", store: RoomRequestStore = Depends(get_room_request_store)):
    """Approved requests (including releases) in the order they were stored."""
    return store.list_approved(email)


@router.post("/room-requests", response_model=ActionResult)
async def create_room_request(data: RoomRequestData, email: str = "",
                              store: RoomRequestStore = Depends(get_room_request_store)):
    """File a new request; it always starts out pending."""
    return store.create(email, data)


@router.post("/room-requests/release", response_model=ActionResult)
async def release_room(data: RoomRequestData, email: str = "",
                       store: RoomRequestStore = Depends(get_room_request_store)):
    """Record a room as occupied without going through approval."""
    return store.release(email, data)


@router.put("/room-requests/{request_id}/status", response_model=ActionResult)
async def update_room_request_status(request_id: str, body: RequestStatusUpdate, email: str = "",
                                     store: RoomRequestStore = Depends(get_room_request_store)):
    """Approve or reject a request. Earlier decisions are not protected."""
    return store.update_status(email, request_id, body.status, body.admin_reason)
