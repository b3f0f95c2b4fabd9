"""
Per-tenant activity: class conduct status and faculty login history.
"""
from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import List

from models.schemas import ActionResult, ConductLogEntry, ConductStatusBody, FacultyLog, LoginLogBody
from routers.dependencies import get_conduct_store, get_faculty_log_store
from service.conduct import ConductLogStore
from service.faculty_logs import FacultyLogStore

# Create a router instance
router = APIRouter()


@router.get("/conduct-status", response_model=List[ConductLogEntry])
async def get_conduct_log(email: str = "", day: date = Query(..., alias="date"),
                          store: ConductLogStore = Depends(get_conduct_store)):
    """Conduct entries recorded for one calendar day."""
    return store.for_day(email, day)


@router.put("/conduct-status", response_model=ActionResult)
async def set_conduct_status(data: ConductStatusBody, email: str = "",
                             store: ConductLogStore = Depends(get_conduct_store)):
    return store.set_status(email, data.class_key, data.faculty_email, data.date, data.status)


@router.get("/faculty-logs", response_model=List[FacultyLog])
async def list_faculty_logs(email: str = "", store: FacultyLogStore = Depends(get_faculty_log_store)):
    """Login history, newest first."""
    return store.list(email)


@router.post("/faculty-logs", response_model=ActionResult)
async def add_faculty_login(data: LoginLogBody, email: str = "",
                            store: FacultyLogStore = Depends(get_faculty_log_store)):
    return store.add_login(email, data.faculty_name, data.faculty_email)
