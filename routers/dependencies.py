"""
FastAPI dependency providers for the stores and the schedule advisor.

Everything hangs off get_backend, so tests swap the persistence layer with
app.dependency_overrides[get_backend].
"""
from typing import Optional

from fastapi import Depends, Query

from config.settings import settings
from service.admins import AdminStore
from service.buildings import BuildingStore
from service.conduct import ConductLogStore
from service.departments import DepartmentStore
from service.developers import DeveloperStore
from service.faculty import FacultyStore
from service.faculty_logs import FacultyLogStore
from service.json_store import JsonFileBackend, StoreBackend
from service.logo import LogoStore
from service.published_schedule import PublishedScheduleStore
from service.room_requests import RoomRequestStore
from service.schedule_advisor import ScheduleAdvisor, build_advisor
from service.subjects import SubjectStore
from service.super_admin import SuperAdminStore


def get_backend() -> StoreBackend:
    return JsonFileBackend(settings.data_dir)


def get_room_request_store(backend: StoreBackend = Depends(get_backend)) -> RoomRequestStore:
    return RoomRequestStore(backend)


def get_schedule_store(backend: StoreBackend = Depends(get_backend)) -> PublishedScheduleStore:
    return PublishedScheduleStore(backend)


def get_department_store(
    email: Optional[str] = Query(None, description="Admin email for a tenant-scoped hierarchy"),
    backend: StoreBackend = Depends(get_backend),
) -> DepartmentStore:
    return DepartmentStore(backend, admin_email=email)


def get_building_store(
    email: Optional[str] = Query(None, description="Admin email for tenant-scoped buildings"),
    backend: StoreBackend = Depends(get_backend),
) -> BuildingStore:
    return BuildingStore(backend, admin_email=email)


def get_faculty_store(backend: StoreBackend = Depends(get_backend)) -> FacultyStore:
    return FacultyStore(backend)


def get_subject_store(backend: StoreBackend = Depends(get_backend)) -> SubjectStore:
    return SubjectStore(backend)


def get_super_admin_store(backend: StoreBackend = Depends(get_backend)) -> SuperAdminStore:
    return SuperAdminStore(backend)


def get_developer_store(backend: StoreBackend = Depends(get_backend)) -> DeveloperStore:
    return DeveloperStore(backend)


def get_admin_store(backend: StoreBackend = Depends(get_backend)) -> AdminStore:
    return AdminStore(backend)


def get_conduct_store(backend: StoreBackend = Depends(get_backend)) -> ConductLogStore:
    return ConductLogStore(backend)


def get_faculty_log_store(backend: StoreBackend = Depends(get_backend)) -> FacultyLogStore:
    return FacultyLogStore(backend)


def get_logo_store() -> LogoStore:
    return LogoStore(settings.public_dir)


def get_schedule_advisor() -> ScheduleAdvisor:
    return build_advisor(
        settings.advisor_backend,
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.advisor_temperature,
    )
