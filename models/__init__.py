"""
Data models and Pydantic schemas for the scheduling data API.
"""
from .schemas import (
    CamelModel,
    StoredModel,
    ActionResult,
    RequestStatus,
    RoomRequestData,
    RoomRequest,
    RequestStatusUpdate,
    PublishedSchedule,
    PublishScheduleBody,
    Section,
    Year,
    Program,
    Department,
    NameBody,
    NamesBody,
    SectionBody,
    Room,
    Floor,
    Building,
    RoomBody,
    RoomIdsBody,
    RoomListing,
    Faculty,
    FacultyCreate,
    FacultyProfile,
    FacultyUpdate,
    SubjectType,
    SubjectData,
    Subject,
    Admin,
    AdminCreate,
    AdminUpdate,
    AdminProfile,
    AdminDeleteBody,
    AdminUnlockBody,
    AdminTwoFactorBody,
    SuperAdmin,
    SuperAdminCreate,
    SuperAdminUpdate,
    SuperAdminProfile,
    DeveloperLinks,
    Developer,
    DeveloperPageContent,
    LogoBody,
    LogoResponse,
    ConductStatus,
    ConductLogEntry,
    ConductStatusBody,
    FacultyLog,
    LoginLogBody,
    NewClass,
    CheckConflictInput,
    CheckConflictOutput,
    SuggestImprovementsInput,
    SuggestImprovementsOutput,
    RoomAvailabilityStatus,
    CheckRoomAvailabilityInput,
    RoomStatus,
    CheckRoomAvailabilityOutput,
)

__all__ = [
    "CamelModel",
    "StoredModel",
    "ActionResult",
    "RequestStatus",
    "RoomRequestData",
    "RoomRequest",
    "RequestStatusUpdate",
    "PublishedSchedule",
    "PublishScheduleBody",
    "Section",
    "Year",
    "Program",
    "Department",
    "NameBody",
    "NamesBody",
    "SectionBody",
    "Room",
    "Floor",
    "Building",
    "RoomBody",
    "RoomIdsBody",
    "RoomListing",
    "Faculty",
    "FacultyCreate",
    "FacultyProfile",
    "FacultyUpdate",
    "SubjectType",
    "SubjectData",
    "Subject",
    "Admin",
    "AdminCreate",
    "AdminUpdate",
    "AdminProfile",
    "AdminDeleteBody",
    "AdminUnlockBody",
    "AdminTwoFactorBody",
    "SuperAdmin",
    "SuperAdminCreate",
    "SuperAdminUpdate",
    "SuperAdminProfile",
    "DeveloperLinks",
    "Developer",
    "DeveloperPageContent",
    "LogoBody",
    "LogoResponse",
    "ConductStatus",
    "ConductLogEntry",
    "ConductStatusBody",
    "FacultyLog",
    "LoginLogBody",
    "NewClass",
    "CheckConflictInput",
    "CheckConflictOutput",
    "SuggestImprovementsInput",
    "SuggestImprovementsOutput",
    "RoomAvailabilityStatus",
    "CheckRoomAvailabilityInput",
    "RoomStatus",
    "CheckRoomAvailabilityOutput",
]
