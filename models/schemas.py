import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Literal


class CamelModel(BaseModel):
    """Base for records persisted as camelCase JSON (facultyEmail, requestedAt, ...)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class StoredModel(CamelModel):
    """Persisted record. Keys this model does not know survive a rewrite."""

    class Config:
        extra = "allow"


class ActionResult(BaseModel):
    """Outcome of a store operation. Stores never raise for not-found or I/O errors."""
    success: bool
    message: str


# ===========================
# Room Request Models
# ===========================

RequestStatus = Literal["pending", "approved", "rejected"]


class RoomRequestData(CamelModel):
    """Fields supplied by the faculty member when asking for (or releasing) a room"""
    faculty_email: str
    faculty_name: str
    room_name: str
    date: str          # calendar date, e.g. "2024-09-12"
    start_time: str    # HH:MM
    end_time: str      # HH:MM
    reason: str = ""


class RoomRequest(RoomRequestData, StoredModel):
    id: str
    status: RequestStatus = "pending"
    requested_at: str  # ISO-8601
    admin_reason: Optional[str] = None


class RequestStatusUpdate(CamelModel):
    status: RequestStatus
    admin_reason: Optional[str] = None


# ===========================
# Published Schedule Models
# ===========================

class PublishedSchedule(CamelModel):
    """Single Markdown document per tenant"""
    content: str = ""
    published_at: str = ""


class PublishScheduleBody(CamelModel):
    content: str


# ===========================
# Department Hierarchy Models
# ===========================

class Section(StoredModel):
    id: str
    name: str
    student_count: int = 0


class Year(StoredModel):
    id: str
    name: str
    sections: List[Section] = []


class Program(StoredModel):
    id: str
    name: str
    years: List[Year] = []


class Department(StoredModel):
    id: str
    name: str
    programs: List[Program] = []


class NameBody(CamelModel):
    name: str = Field(min_length=1)


class NamesBody(CamelModel):
    """Bulk creation: one entity per name, single file rewrite"""
    names: List[str] = Field(min_length=1)


class SectionBody(CamelModel):
    name: str = Field(min_length=1)
    student_count: int = Field(ge=0)


# ===========================
# Building / Floor / Room Models
# ===========================

class Room(StoredModel):
    id: str
    name: str
    capacity: int = 0


class Floor(StoredModel):
    id: str
    name: str
    rooms: List[Room] = []


class Building(StoredModel):
    id: str
    name: str
    floors: List[Floor] = []


class RoomBody(CamelModel):
    name: str = Field(min_length=1)
    capacity: int = Field(ge=0)


class RoomIdsBody(CamelModel):
    room_ids: List[str] = Field(min_length=1)


class RoomListing(Room):
    """Room flattened out of the building tree"""
    building_name: Optional[str] = None
    floor_name: Optional[str] = None


# ===========================
# Faculty Models
# ===========================

class Faculty(StoredModel):
    name: str
    abbreviation: str = ""
    email: str
    password: Optional[str] = None  # stored hashed
    department: str = ""
    weekly_max_hours: int = 0
    weekly_off_days: List[str] = []
    is_two_factor_enabled: bool = False
    two_factor_pin: Optional[str] = None  # stored hashed
    two_factor_attempts: int = 0
    is_locked: bool = False
    two_factor_disabled_by_admin: bool = False
    password_last_changed: Optional[str] = None


class FacultyCreate(CamelModel):
    name: str = Field(min_length=1)
    abbreviation: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    department: str
    weekly_max_hours: int = Field(ge=0)
    weekly_off_days: List[str] = []


class FacultyProfile(CamelModel):
    """Faculty record as exposed over HTTP, without password or PIN hashes"""
    name: str
    abbreviation: str
    email: str
    department: str
    weekly_max_hours: int = 0
    weekly_off_days: List[str] = []
    is_two_factor_enabled: bool = False
    two_factor_attempts: int = 0
    is_locked: bool = False
    two_factor_disabled_by_admin: bool = False
    password_last_changed: Optional[str] = None


class FacultyUpdate(CamelModel):
    """Email is the key and cannot change; password only replaced when given"""
    name: str = Field(min_length=1)
    abbreviation: str = Field(min_length=1)
    email: str
    department: str
    weekly_max_hours: int = Field(ge=0)
    weekly_off_days: List[str] = []
    password: Optional[str] = None


# ===========================
# Subject Models
# ===========================

SubjectType = Literal["Theory", "Lab", "Theory+Lab", "Project"]


class SubjectData(CamelModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    type: SubjectType
    department_id: str
    program_id: str
    year_id: str
    faculty_emails: List[str] = []
    theory_credits: Optional[int] = None
    lab_credits: Optional[int] = None


class Subject(SubjectData):
    id: str


# ===========================
# Admin Registry Models
# ===========================

class Admin(StoredModel):
    """Tenant administrator; the email doubles as the tenant key"""
    name: str = ""
    email: str
    password: str  # stored hashed
    is_two_factor_enabled: bool = False
    two_factor_pin: Optional[str] = None  # stored hashed
    two_factor_attempts: int = 0
    is_locked: bool = False
    password_last_changed: Optional[str] = None


class AdminCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=8)


class AdminUpdate(CamelModel):
    """A new password needs the admin's current one"""
    name: str = Field(min_length=1)
    email: str
    password: Optional[str] = None
    current_password: Optional[str] = None


class AdminProfile(CamelModel):
    name: str
    email: str
    is_two_factor_enabled: bool = False
    two_factor_attempts: int = 0
    is_locked: bool = False
    password_last_changed: Optional[str] = None


class AdminDeleteBody(CamelModel):
    password: str = Field(min_length=1)


class AdminUnlockBody(CamelModel):
    security_key: str = Field(min_length=1)


class AdminTwoFactorBody(CamelModel):
    is_enabled: bool
    pin: Optional[str] = None
    current_password: str


# ===========================
# Singleton Models (super-admin, developers, logo)
# ===========================

class SuperAdmin(StoredModel):
    name: str = ""
    email: str
    password: str  # stored hashed
    is_two_factor_enabled: bool = False
    two_factor_pin: Optional[str] = None
    two_factor_attempts: int = 0
    is_locked: bool = False


class SuperAdminCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=8)


class SuperAdminUpdate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    current_password: str
    password: Optional[str] = None


class SuperAdminProfile(CamelModel):
    name: str
    email: str
    is_two_factor_enabled: bool = False
    is_locked: bool = False


class DeveloperLinks(CamelModel):
    email: str = ""
    github: str = ""
    linkedin: str = ""


class Developer(CamelModel):
    id: str
    name: str
    role: str = ""
    bio: str = ""
    avatar: str = ""
    hint: str = ""
    links: DeveloperLinks = DeveloperLinks()


class DeveloperPageContent(CamelModel):
    about_title: str
    about_description: str
    team_title: str
    team_description: str


class LogoBody(CamelModel):
    logo: str  # data URL, e.g. "data:image/png;base64,iVBOR..."


class LogoResponse(CamelModel):
    url: Optional[str] = None


# ===========================
# Conduct and Login Log Models
# ===========================

ConductStatus = Literal["conducted", "not-conducted"]


class ConductLogEntry(StoredModel):
    class_key: str      # class slot, e.g. "B.Tech - Year 1-Section A-Monday-09:00 - 10:00"
    faculty_email: str
    date: str           # YYYY-MM-DD
    status: ConductStatus


class ConductStatusBody(CamelModel):
    class_key: str = Field(min_length=1)
    faculty_email: str = Field(min_length=1)
    date: datetime.date
    status: ConductStatus


class FacultyLog(StoredModel):
    id: str
    faculty_name: str
    faculty_email: str
    timestamp: str  # ISO-8601
    type: Literal["login"] = "login"


class LoginLogBody(CamelModel):
    faculty_name: str = Field(min_length=1)
    faculty_email: str = Field(min_length=1)


# ===========================
# Schedule Advisor Models
# ===========================

class NewClass(CamelModel):
    """Candidate class checked against the current schedule"""
    subject: str
    faculty: str  # abbreviation, "NF" when no faculty is assigned
    room: str
    day: str
    time_slot: str
    section: str


class CheckConflictInput(CamelModel):
    current_schedule: str = ""  # Markdown, may be empty for the first class
    new_class: NewClass


class CheckConflictOutput(CamelModel):
    is_conflict: bool
    reason: Optional[str] = None


class SuggestImprovementsInput(CamelModel):
    schedule_details: str
    constraints: Optional[str] = None


class SuggestImprovementsOutput(CamelModel):
    suggested_improvements: str
    rationale: str


RoomAvailabilityStatus = Literal["Available", "Unavailable", "Partially Available"]


class CheckRoomAvailabilityInput(CamelModel):
    """Rooms checked over start_time..end_time on a date, or on each of days"""
    rooms_to_check: List[str] = Field(min_length=1)
    start_time: str  # HH:MM
    end_time: str    # HH:MM
    date: Optional[str] = None
    days: Optional[List[str]] = None
    schedule: str = ""


class RoomStatus(CamelModel):
    name: str
    status: RoomAvailabilityStatus
    reason: Optional[str] = None


class CheckRoomAvailabilityOutput(CamelModel):
    availability: List[RoomStatus]
    summary: str
