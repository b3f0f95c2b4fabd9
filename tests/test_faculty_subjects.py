"""
Test the faculty roster and subject catalogue stores.
"""
import pytest
from werkzeug.security import check_password_hash

from models.schemas import FacultyCreate, FacultyUpdate, Subject, SubjectData
from service.faculty import FacultyStore
from service.json_store import tenant_key
from service.subjects import SubjectStore

ADMIN = "admin@school.edu"


def get_faculty_data(email="ab@school.edu"):
    return FacultyCreate(
        name="Alice Brown",
        abbreviation="AB",
        email=email,
        password="secret123",
        department="Computer Science",
        weekly_max_hours=18,
        weekly_off_days=["Saturday"],
    )


def get_subject_data(code="CS101"):
    return SubjectData(
        name="Data Structures",
        code=code,
        type="Theory+Lab",
        department_id="d1",
        program_id="p1",
        year_id="y1",
        faculty_emails=["ab@school.edu"],
        theory_credits=3,
        lab_credits=1,
    )


@pytest.fixture
def faculty_store(backend):
    return FacultyStore(backend)


@pytest.fixture
def subject_store(backend):
    return SubjectStore(backend)


def test_create_faculty_hashes_password(faculty_store, backend):
    result = faculty_store.create(ADMIN, get_faculty_data())

    assert result.success is True
    assert result.message == "Faculty account created successfully."
    member = faculty_store.get(ADMIN, "ab@school.edu")
    assert member.password != "secret123"
    assert check_password_hash(member.password, "secret123")
    assert member.password_last_changed is not None

    raw = backend.read(tenant_key(ADMIN, "faculty.json"))
    assert raw[0]["weeklyMaxHours"] == 18


def test_duplicate_faculty_email_rejected(faculty_store):
    faculty_store.create(ADMIN, get_faculty_data())

    result = faculty_store.create(ADMIN, get_faculty_data())

    assert result.success is False
    assert result.message == "A faculty member with this email already exists."
    assert len(faculty_store.list(ADMIN)) == 1


def test_update_faculty_keeps_password_when_omitted(faculty_store):
    faculty_store.create(ADMIN, get_faculty_data())
    original_hash = faculty_store.get(ADMIN, "ab@school.edu").password

    result = faculty_store.update(ADMIN, FacultyUpdate(
        name="Alice B. Brown",
        abbreviation="ABB",
        email="ab@school.edu",
        department="Mathematics",
        weekly_max_hours=12,
    ))

    assert result.message == "Faculty account updated successfully."
    member = faculty_store.get(ADMIN, "ab@school.edu")
    assert member.abbreviation == "ABB"
    assert member.weekly_off_days == []
    assert member.password == original_hash


def test_update_faculty_replaces_password(faculty_store):
    faculty_store.create(ADMIN, get_faculty_data())

    faculty_store.update(ADMIN, FacultyUpdate(
        name="Alice Brown", abbreviation="AB", email="ab@school.edu",
        department="Computer Science", weekly_max_hours=18, password="newpass99",
    ))

    assert check_password_hash(faculty_store.get(ADMIN, "ab@school.edu").password, "newpass99")


def test_unlock_and_disable_two_factor(faculty_store, backend):
    backend.write(tenant_key(ADMIN, "faculty.json"), [{
        "name": "Alice Brown",
        "abbreviation": "AB",
        "email": "ab@school.edu",
        "department": "Computer Science",
        "isTwoFactorEnabled": True,
        "twoFactorPin": "hashed-pin",
        "twoFactorAttempts": 3,
        "isLocked": True,
    }])

    assert faculty_store.unlock(ADMIN, "ab@school.edu").message == "Faculty account unlocked successfully."
    member = faculty_store.get(ADMIN, "ab@school.edu")
    assert member.is_locked is False
    assert member.two_factor_attempts == 0
    assert member.is_two_factor_enabled is True

    assert faculty_store.disable_two_factor(ADMIN, "ab@school.edu").success
    member = faculty_store.get(ADMIN, "ab@school.edu")
    assert member.is_two_factor_enabled is False
    assert member.two_factor_pin is None
    assert member.two_factor_disabled_by_admin is True


def test_delete_faculty(faculty_store):
    faculty_store.create(ADMIN, get_faculty_data())

    assert faculty_store.delete(ADMIN, "ab@school.edu").message == "Faculty account deleted successfully."
    assert faculty_store.delete(ADMIN, "ab@school.edu").message == "Faculty member not found."


def test_faculty_requires_tenant(faculty_store):
    assert faculty_store.list("") == []
    assert faculty_store.create("", get_faculty_data()).message == "Admin email is required."


def test_create_subject(subject_store):
    result = subject_store.create(ADMIN, get_subject_data())

    assert result.message == "Subject created successfully."
    subject = subject_store.list(ADMIN)[0]
    assert subject.id
    assert subject.type == "Theory+Lab"


def test_duplicate_subject_code_rejected(subject_store):
    subject_store.create(ADMIN, get_subject_data())

    result = subject_store.create(ADMIN, get_subject_data())

    assert result.success is False
    assert result.message == "A subject with this code already exists."


def test_update_subject(subject_store):
    subject_store.create(ADMIN, get_subject_data("CS101"))
    subject_store.create(ADMIN, get_subject_data("CS102"))
    first, second = subject_store.list(ADMIN)

    clash = Subject(**{**second.model_dump(), "code": "CS101"})
    assert subject_store.update(ADMIN, clash).message == "Another subject with this code already exists."

    renamed = Subject(**{**second.model_dump(), "name": "Algorithms"})
    assert subject_store.update(ADMIN, renamed).message == "Subject updated successfully."
    assert [s.name for s in subject_store.list(ADMIN)] == ["Data Structures", "Algorithms"]

    ghost = Subject(**{**first.model_dump(), "id": "missing"})
    assert subject_store.update(ADMIN, ghost).message == "Subject not found."


def test_delete_subject(subject_store):
    subject_store.create(ADMIN, get_subject_data())
    subject = subject_store.list(ADMIN)[0]

    assert subject_store.delete(ADMIN, subject.id).message == "Subject deleted successfully."
    assert subject_store.list(ADMIN) == []
    assert subject_store.delete(ADMIN, subject.id).message == "Subject not found."
