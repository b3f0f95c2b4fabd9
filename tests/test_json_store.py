"""
Test the persistence primitives shared by every store.
"""
import re
from datetime import date

from models.schemas import AdminCreate, Department, FacultyCreate, RoomRequestData, SubjectData
from service.admins import AdminStore
from service.buildings import BuildingStore
from service.conduct import ConductLogStore
from service.developers import DeveloperStore
from service.faculty import FacultyStore
from service.faculty_logs import FacultyLogStore
from service.json_store import (
    INTERNAL_ERROR,
    InMemoryBackend,
    JsonFileBackend,
    commit,
    dump_records,
    new_id,
    parse_iso,
    split_records,
    tenant_key,
    utc_now_iso,
)
from service.departments import DepartmentStore
from service.published_schedule import PublishedScheduleStore
from service.room_requests import RoomRequestStore
from service.subjects import SubjectStore

ADMIN = "admin@school.edu"


class FailingBackend(InMemoryBackend):
    """Reads work, every write fails like a full disk."""

    def write(self, key, data):
        raise OSError("No space left on device")


def get_room_request_data():
    return RoomRequestData(
        faculty_email="ab@school.edu",
        faculty_name="Alice Brown",
        room_name="Room 101",
        date="2024-09-12",
        start_time="09:00",
        end_time="10:00",
        reason="Extra lecture",
    )


def test_tenant_key_sanitizes_email():
    """Test every character outside [A-Za-z0-9._-] becomes an underscore."""
    assert tenant_key("admin@school.edu", "faculty.json") == "admins/admin_school.edu/faculty.json"
    assert tenant_key("a b/../c@x.io", "f.json") == "admins/a_b_.._c_x.io/f.json"


def test_new_id_format():
    """Test ids are <milliseconds>-<7 base36 chars>."""
    identifier = new_id()
    assert re.fullmatch(r"\d{13,}-[0-9a-z]{7}", identifier)


def test_utc_now_iso_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_now_iso())


def test_parse_iso_orders_unparsable_first():
    assert parse_iso("garbage") < parse_iso("2024-01-01T00:00:00.000Z")
    assert parse_iso("2024-01-02T00:00:00.000Z") > parse_iso("2024-01-01T23:59:59.999Z")


def test_json_file_backend_writes_pretty_json(tmp_path):
    """Test documents are stored as indented JSON under the root."""
    backend = JsonFileBackend(tmp_path)
    backend.write("admins/x/doc.json", [{"name": "Café"}])

    path = tmp_path / "admins" / "x" / "doc.json"
    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert "Café" in text
    assert "\n  " in text
    assert backend.read("admins/x/doc.json") == [{"name": "Café"}]
    # No temporary files are left behind
    assert [p.name for p in path.parent.iterdir()] == ["doc.json"]


def test_missing_empty_and_malformed_files_read_as_none(tmp_path):
    backend = JsonFileBackend(tmp_path)
    assert backend.read("missing.json") is None

    (tmp_path / "empty.json").write_text("   ", encoding="utf-8")
    assert backend.read("empty.json") is None

    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    assert backend.read("broken.json") is None


def test_split_records_keeps_items_that_fail_validation():
    records, unparsed = split_records([{"id": "d1", "name": "CSE"}, {"unexpected": True}], Department)

    assert [d.id for d in records] == ["d1"]
    assert unparsed == [{"unexpected": True}]


def test_wrong_shaped_document_reads_as_empty_and_is_never_overwritten(backend):
    """Test a non-array document lists nothing and refuses writes."""
    backend.write("departments.json", {"id": "d1", "name": "CSE"})
    store = DepartmentStore(backend)

    assert store.list() == []
    result = store.create("ECE")

    assert result.success is False
    assert result.message == INTERNAL_ERROR
    assert backend.read("departments.json") == {"id": "d1", "name": "CSE"}


def test_malformed_tenant_file_lists_nothing(backend):
    key = tenant_key("admin@school.edu", "room-requests.json")
    path = backend.path_for(key)
    path.parent.mkdir(parents=True)
    path.write_text("[{\"id\": ", encoding="utf-8")

    assert RoomRequestStore(backend).list("admin@school.edu") == []


def test_dump_records_uses_camel_case_and_drops_none():
    records = [Department(id="d1", name="CSE")]
    assert dump_records(records) == [{"id": "d1", "name": "CSE", "programs": []}]


def test_commit_reports_write_failure():
    result = commit(FailingBackend(), "x.json", [], "Saved.")
    assert result.success is False
    assert result.message == INTERNAL_ERROR


def test_store_write_failures_become_failed_results():
    """Test stores return their generic failure message instead of raising."""
    backend = FailingBackend()

    result = RoomRequestStore(backend).create("admin@school.edu", get_room_request_data())
    assert result.success is False
    assert result.message == "An internal error occurred."

    result = PublishedScheduleStore(backend).publish("admin@school.edu", "## A")
    assert result.success is False
    assert result.message == "An internal error occurred while publishing the schedule."

    result = DepartmentStore(backend).create("CSE")
    assert result.success is False
    assert result.message == "An internal error occurred."

    assert FacultyStore(backend).list("admin@school.edu") == []


def test_concurrent_read_modify_write_last_writer_wins():
    """Test two interleaved cycles lose the first update (documented race)."""
    backend = InMemoryBackend()
    first_store, second_store = DepartmentStore(backend), DepartmentStore(backend)
    first = first_store._read()
    second = second_store._read()

    first.append(Department(id="d1", name="CSE"))
    first_store._write(first, "Saved.")
    second.append(Department(id="d2", name="ECE"))
    second_store._write(second, "Saved.")

    assert [d.name for d in DepartmentStore(backend).list()] == ["ECE"]


def test_in_memory_backend_round_trip():
    backend = InMemoryBackend()
    assert backend.read("a.json") is None
    backend.write("a.json", {"content": "x"})
    assert backend.read("a.json") == {"content": "x"}
    backend.documents["a.json"] = "oops"
    assert backend.read("a.json") is None


# ===========================
# Records that fail validation survive rewrites
# ===========================

def stored_room_request(request_id="r1"):
    return {
        "id": request_id,
        "facultyEmail": "ab@school.edu",
        "facultyName": "Alice Brown",
        "roomName": "Room 101",
        "date": "2024-09-12",
        "startTime": "09:00",
        "endTime": "10:00",
        "reason": "",
        "status": "pending",
        "requestedAt": "2024-09-01T10:00:00.000Z",
    }


def test_room_request_missing_faculty_name_survives_create(backend):
    key = tenant_key(ADMIN, "room-requests.json")
    incomplete = stored_room_request("r2")
    del incomplete["facultyName"]
    backend.write(key, [stored_room_request("r1"), incomplete])
    store = RoomRequestStore(backend)

    assert [r.id for r in store.list(ADMIN)] == ["r1"]
    assert store.create(ADMIN, get_room_request_data()).success

    raw = backend.read(key)
    assert len(raw) == 3
    assert incomplete in raw
    assert raw[0]["id"] == "r1"


def test_unknown_keys_survive_a_rewrite(backend):
    key = tenant_key(ADMIN, "room-requests.json")
    record = stored_room_request()
    record["roomNote"] = "Projector broken"
    backend.write(key, [record])

    assert RoomRequestStore(backend).update_status(ADMIN, "r1", "approved").success

    raw = backend.read(key)
    assert raw[0]["roomNote"] == "Projector broken"
    assert raw[0]["status"] == "approved"


def test_faculty_without_abbreviation_are_kept(backend):
    """Test roster entries written without an abbreviation still load and survive a create."""
    key = tenant_key(ADMIN, "faculty.json")
    backend.write(key, [
        {"name": f"Teacher {i}", "email": f"t{i}@school.edu", "password": "hash", "department": "CSE"}
        for i in range(3)
    ] + [{"name": "No Email"}])
    store = FacultyStore(backend)

    assert len(store.list(ADMIN)) == 3
    result = store.create(ADMIN, FacultyCreate(
        name="Dana White", abbreviation="DW", email="dw@school.edu", password="secret1",
        department="CSE", weekly_max_hours=12,
    ))

    assert result.success is True
    raw = backend.read(key)
    assert [r.get("email") for r in raw] == [
        "t0@school.edu", "t1@school.edu", "t2@school.edu", "dw@school.edu", None,
    ]
    assert raw[-1] == {"name": "No Email"}


def test_invalid_subject_survives_create(backend):
    key = tenant_key(ADMIN, "subjects.json")
    backend.write(key, [{"id": "s9", "name": "Orphan"}])
    store = SubjectStore(backend)

    assert store.list(ADMIN) == []
    assert store.create(ADMIN, SubjectData(
        name="Algorithms", code="CS201", type="Theory",
        department_id="d1", program_id="p1", year_id="y1",
    )).success

    raw = backend.read(key)
    assert [r["name"] for r in raw] == ["Algorithms", "Orphan"]


def test_invalid_department_survives_create(backend):
    backend.write("departments.json", [{"name": "No id"}])

    assert DepartmentStore(backend).create("CSE").success

    raw = backend.read("departments.json")
    assert [d["name"] for d in raw] == ["CSE", "No id"]


def test_invalid_building_survives_delete(backend):
    backend.write("buildings.json", [{"id": "b1", "name": "Main", "floors": []}, {"id": "b9"}])

    assert BuildingStore(backend).delete("b1").success

    assert backend.read("buildings.json") == [{"id": "b9"}]


def test_invalid_developer_survives_update(backend):
    backend.write("developers.json", [{"id": "dev1", "name": "Jane"}, {"name": "No id"}])
    store = DeveloperStore(backend)
    developer = store.list()[0].model_copy(update={"role": "Backend"})

    assert store.update(developer).success

    raw = backend.read("developers.json")
    assert raw[0]["role"] == "Backend"
    assert raw[1] == {"name": "No id"}


def test_invalid_admin_survives_create(backend):
    backend.write("admin.json", [{"name": "No Email"}])

    assert AdminStore(backend).create(AdminCreate(name="Ann", email="ann@school.edu", password="password1")).success

    raw = backend.read("admin.json")
    assert [a.get("email") for a in raw] == ["ann@school.edu", None]


def test_invalid_conduct_entry_survives_set_status(backend):
    key = tenant_key(ADMIN, "conduct-status.json")
    backend.write(key, [{"classKey": "broken"}])

    assert ConductLogStore(backend).set_status(ADMIN, "CSE-A-Monday-09:00", "ab@school.edu",
                                               date.today(), "conducted").success

    raw = backend.read(key)
    assert len(raw) == 2
    assert raw[1] == {"classKey": "broken"}


def test_invalid_login_log_survives_add(backend):
    key = tenant_key(ADMIN, "faculty-logs.json")
    backend.write(key, [{"id": "l9"}])

    assert FacultyLogStore(backend).add_login(ADMIN, "Alice Brown", "ab@school.edu").success

    raw = backend.read(key)
    assert raw[0]["facultyEmail"] == "ab@school.edu"
    assert raw[1] == {"id": "l9"}
