"""
Shared fixtures: every test gets its own data and public directories.
"""
import pytest
from fastapi.testclient import TestClient

from main import app
from routers.dependencies import get_backend, get_logo_store, get_schedule_advisor
from service.json_store import JsonFileBackend
from service.logo import LogoStore
from service.schedule_advisor import RuleBasedScheduleAdvisor


@pytest.fixture
def backend(tmp_path):
    return JsonFileBackend(tmp_path / "data")


@pytest.fixture
def public_dir(tmp_path):
    return tmp_path / "public"


@pytest.fixture
def client(backend, public_dir):
    app.dependency_overrides[get_backend] = lambda: backend
    app.dependency_overrides[get_logo_store] = lambda: LogoStore(public_dir)
    app.dependency_overrides[get_schedule_advisor] = lambda: RuleBasedScheduleAdvisor()
    yield TestClient(app)
    app.dependency_overrides.clear()
