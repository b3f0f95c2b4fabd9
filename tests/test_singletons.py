"""
Test the global singleton stores: super admin, developers and the logo.
"""
import base64

from werkzeug.security import check_password_hash

from models.schemas import Developer, DeveloperPageContent, SuperAdminCreate, SuperAdminUpdate
from service import json_store
from service.developers import DEFAULT_PAGE_CONTENT, DeveloperStore
from service.logo import LogoStore
from service.super_admin import SuperAdminStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def get_super_admin_data():
    return SuperAdminCreate(name="Root Admin", email="root@school.edu", password="supersecret")


def test_super_admin_sign_up_only_once(backend):
    store = SuperAdminStore(backend)
    assert store.exists() is False

    result = store.create(get_super_admin_data())
    assert result.success is True
    assert result.message == "Super admin account created successfully."
    assert store.exists() is True
    assert check_password_hash(store.get().password, "supersecret")

    second = store.create(SuperAdminCreate(name="Intruder", email="x@evil.io", password="password1"))
    assert second.success is False
    assert second.message == "A super admin account already exists. Sign up is disabled."
    assert store.get().email == "root@school.edu"


def test_empty_super_admin_document(backend):
    backend.write("super-admin.json", {})
    assert SuperAdminStore(backend).get() is None
    assert SuperAdminStore(backend).exists() is False


def test_incomplete_super_admin_record_still_blocks_sign_up(backend):
    """Test a stored record with an email but no name is never overwritten."""
    backend.write("super-admin.json", {"email": "root@x.com", "password": "h"})
    store = SuperAdminStore(backend)

    assert store.exists() is True
    result = store.create(SuperAdminCreate(name="Intruder", email="x@evil.io", password="password1"))

    assert result.success is False
    assert result.message == "A super admin account already exists. Sign up is disabled."
    assert backend.read("super-admin.json") == {"email": "root@x.com", "password": "h"}


def test_unreadable_super_admin_record_still_blocks_sign_up(backend):
    backend.write("super-admin.json", {"email": "root@x.com", "isLocked": "maybe"})
    store = SuperAdminStore(backend)

    assert store.get() is None
    assert store.create(get_super_admin_data()).success is False
    assert backend.read("super-admin.json")["email"] == "root@x.com"


def test_super_admin_update_checks_current_password(backend):
    store = SuperAdminStore(backend)
    store.create(get_super_admin_data())

    wrong = store.update(SuperAdminUpdate(name="Root", email="root@school.edu", current_password="nope"))
    assert wrong.success is False
    assert store.get().name == "Root Admin"

    result = store.update(SuperAdminUpdate(
        name="Root", email="root@school.edu", current_password="supersecret", password="evenmoresecret",
    ))
    assert result.success is True
    assert store.get().name == "Root"
    assert check_password_hash(store.get().password, "evenmoresecret")


def test_developers(backend):
    backend.write("developers.json", [
        {"id": "dev1", "name": "Jane", "role": "Backend", "links": {"github": "https://github.com/jane"}},
    ])
    store = DeveloperStore(backend)

    developers = store.list()
    assert developers[0].links.github == "https://github.com/jane"

    updated = developers[0].model_copy(update={"bio": "Writes the stores."})
    assert store.update(updated).message == "Developer profile updated successfully."
    assert store.list()[0].bio == "Writes the stores."

    result = store.update(Developer(id="dev9", name="Ghost"))
    assert result.success is False
    assert result.message == "Developer not found."


def test_developer_page_content_defaults(backend):
    store = DeveloperStore(backend)
    assert store.get_page_content() == DEFAULT_PAGE_CONTENT

    content = DeveloperPageContent(
        about_title="About", about_description="We build things.",
        team_title="Team", team_description="People",
    )
    assert store.update_page_content(content).success
    assert store.get_page_content() == content
    assert backend.read("developer-page-content.json")["aboutTitle"] == "About"


def test_logo_absent(tmp_path):
    assert LogoStore(tmp_path / "public").get() is None


def test_logo_update(tmp_path):
    calls = []
    store = LogoStore(tmp_path / "public", on_update=lambda: calls.append(True))
    data_url = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

    result = store.update(data_url)

    assert result.success is True
    assert result.message == "Logo updated successfully."
    assert (tmp_path / "public" / "logo.png").read_bytes() == PNG_BYTES
    assert store.get().startswith("/static/logo.png?v=")
    assert calls == [True]


def test_logo_accepts_bare_base64(tmp_path):
    store = LogoStore(tmp_path)
    assert store.update(base64.b64encode(PNG_BYTES).decode()).success


def test_logo_rejects_invalid_data(tmp_path):
    calls = []
    store = LogoStore(tmp_path / "public", on_update=lambda: calls.append(True))

    assert store.update("data:image/png;base64,***not base64***").message == "Invalid logo data."
    assert store.update("data:image/png;base64,").message == "Invalid logo data."
    assert store.get() is None
    assert calls == []


def test_logo_update_replaces_the_file_atomically(tmp_path):
    public_dir = tmp_path / "public"
    store = LogoStore(public_dir)
    store.update(base64.b64encode(b"old logo").decode())

    assert store.update(base64.b64encode(PNG_BYTES).decode()).success

    assert (public_dir / "logo.png").read_bytes() == PNG_BYTES
    assert [p.name for p in public_dir.iterdir()] == ["logo.png"]


def test_failed_logo_write_keeps_the_old_logo(tmp_path, monkeypatch):
    public_dir = tmp_path / "public"
    store = LogoStore(public_dir)
    store.update(base64.b64encode(b"old logo").decode())

    def fail_replace(src, dst):
        raise OSError("No space left on device")

    monkeypatch.setattr(json_store.os, "replace", fail_replace)
    result = store.update(base64.b64encode(PNG_BYTES).decode())

    assert result.success is False
    assert result.message == "An internal error occurred."
    assert (public_dir / "logo.png").read_bytes() == b"old logo"
    assert [p.name for p in public_dir.iterdir()] == ["logo.png"]
