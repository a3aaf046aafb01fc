"""Pytest configuration and fixtures for backend tests."""

import json
import sys
from pathlib import Path

import pytest

# Add backend to path
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

from restspace.core.fs_adapter import FileSystemAdapter  # noqa: E402
from restspace.core.rest_manager import RestManager  # noqa: E402


def request_record(path: Path, name: str, method: str, **fields) -> dict:
    record = {
        "name": name,
        "method": method,
        "url": "",
        "headers": [],
        "body": None,
        "path": str(path),
        "response": None,
    }
    record.update(fields)
    return record


def write_request(directory: Path, name: str, method: str, **fields) -> Path:
    """Write a valid request file ``<name>.<method>`` into ``directory``."""
    path = directory / f"{name}.{method}"
    path.write_text(json.dumps(request_record(path, name, method, **fields)), encoding="utf-8")
    return path


@pytest.fixture
def temp_workspace(tmp_path) -> Path:
    """Create a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def rest_root(temp_workspace) -> Path:
    """Request tree root (not created yet)."""
    return temp_workspace / "http"


@pytest.fixture
def fs() -> FileSystemAdapter:
    return FileSystemAdapter()


@pytest.fixture
def rest(rest_root, fs) -> RestManager:
    return RestManager(str(rest_root), fs)


@pytest.fixture
def populated_root(rest_root) -> Path:
    """
    http/
        Users/
            Admin/
            List users.GET
        Login.POST
        Logout.DELETE
        notes.txt
    """
    (rest_root / "Users" / "Admin").mkdir(parents=True)
    write_request(rest_root / "Users", "List users", "GET")
    write_request(rest_root, "Login", "POST")
    write_request(rest_root, "Logout", "DELETE")
    (rest_root / "notes.txt").write_text("not a request")
    return rest_root
