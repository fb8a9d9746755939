# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Points the storage dependencies at per-test temporary directories
# =============================================================================

import os
import tempfile

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

_TEST_VAR_DIR = tempfile.mkdtemp(prefix="project-apply-tests-")

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("APPLICATION_ROOT", os.path.join(_TEST_VAR_DIR, "project-apply"))
os.environ.setdefault("DISPLAY_ROOT", os.path.join(_TEST_VAR_DIR, "project-display"))

import json

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_display_root, get_storage_service
from app.main import app
from core.services.storage_service import StorageService


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def storage_root(tmp_path):
    root = tmp_path / "project-apply"
    root.mkdir()
    return root


@pytest.fixture
def display_root(tmp_path):
    root = tmp_path / "project-display"
    (root / "avatar").mkdir(parents=True)
    (root / "poster").mkdir(parents=True)
    return root


@pytest.fixture
def storage(storage_root):
    return StorageService(storage_root)


@pytest.fixture
def client(storage, display_root):
    """TestClient with storage and display roots in temporary directories."""
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_display_root] = lambda: display_root
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_meta_dict():
    """Metadata that passes every validation rule."""
    return {
        "project_name": "Demo",
        "author_name": "A",
        "author_link": "https://x.com",
        "brief": "demo",
        "links": [
            {"platform": "web", "url": "https://x.com/demo", "is_default": True},
        ],
    }


@pytest.fixture
def cover_bytes():
    """100 KB fake PNG payload."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * (100 * 1024 - 8)


@pytest.fixture
def avatar_bytes():
    """50 KB fake JPEG payload."""
    return b"\xff\xd8\xff\xe0" + b"\x00" * (50 * 1024 - 4)


@pytest.fixture
def submit(client, sample_meta_dict, cover_bytes, avatar_bytes):
    """
    Post a submission, overriding any part.

    Pass meta=None / cover=None / avatar=None to leave a part out.
    """
    _missing = object()

    def _submit(meta=_missing, cover=_missing, avatar=_missing):
        if meta is _missing:
            meta = sample_meta_dict
        if cover is _missing:
            cover = ("cover.png", cover_bytes, "image/png")
        if avatar is _missing:
            avatar = ("avatar.jpg", avatar_bytes, "image/jpeg")

        data = {}
        if meta is not None:
            data["meta"] = meta if isinstance(meta, str) else json.dumps(meta, ensure_ascii=False)

        files = {}
        if cover is not None:
            files["cover"] = cover
        if avatar is not None:
            files["avatar"] = avatar

        # An empty files dict would make the client send urlencoded data
        if not files:
            files["placeholder"] = ("placeholder.txt", b"x", "text/plain")

        return client.post("/project/apply", data=data, files=files)

    return _submit
