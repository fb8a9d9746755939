# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), which also lets
# tests point them at temporary directories via app.dependency_overrides.
# =============================================================================

from pathlib import Path
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.storage_service import StorageService


def get_storage_service() -> StorageService:
    """Storage writer bound to the configured application root."""
    return StorageService(settings.application_root_path)


def get_display_root() -> Path:
    """Directory holding approved avatar/ and poster/ images."""
    return settings.display_root_path


# Type aliases for dependency injection
StorageDep = Annotated[StorageService, Depends(get_storage_service)]
DisplayRootDep = Annotated[Path, Depends(get_display_root)]
