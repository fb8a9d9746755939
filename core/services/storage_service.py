# =============================================================================
# core/services/storage_service.py - Submission Storage
# =============================================================================
# Writes accepted project applications to local disk:
#
#   <application-root>/<application_id>/
#       cover<ext>
#       avatar<ext>
#       meta.json
#
# meta.json is always written last. A directory without it is an incomplete
# submission whose id was never returned to the client.
# =============================================================================

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from pydantic import ValidationError

from app.exceptions import (
    ApplicationNotFoundError,
    StorageFailureError,
    StorageInitError,
    StorageStage,
)
from core.models.application import ApplicationMetadata, ProjectApplication

logger = logging.getLogger(__name__)

META_FILENAME = "meta.json"

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp() -> str:
    """Current UTC time as RFC3339 with second precision."""
    return datetime.now(timezone.utc).strftime(RFC3339_FORMAT)


def _copy_stream(src: BinaryIO, dst: Path) -> None:
    if hasattr(src, "seek"):
        src.seek(0)
    with open(dst, "wb") as out:
        shutil.copyfileobj(src, out)


class StorageService:
    """
    Service for persisting project applications under a storage root.

    Each submission owns one directory named by a fresh UUID, so concurrent
    submissions never write to the same path.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def init_root(self) -> None:
        """
        Make sure the storage root exists.

        Safe to call repeatedly. Called once at process startup.

        Raises:
            StorageInitError: If the directory cannot be created
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.critical(f"Cannot create storage root {self.root}: {e}")
            raise StorageInitError(str(self.root), str(e))

        logger.info(f"Storage root ready: {self.root}")

    def application_dir(self, application_id: str) -> Path:
        return self.root / application_id

    def persist(
        self,
        meta: ApplicationMetadata,
        cover_stream: BinaryIO,
        cover_ext: str,
        avatar_stream: BinaryIO,
        avatar_ext: str,
    ) -> tuple[str, str]:
        """
        Store both images and the application record.

        Args:
            meta: Validated application metadata
            cover_stream: Readable cover image stream
            cover_ext: Cover file extension including the dot (e.g. ".png")
            avatar_stream: Readable avatar image stream
            avatar_ext: Avatar file extension including the dot

        Returns:
            (application_id, submitted_at)

        Raises:
            StorageFailureError: With the stage that failed
        """
        application_id = str(uuid4())
        submitted_at = utc_timestamp()
        app_dir = self.application_dir(application_id)

        try:
            app_dir.mkdir(parents=True, exist_ok=False)
        except OSError as e:
            logger.error(f"Failed to create application directory {app_dir}: {e}")
            raise StorageFailureError(StorageStage.DIRECTORY, str(e))

        cover_path = app_dir / f"cover{cover_ext}"
        try:
            _copy_stream(cover_stream, cover_path)
        except OSError as e:
            logger.error(f"Failed to save cover image {cover_path}: {e}")
            raise StorageFailureError(StorageStage.COVER, str(e))

        avatar_path = app_dir / f"avatar{avatar_ext}"
        try:
            _copy_stream(avatar_stream, avatar_path)
        except OSError as e:
            logger.error(f"Failed to save avatar image {avatar_path}: {e}")
            raise StorageFailureError(StorageStage.AVATAR, str(e))

        application = ProjectApplication(
            application_id=application_id,
            submitted_at=submitted_at,
            meta=meta,
            cover_path=str(cover_path),
            avatar_path=str(avatar_path),
        )

        meta_path = app_dir / META_FILENAME
        try:
            meta_path.write_text(
                application.model_dump_json(indent=2, exclude_none=True),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Failed to save metadata {meta_path}: {e}")
            raise StorageFailureError(StorageStage.METADATA, str(e))

        logger.info(f"Stored application {application_id} in {app_dir}")
        return application_id, submitted_at

    def read_application(self, application_id: str) -> ProjectApplication:
        """
        Load a stored application record.

        Raises:
            ApplicationNotFoundError: If the id is unknown, the submission
                is incomplete, or meta.json cannot be parsed
        """
        # Ids are UUIDs; anything with a path separator is never one
        if not application_id or "/" in application_id or "\\" in application_id or application_id in (".", ".."):
            raise ApplicationNotFoundError(application_id)

        meta_path = self.application_dir(application_id) / META_FILENAME
        try:
            return ProjectApplication.model_validate_json(meta_path.read_bytes())
        except (FileNotFoundError, NotADirectoryError):
            raise ApplicationNotFoundError(application_id)
        except ValidationError as e:
            logger.warning(f"Unreadable record for application {application_id}: {e}")
            raise ApplicationNotFoundError(application_id)
