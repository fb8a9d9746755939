# =============================================================================
# app/routers/apply.py - Project Application Intake
# =============================================================================
# Accepts a project application as multipart/form-data:
#   meta    JSON text (see core.models.application.ApplicationMetadata)
#   cover   image file, <= 5MB
#   avatar  image file, <= 2MB
#
# Steps run in a fixed order and the first failure decides the response.
# Nothing is written to disk until every check has passed.
# =============================================================================

import asyncio
import logging
import os
from pathlib import PurePath
from typing import AsyncGenerator

from fastapi import APIRouter, Request
from pydantic import ValidationError
from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser

from app.config import settings
from app.dependencies import StorageDep
from app.exceptions import (
    MalformedRequestError,
    MissingFieldError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationFailedError,
)
from core.models.application import ApplicationAccepted, ApplicationMetadata, ApplyResponse
from core.services.storage_service import StorageService
from core.validation import validate_meta

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

def file_extension(filename: str | None) -> str:
    """
    Extension of an uploaded filename, dot included, case preserved.

    Everything from the last dot of the final path element, so ".png"
    has the extension ".png" and "photo" has none.
    """
    name = PurePath(filename or "").name
    dot = name.rfind(".")
    return name[dot:] if dot != -1 else ""


def is_allowed_image(filename: str | None) -> bool:
    return file_extension(filename).lower() in settings.allowed_image_extensions_list


def upload_size(upload: UploadFile) -> int:
    """Size of an uploaded file in bytes."""
    if upload.size is not None:
        return upload.size
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def _body_too_large() -> MalformedRequestError:
    return MalformedRequestError(
        "unable to parse form data",
        f"request body exceeds maximum size of {settings.MAX_REQUEST_SIZE_MB}MB",
    )


async def _limited_stream(request: Request, max_bytes: int) -> AsyncGenerator[bytes, None]:
    """Yield the request body, failing once more than max_bytes arrived."""
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise _body_too_large()
        yield chunk


async def _read_form(request: Request) -> FormData:
    """Decode a multipart body, enforcing the overall request size limit."""
    content_type = request.headers.get("content-type", "").lower()
    if not content_type.startswith("multipart/form-data"):
        raise MalformedRequestError(
            "unable to parse form data",
            "request Content-Type isn't multipart/form-data",
        )

    # Reject early when the client declares the size up front
    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            declared_size = int(content_length)
        except ValueError:
            raise MalformedRequestError("unable to parse form data", "invalid Content-Length header")
        if declared_size > settings.max_request_size_bytes:
            raise _body_too_large()

    # Chunked bodies carry no length, so the limit is also counted while reading
    parser = MultiPartParser(
        request.headers,
        _limited_stream(request, settings.max_request_size_bytes),
    )
    try:
        return await parser.parse()
    except MultiPartException as e:
        raise MalformedRequestError("unable to parse form data", e.message)


def _get_upload(form: FormData, field: str) -> UploadFile:
    value = form.get(field)
    if not isinstance(value, UploadFile):
        raise MissingFieldError(field, is_file=True)
    return value


async def _process_submission(form: FormData, storage: StorageService) -> ApplyResponse:
    # =========================================================================
    # 1. Decode Metadata
    # =========================================================================

    meta_text = form.get("meta")
    if not isinstance(meta_text, str) or meta_text == "":
        raise MissingFieldError("meta")

    try:
        meta = ApplicationMetadata.model_validate_json(meta_text)
    except ValidationError as e:
        raise MalformedRequestError(
            "malformed meta field",
            f"Invalid JSON format: {_describe_validation_error(e)}",
        )

    # =========================================================================
    # 2. Validate Metadata
    # =========================================================================

    errors = validate_meta(meta)
    if errors:
        logger.info(f"Rejected application for {meta.project_name!r}: {len(errors)} validation errors")
        raise ValidationFailedError(errors)

    # =========================================================================
    # 3. Validate Files
    # =========================================================================

    cover = _get_upload(form, "cover")
    avatar = _get_upload(form, "avatar")

    if upload_size(cover) > settings.max_cover_size_bytes:
        raise PayloadTooLargeError("cover", settings.MAX_COVER_SIZE_MB)

    if upload_size(avatar) > settings.max_avatar_size_bytes:
        raise PayloadTooLargeError("avatar", settings.MAX_AVATAR_SIZE_MB)

    if not is_allowed_image(cover.filename):
        raise UnsupportedMediaTypeError("cover", cover.filename or "")

    if not is_allowed_image(avatar.filename):
        raise UnsupportedMediaTypeError("avatar", avatar.filename or "")

    # =========================================================================
    # 4. Persist
    # =========================================================================

    # File writes block, keep them off the event loop
    application_id, submitted_at = await asyncio.to_thread(
        storage.persist,
        meta,
        cover.file,
        file_extension(cover.filename),
        avatar.file,
        file_extension(avatar.filename),
    )

    logger.info(f"Accepted application {application_id} for project {meta.project_name!r}")

    return ApplyResponse(
        data=ApplicationAccepted(
            application_id=application_id,
            submitted_at=submitted_at,
        )
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/apply", response_model=ApplyResponse)
async def apply_project(request: Request, storage: StorageDep):
    """
    Submit a project application.

    This endpoint:
    1. Decodes the multipart body (10MB overall limit)
    2. Parses and validates the `meta` JSON field
    3. Checks the cover/avatar files (presence, size, extension)
    4. Stores both images and meta.json under a new application id

    Returns the application id and submission time.
    """
    form = await _read_form(request)
    try:
        return await _process_submission(form, storage)
    finally:
        await form.close()
