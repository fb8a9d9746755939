# =============================================================================
# app/routers/display.py - Project Display Images
# =============================================================================
# Serves approved project images by numeric id:
#   GET /project/avatar?id=<id>  -> <display-root>/avatar/<id>.png
#   GET /project/poster?id=<id>  -> <display-root>/poster/<id>.png
# =============================================================================

import logging
import re
from pathlib import Path

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import FileResponse

from app.dependencies import DisplayRootDep

logger = logging.getLogger(__name__)

router = APIRouter()

# Optional sign followed by ASCII digits; nothing that could form a path
PROJECT_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def validate_project_id(project_id: str | None) -> str:
    """
    Validate the id query parameter.

    The id must be an integer before it is used in a file path.
    """
    if not project_id:
        raise HTTPException(status_code=400, detail="id parameter is required")

    if not PROJECT_ID_PATTERN.fullmatch(project_id):
        raise HTTPException(status_code=400, detail="id must be a valid number")

    return project_id


def _serve_image(display_root: Path, kind: str, project_id: str | None) -> FileResponse:
    project_id = validate_project_id(project_id)
    image_path = display_root / kind / f"{project_id}.png"

    if not image_path.is_file():
        raise HTTPException(status_code=404, detail=f"{kind} not found")

    logger.debug(f"Serving {kind} image {image_path}")
    return FileResponse(path=image_path, media_type="image/png")


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/avatar")
async def get_project_avatar(
    display_root: DisplayRootDep,
    project_id: str | None = Query(default=None, alias="id", description="Numeric project id"),
):
    """Return the avatar image of an approved project."""
    return _serve_image(display_root, "avatar", project_id)


@router.get("/poster")
async def get_project_poster(
    display_root: DisplayRootDep,
    project_id: str | None = Query(default=None, alias="id", description="Numeric project id"),
):
    """Return the poster image of an approved project."""
    return _serve_image(display_root, "poster", project_id)
