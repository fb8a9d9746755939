# =============================================================================
# core/models/application.py - Project Application Schemas
# =============================================================================
# These models define the contract for project application submissions:
# - ProjectLink: One link to where the project can be found
# - ApplicationMetadata: The JSON `meta` block sent with a submission
# - ProjectApplication: The record persisted as meta.json
# - ApplyResponse: Success body returned to the submitter
#
# Field names are snake_case on the wire and on disk.
# =============================================================================

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ProjectLink(BaseModel):
    """
    A single project link.

    `is_default` is tri-state: absent (None), true or false. Only an
    explicit true counts towards the "exactly one default" rule.

    Example:
        {"platform": "web", "url": "https://x.com/demo", "is_default": true}
    """

    model_config = ConfigDict(extra="ignore")

    platform: str = Field(default="", description="Short label, e.g. 'github'")
    url: str = Field(default="", description="Link target, must be http(s)")
    is_default: bool | None = Field(
        default=None,
        description="Marks the primary link; omitted means not default"
    )


class ApplicationMetadata(BaseModel):
    """
    Metadata block of a project application.

    Missing keys decode to blank values so that they surface as validation
    messages rather than decode failures. Business rules live in
    core.validation, not here.

    Example:
        {
            "project_name": "Demo",
            "author_name": "A",
            "author_link": "https://x.com",
            "brief": "demo",
            "links": [{"platform": "web", "url": "https://x.com/demo", "is_default": true}]
        }
    """

    model_config = ConfigDict(extra="ignore")

    project_name: str = ""
    author_name: str = ""
    author_link: str = ""
    brief: str = ""
    links: list[ProjectLink] = Field(default_factory=list)


class ProjectApplication(BaseModel):
    """
    Persisted record of one accepted submission (meta.json).

    Created once when every validation and write step succeeded; never
    modified afterwards.
    """

    application_id: str = Field(..., description="UUID naming the storage directory")
    submitted_at: str = Field(..., description="RFC3339 UTC timestamp")
    meta: ApplicationMetadata
    cover_path: str
    avatar_path: str


# =============================================================================
# Response Models
# =============================================================================

class ApplicationAccepted(BaseModel):
    """Data payload of a successful submission."""
    application_id: str
    submitted_at: str


class ApplyResponse(BaseModel):
    """Response body for an accepted submission."""
    status: Literal["ok"] = "ok"
    message: str = "application submitted, pending review"
    data: ApplicationAccepted
