# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# - application.py: Submission metadata, stored record and response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .application import (
    ApplicationAccepted,
    ApplicationMetadata,
    ApplyResponse,
    ProjectApplication,
    ProjectLink,
)

__all__ = [
    "ApplicationAccepted",
    "ApplicationMetadata",
    "ApplyResponse",
    "ProjectApplication",
    "ProjectLink",
]
