# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: /test greeting and health check endpoints
# - apply.py: Project application submissions
# - display.py: Approved project avatar/poster images
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import apply
from . import display

__all__ = [
    "health",
    "apply",
    "display",
]
