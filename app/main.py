# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the project application API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main            # binds API_HOST:BACKEND_PORT
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    ProjectApplyException,
    project_apply_exception_handler,
)
from app.routers import apply, display, health
from core.services.storage_service import StorageService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup creates the storage root. If that fails the error propagates
    and the server refuses to start.
    """
    logger.info(f"Starting project application API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    StorageService(settings.application_root_path).init_root()

    yield

    logger.info("Shutting down project application API")


# Create FastAPI application
app = FastAPI(
    title="Project Application API",
    description="""
## Project Application Intake

Third-party projects apply for a showcase slot by submitting metadata plus a
cover and an avatar image. Each accepted submission is stored under its own
application id and waits for manual review.

### Quick Start

```bash
curl -X POST http://localhost:8080/project/apply \\
  -F 'meta={"project_name":"Demo","author_name":"A","author_link":"https://x.com","brief":"demo","links":[{"platform":"web","url":"https://x.com/demo","is_default":true}]}' \\
  -F "cover=@cover.png" \\
  -F "avatar=@avatar.jpg"
```
""",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Project",
            "description": "Submit applications and fetch approved project images",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Origin", "Content-Type", "Accept"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ProjectApplyException)
async def handle_project_apply_exception(request: Request, exc: ProjectApplyException):
    """Handle custom intake exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.errors}")
    else:
        logger.warning(f"{exc.code} on {request.url.path}: {exc.errors}")
    return await project_apply_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "status": "error",
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "errors": [str(exc) or exc.__class__.__name__],
        }
    )


# =============================================================================
# Routers
# =============================================================================

# /test and health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)

# Application submissions
app.include_router(
    apply.router,
    prefix="/project",
    tags=["Project"]
)

# Approved project images
app.include_router(
    display.router,
    prefix="/project",
    tags=["Project"]
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.BACKEND_PORT)
