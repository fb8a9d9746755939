# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - exceptions.py: Error taxonomy and JSON error responses
# - routers/: API endpoint definitions organized by feature
#
# The app layer handles HTTP concerns and delegates validation and
# storage to the core/ package.
# =============================================================================
