# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the project application API:
# - test_models.py: Pydantic model decoding
# - test_validation.py: Metadata business rules
# - test_storage_service.py: On-disk persistence
# - test_apply_api.py / test_display_api.py / test_health.py: Endpoints
# - test_config.py: Settings parsing
#
# Run tests with: pytest
# =============================================================================
