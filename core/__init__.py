# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the intake logic shared by the API:
# - models/: Pydantic schemas for submissions and stored records
# - validation.py: Business rules for application metadata
# - services/: Storage of accepted submissions
# =============================================================================
