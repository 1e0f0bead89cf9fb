# =============================================================================
# tests/ - Test Suite
# =============================================================================
# - test_availability.py: Availability calculator and service
# - test_models.py: Row parsing and coercion of the Pydantic models
# - test_roles.py: Role hierarchy
# - test_sessions.py: Session stores and session lifecycle
# - test_pricing.py: Mezzanine discount audit
# - test_api.py: Endpoints through FastAPI's TestClient
# - test_supabase_client.py: Error-code mapping and filters of the Supabase wrapper
#
# Run tests with: poetry run pytest
# =============================================================================
