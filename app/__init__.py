# =============================================================================
# app/ - HTTP Layer of the Warehouse Leasing API
# =============================================================================
# - main.py: FastAPI app, CORS, exception handlers and router mounting
# - config.py: Settings read from the environment / .env
# - exceptions.py: LeasingAPIException hierarchy and JSON error handlers
# - dependencies.py: Shared FastAPI dependencies
# - auth/: Bearer session tokens and role checks
# - routers/: Warehouses, pricing and health endpoints
#
# Availability, session and pricing rules live in core/; this layer only
# maps HTTP requests onto them.
# =============================================================================
