# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - warehouses.py: Warehouse space availability endpoints
# - pricing.py: Mezzanine discount audit
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import warehouses
from . import pricing

__all__ = [
    "health",
    "warehouses",
    "pricing",
]
