# =============================================================================
# app/routers/pricing.py - Pricing Audit Endpoints
# =============================================================================
# Restricted to MANAGER and above.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import require_role
from core.models.pricing import MezzanineAuditReport
from core.models.user import Role, User
from core.services.pricing_service import PricingService

router = APIRouter()


@router.get("/mezzanine-audit", response_model=MezzanineAuditReport)
async def audit_mezzanine_discount(
    user: User = Depends(require_role(Role.MANAGER)),
):
    """
    Check every Mezzanine rate against the configured mezzanine discount.

    Pairs Ground Floor and Mezzanine rates by area band and tenure and
    reports expected vs actual rates per band.
    """
    return PricingService.audit_mezzanine_discount()
