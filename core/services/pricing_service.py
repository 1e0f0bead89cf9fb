# =============================================================================
# core/services/pricing_service.py - Mezzanine Discount Audit
# =============================================================================
# Mezzanine space is leased at MEZZANINE_DISCOUNT_PERCENT below the Ground
# Floor rate of the same area band and tenure. The audit pairs the two
# rate tables and reports every band that breaks the rule.
# =============================================================================

import logging
from typing import Iterable

from pydantic import ValidationError

from app.config import settings
from app.exceptions import DataStoreUnavailableError
from core.models.pricing import MezzanineAuditReport, MezzanineRateCheck, PricingRate
from core.models.warehouse import FloorType
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


def mezzanine_rate(ground_floor_rate: float, discount_percentage: float | None = None) -> float:
    """
    Mezzanine rate for a Ground Floor rate, rounded to 3 decimals (fils).

    Example:
        mezzanine_rate(3.5)  # 2.8 with the default 20% discount
    """
    if discount_percentage is None:
        discount_percentage = settings.MEZZANINE_DISCOUNT_PERCENT
    return round(ground_floor_rate * (1 - discount_percentage / 100), 3)


def _floor_of(rate: PricingRate) -> FloorType | None:
    try:
        return FloorType.parse(rate.space_type)
    except ValueError:
        return None


def audit_mezzanine_rates(
    rates: Iterable[PricingRate],
    discount_percentage: float | None = None,
    tolerance: float | None = None,
) -> MezzanineAuditReport:
    """
    Check that every Mezzanine rate carries the configured discount.

    Ground Floor and Mezzanine rates are paired on (area_band_name, tenure).
    A pair is correct when the actual discount is within `tolerance`
    percentage points of the configured one. Ground Floor bands without a
    Mezzanine rate are reported with mezzanine_rate=None and count as
    incorrect. Rates of other space types (e.g. Office) are ignored.
    """
    if discount_percentage is None:
        discount_percentage = settings.MEZZANINE_DISCOUNT_PERCENT
    if tolerance is None:
        tolerance = settings.MEZZANINE_DISCOUNT_TOLERANCE

    ground_rates: list[PricingRate] = []
    mezzanine_by_band: dict[tuple[str, str], PricingRate] = {}
    for rate in rates:
        floor = _floor_of(rate)
        if floor == FloorType.GROUND_FLOOR:
            ground_rates.append(rate)
        elif floor == FloorType.MEZZANINE:
            mezzanine_by_band[rate.band_key] = rate

    checks: list[MezzanineRateCheck] = []
    for ground in ground_rates:
        expected = mezzanine_rate(ground.monthly_rate_per_sqm, discount_percentage)
        mezzanine = mezzanine_by_band.get(ground.band_key)

        if mezzanine is None:
            checks.append(MezzanineRateCheck(
                area_band_name=ground.area_band_name,
                tenure=ground.tenure,
                ground_floor_rate=ground.monthly_rate_per_sqm,
                expected_mezzanine_rate=expected,
                is_correct=False,
            ))
            continue

        actual_discount = None
        is_correct = False
        if ground.monthly_rate_per_sqm > 0:
            actual_discount = (
                (ground.monthly_rate_per_sqm - mezzanine.monthly_rate_per_sqm)
                / ground.monthly_rate_per_sqm * 100
            )
            is_correct = abs(actual_discount - discount_percentage) <= tolerance

        checks.append(MezzanineRateCheck(
            area_band_name=ground.area_band_name,
            tenure=ground.tenure,
            ground_floor_rate=ground.monthly_rate_per_sqm,
            expected_mezzanine_rate=expected,
            mezzanine_rate=mezzanine.monthly_rate_per_sqm,
            actual_discount_percentage=actual_discount,
            is_correct=is_correct,
        ))

    compared = [check for check in checks if check.mezzanine_rate is not None]
    correct = sum(1 for check in compared if check.is_correct)

    return MezzanineAuditReport(
        discount_percentage=discount_percentage,
        tolerance=tolerance,
        checks=checks,
        total_comparisons=len(compared),
        correct_comparisons=correct,
        missing_mezzanine_bands=len(checks) - len(compared),
        all_correct=all(check.is_correct for check in checks),
    )


class PricingService:
    """Service for pricing rate checks."""

    @staticmethod
    def audit_mezzanine_discount() -> MezzanineAuditReport:
        """
        Load pricing_rates and audit the mezzanine discount.

        Raises:
            DataStoreUnavailableError: If the rates can't be loaded
        """
        try:
            rows = SupabaseClient.fetch_pricing_rates()
        except SupabaseClientError as e:
            logger.error(f"Failed to load pricing rates: {e}")
            raise DataStoreUnavailableError("fetch_pricing_rates") from e

        rates = []
        for row in rows:
            try:
                rates.append(PricingRate.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed pricing row {row.get('id')}: {e}")

        report = audit_mezzanine_rates(rates)
        if not report.all_correct:
            logger.warning(
                f"Mezzanine discount audit: {report.correct_comparisons}/{report.total_comparisons} "
                f"bands correct, {report.missing_mezzanine_bands} missing"
            )
        return report
