# =============================================================================
# core/models/pricing.py - Pricing Rate and Audit Schemas
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field, field_validator


class PricingRate(BaseModel):
    """A row of the pricing_rates table."""

    id: str | None = None
    space_type: str
    tenure: str
    area_band_name: str | None = None
    monthly_rate_per_sqm: float = Field(..., ge=0)
    daily_rate_per_sqm: float | None = Field(default=None, ge=0)

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @property
    def band_key(self) -> tuple[str, str]:
        return (self.area_band_name or "", self.tenure)


class MezzanineRateCheck(BaseModel):
    """Comparison of one Ground Floor band with its Mezzanine counterpart."""

    area_band_name: str | None
    tenure: str
    ground_floor_rate: float
    expected_mezzanine_rate: float
    mezzanine_rate: float | None = Field(
        default=None,
        description="Null when the band has no Mezzanine rate"
    )
    actual_discount_percentage: float | None = None
    is_correct: bool


class MezzanineAuditReport(BaseModel):
    """Response of GET /pricing/mezzanine-audit."""

    discount_percentage: float
    tolerance: float
    checks: list[MezzanineRateCheck] = Field(default_factory=list)
    total_comparisons: int = 0
    correct_comparisons: int = 0
    missing_mezzanine_bands: int = 0
    all_correct: bool = True
