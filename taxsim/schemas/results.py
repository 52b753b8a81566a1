"""Pydantic schemas for calculator results.

Pure data classes, no business logic. Field names serialize to the
camelCase keys the web client expects (`netCashInHand`, `zusTotal`, ...).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taxsim.models.enums import TaxationForm
from taxsim.schemas.rates import Money

_ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Contribution calculator
# ---------------------------------------------------------------------------


class SocialInsuranceBreakdown(BaseModel):
    """Monthly ZUS components."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    retirement: Money = _ZERO
    disability: Money = _ZERO
    accident: Money = _ZERO
    sickness: Money = _ZERO
    work_fund: Money = _ZERO
    solidarity_fund: Money = _ZERO


class SocialInsuranceResult(BaseModel):
    """Monthly social-insurance contribution."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    amount: Money
    base: Money
    breakdown: SocialInsuranceBreakdown


class HealthInsuranceResult(BaseModel):
    """Monthly health-insurance contribution and its deductible parts."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    amount: Money
    deductible_from_income: Money
    deductible_from_tax: Money = _ZERO


# ---------------------------------------------------------------------------
# Tax engine
# ---------------------------------------------------------------------------


class TaxBreakdown(BaseModel):
    """Investment effects included in a TaxResult."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    car_depreciation_deduction: Money = _ZERO
    equipment_depreciation_deduction: Money = _ZERO
    vat_benefit: Money = _ZERO


class TaxResult(BaseModel):
    """Yearly outcome of one tax regime."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    taxation_form: TaxationForm
    gross_revenue: Money
    total_costs: Money
    taxable_income: Money
    income_tax: Money
    health_insurance: Money
    zus_total: Money
    net_cash_in_hand: Money
    breakdown: TaxBreakdown


class ComparisonResult(BaseModel):
    """All three regimes evaluated against the same scenario."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    flat_rate: TaxResult = Field(alias="ryczalt")
    linear: TaxResult = Field(alias="liniowy")
    progressive: TaxResult = Field(alias="skala")

    def best(self) -> TaxResult:
        """Regime leaving the most cash in hand."""
        return max((self.flat_rate, self.linear, self.progressive), key=lambda r: r.net_cash_in_hand)
