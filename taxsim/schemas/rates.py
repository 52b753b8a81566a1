"""Per-year statutory rate table consumed by the calculators.

Every figure the calculators use lives here, including the ones that rarely
change (tax brackets, VAT rate, depreciation rates). The required fields
mirror one `tax_year_configs` row; the rest default to the 2026 statutory
values.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from taxsim.models.enums import EngineType, LumpSumIndustry

# Monetary amount: Decimal internally, JSON number on the wire.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Non-negative fraction or amount from the rate table.
Rate = Annotated[Decimal, Field(ge=0), PlainSerializer(float, return_type=float, when_used="json")]


def _default_lump_sum_rates() -> dict[LumpSumIndustry, Decimal]:
    return {
        LumpSumIndustry.IT_SERVICES: Decimal("0.12"),
        LumpSumIndustry.TRADE: Decimal("0.03"),
        LumpSumIndustry.SERVICES_GENERAL: Decimal("0.085"),
    }


class RateConfig(BaseModel):
    """Statutory rates and bases for one fiscal year. Immutable."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    year: int

    # Wage bases (monthly, PLN)
    minimum_wage_gross: Rate
    average_wage_prognosis: Rate
    average_wage_q4_previous_year: Rate

    # Social insurance (ZUS) component rates
    retirement_rate: Rate = Decimal("0.1952")
    disability_rate: Rate = Decimal("0.08")
    accident_rate: Rate = Decimal("0.0167")
    sickness_rate: Rate = Decimal("0.0245")
    work_fund_rate: Rate = Decimal("0.0245")
    solidarity_fund_rate: Rate = Decimal("0.0245")

    # Health insurance
    health_insurance_rate_skala: Rate = Decimal("0.09")
    health_insurance_rate_liniowy: Rate = Decimal("0.049")
    health_insurance_limit_linear: Rate = Decimal("11600")

    # ZUS base shares per contribution class
    preferential_base_share: Rate = Decimal("0.30")
    standard_base_share: Rate = Decimal("0.60")

    # Linear-regime health floor (share of minimum wage)
    linear_health_min_rate: Rate = Decimal("0.09")

    # Lump-sum health insurance tiers
    lump_sum_health_rate: Rate = Decimal("0.09")
    lump_sum_health_tier_low: Rate = Decimal("60000")
    lump_sum_health_tier_high: Rate = Decimal("300000")
    lump_sum_health_multiplier_low: Rate = Decimal("0.6")
    lump_sum_health_multiplier_mid: Rate = Decimal("1.0")
    lump_sum_health_multiplier_high: Rate = Decimal("1.8")
    lump_sum_health_income_deduction: Rate = Decimal("0.5")
    lump_sum_rates: dict[LumpSumIndustry, Rate] = Field(default_factory=_default_lump_sum_rates)

    # Income tax
    linear_tax_rate: Rate = Decimal("0.19")
    scale_tax_free_allowance: Rate = Decimal("30000")
    scale_threshold: Rate = Decimal("120000")
    scale_first_rate: Rate = Decimal("0.12")
    scale_second_rate: Rate = Decimal("0.32")

    # VAT and depreciation
    vat_rate: Rate = Decimal("0.23")
    vat_recovery_mixed_use: Rate = Decimal("0.50")
    car_depreciation_rate: Rate = Decimal("0.20")
    equipment_depreciation_rate: Rate = Decimal("0.30")
    leasing_interest_rate: Rate = Decimal("0.05")
    car_limit_combustion: Rate = Decimal("100000")
    car_limit_hybrid_plugin: Rate = Decimal("150000")
    car_limit_electric: Rate = Decimal("225000")

    def car_depreciation_limit(self, engine_type: EngineType) -> Decimal:
        """Deductible ceiling on vehicle cost for the given drivetrain."""
        limits = {
            EngineType.COMBUSTION: self.car_limit_combustion,
            EngineType.HYBRID_PLUGIN: self.car_limit_hybrid_plugin,
            EngineType.ELECTRIC: self.car_limit_electric,
        }
        return limits[engine_type]

    def lump_sum_rate(self, industry: LumpSumIndustry) -> Decimal:
        return self.lump_sum_rates[industry]
