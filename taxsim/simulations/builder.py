"""Scenario builder: assembles an engine Scenario from stored records.

Pulls data from:
- Scenario row (VAT posture, ZUS class, industry)
- Investment rows and their car_details rows
- TaxYearConfig row (rates for the selected year)

Revenue and costs come from the calculate request, not the stored row.
Lease terms are stored in percent and converted to fractions here.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from taxsim.config import settings
from taxsim.models.enums import (
    EngineType,
    FinancingMethod,
    InvestmentType,
    LumpSumIndustry,
    UsageType,
    ZusType,
)
from taxsim.models.scenario import CarDetail, Investment
from taxsim.models.scenario import Scenario as ScenarioModel
from taxsim.models.tax_year_config import TaxYearConfig
from taxsim.schemas.rates import RateConfig
from taxsim.schemas.scenario import EquipmentInvestment, Scenario, VehicleInvestment

_HUNDRED = Decimal("100")


class IncompleteInvestmentError(ValueError):
    """A car investment has no car_details row."""

    def __init__(self, investment_id: object, investment_type: str) -> None:
        super().__init__(f"Investment {investment_id} ({investment_type}) has no car details")
        self.investment_id = investment_id


# tax_year_configs columns copied 1:1 into RateConfig
_RATE_FIELDS: tuple[str, ...] = (
    "minimum_wage_gross",
    "average_wage_prognosis",
    "average_wage_q4_previous_year",
    "retirement_rate",
    "disability_rate",
    "accident_rate",
    "sickness_rate",
    "work_fund_rate",
    "solidarity_fund_rate",
    "health_insurance_rate_skala",
    "health_insurance_rate_liniowy",
    "health_insurance_limit_linear",
)


def _percent_to_fraction(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(value) / _HUNDRED


def rate_config_from_record(record: TaxYearConfig) -> RateConfig:
    """RateConfig for a stored tax_year_configs row."""
    return RateConfig(
        year=record.year,
        **{name: Decimal(getattr(record, name)) for name in _RATE_FIELDS},
    )


def vehicle_from_records(investment: Investment, car: CarDetail) -> VehicleInvestment:
    return VehicleInvestment(
        name=investment.name,
        car_price_netto=Decimal(car.car_price_netto),
        engine_type=EngineType(car.engine_type),
        financing_method=FinancingMethod(car.financing_method),
        usage_type=UsageType(car.usage_type),
        month_of_purchase=investment.month_of_purchase,
        leasing_initial_payment=_percent_to_fraction(car.leasing_initial_payment_percent),
        leasing_months=car.leasing_months,
        leasing_buyout=_percent_to_fraction(car.leasing_buyout_percent),
    )


def investments_from_records(
    investments: Iterable[Investment],
) -> list[EquipmentInvestment | VehicleInvestment]:
    """Engine investments for stored rows.

    Raises IncompleteInvestmentError for a car investment without its
    car_details row, since it cannot be valued.
    """
    result: list[EquipmentInvestment | VehicleInvestment] = []
    for inv in investments:
        inv_type = InvestmentType(inv.type)
        if not inv_type.is_car:
            result.append(EquipmentInvestment(
                name=inv.name,
                cost_netto=Decimal(inv.cost_netto),
                month_of_purchase=inv.month_of_purchase,
            ))
            continue

        if inv.car_details is None:
            raise IncompleteInvestmentError(inv.id, inv.type)
        result.append(vehicle_from_records(inv, inv.car_details))
    return result


def build_scenario(
    record: ScenarioModel,
    rate_config: RateConfig,
    yearly_revenue_netto: Decimal,
    yearly_fixed_costs: Decimal,
) -> Scenario:
    """Build the engine input for a stored scenario.

    The scenario must have its investments (and their car_details) loaded.
    Use `repository.get_scenario()` to fetch with eager loading.
    """
    industry = (
        LumpSumIndustry(record.lump_sum_industry)
        if record.lump_sum_industry
        else settings.simulator.default_lump_sum_industry
    )
    vat_rate_mixed = record.vat_rate_mixed if record.vat_rate_mixed is not None else Decimal("1.0")

    return Scenario(
        yearly_revenue_netto=yearly_revenue_netto,
        yearly_fixed_costs=yearly_fixed_costs,
        vat_payer=record.vat_payer if record.vat_payer is not None else True,
        vat_rate_mixed=Decimal(vat_rate_mixed),
        zus_type=ZusType(record.zus_type),
        investments=tuple(investments_from_records(record.investments)),
        rate_config=rate_config,
        lump_sum_industry=industry,
        custom_social_base=record.custom_social_base,
        voluntary_sickness=bool(record.voluntary_sickness),
    )
