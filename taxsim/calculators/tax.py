"""Yearly tax comparison across ryczałt, liniowy and skala.

Pure Python orchestrator over the depreciation and contribution
calculators. No DB access; the API layer builds the Scenario.

Regimes:
- Ryczałt: revenue × industry rate. Investments never reduce the base.
- Liniowy: 19% of (revenue - costs - depreciation), health capped at the
  yearly deduction limit.
- Skala: 12% up to 120k / 32% above, after a 30k tax-free allowance;
  health 9% of income.

Every regime pays the same yearly ZUS and gets the same VAT benefit
(VAT payers only).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal

from taxsim.calculators.contributions import calculate_health_insurance, calculate_social_insurance
from taxsim.calculators.depreciation import (
    calculate_car_depreciation,
    calculate_car_vat_benefit,
    calculate_equipment_depreciation,
    calculate_equipment_vat_benefit,
)
from taxsim.models.enums import TaxationForm, ZusType
from taxsim.schemas.rates import RateConfig
from taxsim.schemas.results import ComparisonResult, TaxBreakdown, TaxResult
from taxsim.schemas.scenario import Scenario

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_MONTHS = 12


def _to_pln(value: Decimal) -> Decimal:
    """Round to grosze (2 decimal places)."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def calculate_yearly_zus(
    zus_type: ZusType,
    config: RateConfig,
    custom_base: Decimal | None = None,
    voluntary_sickness: bool = False,
) -> Decimal:
    """Yearly social insurance: twelve monthly contributions."""
    monthly = calculate_social_insurance(zus_type, config, custom_base, voluntary_sickness)
    return _to_pln(monthly.amount * _MONTHS)


def _scenario_zus(scenario: Scenario) -> Decimal:
    return calculate_yearly_zus(
        scenario.zus_type,
        scenario.rate_config,
        custom_base=scenario.custom_social_base,
        voluntary_sickness=scenario.voluntary_sickness,
    )


def _vat_benefit(scenario: Scenario) -> Decimal:
    """VAT recovered on investments, scaled by the recoverable fraction."""
    if not scenario.vat_payer:
        return _ZERO

    config = scenario.rate_config
    total = sum(
        (calculate_car_vat_benefit(car, config) * scenario.vat_rate_mixed for car in scenario.vehicles),
        start=_ZERO,
    )
    total += sum(
        (calculate_equipment_vat_benefit(eq, config) * scenario.vat_rate_mixed for eq in scenario.equipment),
        start=_ZERO,
    )
    return _to_pln(total)


def _depreciation(scenario: Scenario) -> tuple[Decimal, Decimal]:
    """(vehicle, equipment) deductions for the year."""
    config = scenario.rate_config
    cars = sum((calculate_car_depreciation(car, config) for car in scenario.vehicles), start=_ZERO)
    equipment = sum(
        (calculate_equipment_depreciation(eq, config) for eq in scenario.equipment),
        start=_ZERO,
    )
    return cars, equipment


def calculate_flat_rate(scenario: Scenario) -> TaxResult:
    """Ryczałt: tax on revenue at the industry rate."""
    config = scenario.rate_config
    gross_revenue = scenario.yearly_revenue_netto

    income_tax = _to_pln(gross_revenue * config.lump_sum_rate(scenario.lump_sum_industry))

    monthly_health = calculate_health_insurance(
        TaxationForm.RYCZALT,
        config,
        monthly_net_income=gross_revenue / _MONTHS,
        yearly_revenue_to_date=gross_revenue,
    )
    health_insurance = _to_pln(monthly_health.amount * _MONTHS)

    zus_total = _scenario_zus(scenario)
    vat_benefit = _vat_benefit(scenario)

    net_cash = gross_revenue - income_tax - health_insurance - zus_total + vat_benefit

    return TaxResult(
        taxation_form=TaxationForm.RYCZALT,
        gross_revenue=_to_pln(gross_revenue),
        total_costs=_ZERO,
        taxable_income=_to_pln(gross_revenue),
        income_tax=income_tax,
        health_insurance=health_insurance,
        zus_total=zus_total,
        net_cash_in_hand=_to_pln(net_cash),
        breakdown=TaxBreakdown(vat_benefit=vat_benefit),
    )


def calculate_linear(scenario: Scenario) -> TaxResult:
    """Liniowy: 19% of income after costs and depreciation."""
    config = scenario.rate_config
    gross_revenue = scenario.yearly_revenue_netto

    car_depreciation, equipment_depreciation = _depreciation(scenario)
    total_costs = scenario.yearly_fixed_costs + car_depreciation + equipment_depreciation
    taxable_income = max(_ZERO, gross_revenue - total_costs)

    income_tax = _to_pln(taxable_income * config.linear_tax_rate)
    health_insurance = _to_pln(
        min(taxable_income * config.health_insurance_rate_liniowy, config.health_insurance_limit_linear)
    )

    zus_total = _scenario_zus(scenario)
    vat_benefit = _vat_benefit(scenario)

    net_cash = gross_revenue - total_costs - income_tax - health_insurance - zus_total + vat_benefit

    return TaxResult(
        taxation_form=TaxationForm.LINIOWY,
        gross_revenue=_to_pln(gross_revenue),
        total_costs=_to_pln(total_costs),
        taxable_income=_to_pln(taxable_income),
        income_tax=income_tax,
        health_insurance=health_insurance,
        zus_total=zus_total,
        net_cash_in_hand=_to_pln(net_cash),
        breakdown=TaxBreakdown(
            car_depreciation_deduction=car_depreciation,
            equipment_depreciation_deduction=equipment_depreciation,
            vat_benefit=vat_benefit,
        ),
    )


def scale_income_tax(taxable_income: Decimal, config: RateConfig) -> Decimal:
    """Two-bracket progressive tax on income already reduced by the allowance."""
    if taxable_income <= config.scale_threshold:
        return _to_pln(taxable_income * config.scale_first_rate)
    first_bracket = config.scale_threshold * config.scale_first_rate
    second_bracket = (taxable_income - config.scale_threshold) * config.scale_second_rate
    return _to_pln(first_bracket + second_bracket)


def calculate_progressive(scenario: Scenario) -> TaxResult:
    """Skala: 12% / 32% after the tax-free allowance."""
    config = scenario.rate_config
    gross_revenue = scenario.yearly_revenue_netto

    car_depreciation, equipment_depreciation = _depreciation(scenario)
    total_costs = scenario.yearly_fixed_costs + car_depreciation + equipment_depreciation
    income = max(_ZERO, gross_revenue - total_costs)
    taxable_income = max(_ZERO, income - config.scale_tax_free_allowance)

    income_tax = scale_income_tax(taxable_income, config)
    # Skala health is charged on income before the allowance and is not deductible
    health_insurance = _to_pln(income * config.health_insurance_rate_skala)

    zus_total = _scenario_zus(scenario)
    vat_benefit = _vat_benefit(scenario)

    net_cash = gross_revenue - total_costs - income_tax - health_insurance - zus_total + vat_benefit

    return TaxResult(
        taxation_form=TaxationForm.SKALA,
        gross_revenue=_to_pln(gross_revenue),
        total_costs=_to_pln(total_costs),
        taxable_income=_to_pln(taxable_income),
        income_tax=income_tax,
        health_insurance=health_insurance,
        zus_total=zus_total,
        net_cash_in_hand=_to_pln(net_cash),
        breakdown=TaxBreakdown(
            car_depreciation_deduction=car_depreciation,
            equipment_depreciation_deduction=equipment_depreciation,
            vat_benefit=vat_benefit,
        ),
    )


REGIME_CALCULATORS: dict[TaxationForm, Callable[[Scenario], TaxResult]] = {
    TaxationForm.RYCZALT: calculate_flat_rate,
    TaxationForm.LINIOWY: calculate_linear,
    TaxationForm.SKALA: calculate_progressive,
}


def calculate_for(taxation_form: TaxationForm, scenario: Scenario) -> TaxResult:
    """Run a single regime by tag."""
    return REGIME_CALCULATORS[taxation_form](scenario)


def compare_all(scenario: Scenario) -> ComparisonResult:
    """Evaluate all three regimes against the same scenario.

    Raises:
        MissingLeaseParametersError: A leased vehicle lacks lease terms.
            No partial result is returned.
    """
    result = ComparisonResult(
        flat_rate=calculate_flat_rate(scenario),
        linear=calculate_linear(scenario),
        progressive=calculate_progressive(scenario),
    )
    logger.debug(
        "Comparison (year=%d revenue=%s): ryczalt=%s liniowy=%s skala=%s",
        scenario.rate_config.year,
        scenario.yearly_revenue_netto,
        result.flat_rate.net_cash_in_hand,
        result.linear.net_cash_in_hand,
        result.progressive.net_cash_in_hand,
    )
    return result
