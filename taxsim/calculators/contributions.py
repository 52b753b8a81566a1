"""ZUS social-insurance and health-insurance contribution calculator.

Pure Python, Decimal arithmetic. All amounts are monthly. Implements:
- ZUS base per contribution class (ulga na start, preferencyjny, mały plus, duży)
- Social components: emerytalne, rentowe, wypadkowe, chorobowe (voluntary),
  Fundusz Pracy, Fundusz Solidarnościowy
- Health insurance per tax regime (skala, liniowy, ryczałt)

Rules:
- Ulga na start: zero base, no social contributions
- Preferencyjny: base = 30% of minimum wage
- Mały plus: user-declared base, defaults to minimum wage
- Duży: base = 60% of average-wage prognosis
- FP and FS are not charged on a preferencyjny base below minimum wage
- Ryczałt health: Q4 average wage × 9% × tier multiplier
  (revenue ≤ 60k → 0.6, ≤ 300k → 1.0, above → 1.8), half deductible
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from taxsim.models.enums import TaxationForm, ZusType
from taxsim.schemas.rates import RateConfig
from taxsim.schemas.results import (
    HealthInsuranceResult,
    SocialInsuranceBreakdown,
    SocialInsuranceResult,
)

_ZERO = Decimal("0")


def _to_pln(value: Decimal) -> Decimal:
    """Round to grosze (2 decimal places)."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def social_insurance_base(
    zus_type: ZusType,
    config: RateConfig,
    custom_base: Decimal | None = None,
) -> Decimal:
    """Monthly ZUS contribution base for a contribution class."""
    if zus_type == ZusType.ULGA_NA_START:
        return _ZERO
    if zus_type == ZusType.PREFERENCYJNY:
        return config.minimum_wage_gross * config.preferential_base_share
    if zus_type == ZusType.DUZY:
        return config.average_wage_prognosis * config.standard_base_share
    # Mały plus: declared base, falls back to minimum wage
    return custom_base or config.minimum_wage_gross


def calculate_social_insurance(
    zus_type: ZusType,
    config: RateConfig,
    custom_base: Decimal | None = None,
    voluntary_sickness: bool = False,
) -> SocialInsuranceResult:
    """Calculate monthly social-insurance contributions.

    Args:
        zus_type: Contribution class.
        config: Rate table for the fiscal year.
        custom_base: Declared base for mały plus; ignored for other classes.
        voluntary_sickness: Whether the voluntary sickness insurance is paid.

    Returns:
        SocialInsuranceResult with the total, the base, and per-component amounts.
    """
    base = social_insurance_base(zus_type, config, custom_base)

    if base == _ZERO:
        return SocialInsuranceResult(
            amount=_ZERO,
            base=_ZERO,
            breakdown=SocialInsuranceBreakdown(),
        )

    retirement = base * config.retirement_rate
    disability = base * config.disability_rate
    accident = base * config.accident_rate
    sickness = base * config.sickness_rate if voluntary_sickness else _ZERO

    # FP and FS: not charged on a preferencyjny base below minimum wage
    work_fund = _ZERO
    solidarity_fund = _ZERO
    if zus_type != ZusType.PREFERENCYJNY or base >= config.minimum_wage_gross:
        work_fund = base * config.work_fund_rate
        solidarity_fund = base * config.solidarity_fund_rate

    total = retirement + disability + accident + sickness + work_fund + solidarity_fund

    return SocialInsuranceResult(
        amount=_to_pln(total),
        base=_to_pln(base),
        breakdown=SocialInsuranceBreakdown(
            retirement=_to_pln(retirement),
            disability=_to_pln(disability),
            accident=_to_pln(accident),
            sickness=_to_pln(sickness),
            work_fund=_to_pln(work_fund),
            solidarity_fund=_to_pln(solidarity_fund),
        ),
    )


def lump_sum_health_multiplier(config: RateConfig, yearly_revenue_to_date: Decimal | None) -> Decimal:
    """Ryczałt health tier multiplier. Unknown revenue falls into the top tier."""
    if yearly_revenue_to_date is None:
        return config.lump_sum_health_multiplier_high
    if yearly_revenue_to_date <= config.lump_sum_health_tier_low:
        return config.lump_sum_health_multiplier_low
    if yearly_revenue_to_date <= config.lump_sum_health_tier_high:
        return config.lump_sum_health_multiplier_mid
    return config.lump_sum_health_multiplier_high


def calculate_health_insurance(
    taxation_form: TaxationForm,
    config: RateConfig,
    monthly_net_income: Decimal,
    yearly_revenue_to_date: Decimal | None = None,
) -> HealthInsuranceResult:
    """Calculate the monthly health-insurance contribution for a regime.

    Args:
        taxation_form: Tax regime.
        config: Rate table for the fiscal year.
        monthly_net_income: Monthly income (revenue - costs) for skala/liniowy.
        yearly_revenue_to_date: Cumulative revenue, selects the ryczałt tier.

    Returns:
        HealthInsuranceResult with amount and the deductible portions.
    """
    if taxation_form == TaxationForm.SKALA:
        base = max(monthly_net_income, config.minimum_wage_gross)
        amount = _to_pln(base * config.health_insurance_rate_skala)
        return HealthInsuranceResult(
            amount=amount,
            deductible_from_income=amount,
            deductible_from_tax=_ZERO,
        )

    if taxation_form == TaxationForm.LINIOWY:
        base = max(monthly_net_income, config.minimum_wage_gross)
        floor = config.minimum_wage_gross * config.linear_health_min_rate
        amount = _to_pln(max(base * config.health_insurance_rate_liniowy, floor))
        # The tax-credit alternative is not modelled; all of it reduces income
        return HealthInsuranceResult(
            amount=amount,
            deductible_from_income=amount,
            deductible_from_tax=_ZERO,
        )

    # Ryczałt
    multiplier = lump_sum_health_multiplier(config, yearly_revenue_to_date)
    amount = _to_pln(config.average_wage_q4_previous_year * config.lump_sum_health_rate * multiplier)
    return HealthInsuranceResult(
        amount=amount,
        deductible_from_income=_to_pln(amount * config.lump_sum_health_income_deduction),
        deductible_from_tax=_ZERO,
    )
