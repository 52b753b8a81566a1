"""Tests for the yearly regime comparison.

Tests cover:
- Worked example: 180k revenue, 36k costs, maly_plus, no investments
- Ryczałt: industry rate, independence from costs and investments
- Liniowy: health cap, depreciation lowering the base
- Skala: allowance and the second bracket
- VAT benefit: recoverable fraction, non-VAT payers, identical across regimes
- Dispatch by regime tag and the recommended regime
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

import pytest
from pydantic import ValidationError

from taxsim.calculators.depreciation import MissingLeaseParametersError
from taxsim.calculators.rate_tables import get_default_rate_config
from taxsim.calculators.tax import (
    calculate_flat_rate,
    calculate_for,
    calculate_linear,
    calculate_progressive,
    calculate_yearly_zus,
    compare_all,
    scale_income_tax,
)
from taxsim.models.enums import (
    EngineType,
    FinancingMethod,
    LumpSumIndustry,
    TaxationForm,
    UsageType,
    ZusType,
)
from taxsim.schemas.results import TaxResult
from taxsim.schemas.scenario import EquipmentInvestment, Investment, Scenario, VehicleInvestment

CONFIG = get_default_rate_config(2026)


def _scenario(
    revenue: str = "180000",
    costs: str = "36000",
    zus_type: ZusType = ZusType.MALY_PLUS,
    investments: tuple[Investment, ...] = (),
    **overrides: object,
) -> Scenario:
    """Helper to create a scenario against the 2026 rate table."""
    return Scenario(
        yearly_revenue_netto=Decimal(revenue),
        yearly_fixed_costs=Decimal(costs),
        zus_type=zus_type,
        investments=investments,
        rate_config=CONFIG,
        **overrides,
    )


def _cash_car(price: str = "150000", usage: UsageType = UsageType.FULL_BUSINESS) -> VehicleInvestment:
    return VehicleInvestment(
        name="Car",
        car_price_netto=Decimal(price),
        engine_type=EngineType.COMBUSTION,
        financing_method=FinancingMethod.CASH,
        usage_type=usage,
        month_of_purchase=1,
    )


def _laptop(cost: str = "10000") -> EquipmentInvestment:
    return EquipmentInvestment(name="Laptop", cost_netto=Decimal(cost), month_of_purchase=1)


class TestWorkedExample:
    """180k revenue, 36k costs, maly_plus at minimum wage, no investments."""

    def test_yearly_zus(self) -> None:
        """Maly plus at minimum wage → 1577 × 12."""
        assert calculate_yearly_zus(ZusType.MALY_PLUS, CONFIG) == Decimal("18924.00")

    def test_flat_rate(self) -> None:
        """Ryczałt: 12% of revenue, middle health tier."""
        result = calculate_flat_rate(_scenario())
        assert result.taxation_form == TaxationForm.RYCZALT
        assert result.income_tax == Decimal("21600.00")
        assert result.health_insurance == Decimal("7560.00")
        assert result.zus_total == Decimal("18924.00")
        assert result.total_costs == Decimal("0")
        assert result.taxable_income == Decimal("180000.00")
        assert result.net_cash_in_hand == Decimal("131916.00")

    def test_linear(self) -> None:
        """Liniowy: 19% of income, 4.9% health."""
        result = calculate_linear(_scenario())
        assert result.taxable_income == Decimal("144000.00")
        assert result.income_tax == Decimal("27360.00")
        assert result.health_insurance == Decimal("7056.00")
        assert result.net_cash_in_hand == Decimal("90660.00")

    def test_progressive(self) -> None:
        """Skala: 12% after the 30k allowance, 9% health."""
        result = calculate_progressive(_scenario())
        assert result.taxable_income == Decimal("114000.00")
        assert result.income_tax == Decimal("13680.00")
        assert result.health_insurance == Decimal("12960.00")
        assert result.net_cash_in_hand == Decimal("98436.00")

    def test_flat_rate_recommended(self) -> None:
        """Ryczałt leaves the most cash here."""
        assert compare_all(_scenario()).best().taxation_form == TaxationForm.RYCZALT


class TestFlatRate:
    def test_industry_rate(self) -> None:
        """Trade industry → 3%."""
        result = calculate_flat_rate(_scenario(lump_sum_industry=LumpSumIndustry.TRADE))
        assert result.income_tax == Decimal("5400.00")

    def test_low_revenue_health_tier(self) -> None:
        """Revenue under 60k → low health tier."""
        result = calculate_flat_rate(_scenario(revenue="50000", costs="0"))
        assert result.health_insurance == Decimal("4536.00")  # 378 × 12

    def test_independent_of_costs_and_investments(self) -> None:
        """Costs and depreciation do not touch ryczałt."""
        plain = calculate_flat_rate(_scenario(vat_payer=False))
        loaded = calculate_flat_rate(
            _scenario(costs="90000", investments=(_cash_car(), _laptop()), vat_payer=False)
        )
        assert loaded.income_tax == plain.income_tax
        assert loaded.net_cash_in_hand == plain.net_cash_in_hand
        assert loaded.breakdown.car_depreciation_deduction == Decimal("0")

    def test_ulga_na_start_no_zus(self) -> None:
        """Ulga na start → no ZUS."""
        result = calculate_flat_rate(_scenario(zus_type=ZusType.ULGA_NA_START))
        assert result.zus_total == Decimal("0.00")
        assert result.net_cash_in_hand == Decimal("150840.00")


class TestLinear:
    def test_health_capped(self) -> None:
        """Liniowy health stops at the yearly limit."""
        result = calculate_linear(_scenario(revenue="400000", costs="0"))
        assert result.health_insurance == Decimal("11600.00")

    def test_loss_gives_zero_tax(self) -> None:
        """Costs above revenue → no tax, no health."""
        result = calculate_linear(_scenario(revenue="20000", costs="50000"))
        assert result.taxable_income == Decimal("0.00")
        assert result.income_tax == Decimal("0.00")
        assert result.health_insurance == Decimal("0.00")

    def test_depreciation_lowers_base(self) -> None:
        """Car and equipment depreciation lower the base."""
        result = calculate_linear(_scenario(investments=(_cash_car(), _laptop())))
        assert result.breakdown.car_depreciation_deduction == Decimal("20000.00")
        assert result.breakdown.equipment_depreciation_deduction == Decimal("3000.00")
        assert result.total_costs == Decimal("59000.00")
        assert result.taxable_income == Decimal("121000.00")


class TestProgressive:
    def test_second_bracket(self) -> None:
        """Income above the threshold → 32% on the excess."""
        result = calculate_progressive(_scenario(revenue="300000", costs="0"))
        # 120000 × 12% + 150000 × 32%
        assert result.income_tax == Decimal("62400.00")

    def test_within_allowance(self) -> None:
        """Income within the allowance → no tax."""
        result = calculate_progressive(_scenario(revenue="25000", costs="0"))
        assert result.taxable_income == Decimal("0.00")
        assert result.income_tax == Decimal("0.00")
        assert result.health_insurance == Decimal("2250.00")

    def test_threshold_boundary(self) -> None:
        """The threshold itself is taxed at 12%."""
        assert scale_income_tax(Decimal("120000"), CONFIG) == Decimal("14400.00")
        assert scale_income_tax(Decimal("120001"), CONFIG) == Decimal("14400.32")

    def test_tax_monotonic_in_income(self) -> None:
        """Scale tax never falls as income grows."""
        taxes = [scale_income_tax(Decimal(income), CONFIG) for income in ("0", "50000", "120000", "200000")]
        assert taxes == sorted(taxes)


class TestNetCashMonotonic:
    """More revenue at fixed costs never leaves less cash, within one bracket and health tier."""

    # 100k-180k at 36k costs stays in the 12% skala bracket and the middle ryczałt tier
    REVENUES = ("100000", "120000", "140000", "160000", "180000")

    @pytest.mark.parametrize("calculate", [calculate_flat_rate, calculate_linear, calculate_progressive])
    def test_net_cash_non_decreasing(self, calculate: Callable[[Scenario], TaxResult]) -> None:
        """Net cash grows with revenue in every regime."""
        net = [calculate(_scenario(revenue=revenue)).net_cash_in_hand for revenue in self.REVENUES]
        assert net == sorted(net)
        assert net[0] < net[-1]

    @pytest.mark.parametrize("calculate", [calculate_flat_rate, calculate_linear, calculate_progressive])
    def test_holds_with_investments(self, calculate: Callable[[Scenario], TaxResult]) -> None:
        """Depreciation and VAT recovery do not break the ordering."""
        investments = (_cash_car(), _laptop())
        net = [
            calculate(_scenario(revenue=revenue, investments=investments)).net_cash_in_hand
            for revenue in self.REVENUES
        ]
        assert net == sorted(net)


class TestVatBenefit:
    def test_scaled_by_recoverable_fraction(self) -> None:
        """VAT is scaled by the recoverable fraction."""
        scenario = _scenario(investments=(_cash_car(), _laptop()), vat_rate_mixed=Decimal("0.5"))
        # (34500 + 2300) × 0.5
        assert calculate_linear(scenario).breakdown.vat_benefit == Decimal("18400.00")

    def test_mixed_use_car(self) -> None:
        """Mixed-use car → half the VAT."""
        full = _scenario(investments=(_cash_car("100000"),), vat_rate_mixed=Decimal("0.8"))
        mixed = _scenario(
            investments=(_cash_car("100000", usage=UsageType.MIXED),), vat_rate_mixed=Decimal("0.8")
        )
        assert calculate_linear(full).breakdown.vat_benefit == Decimal("18400.00")
        assert calculate_linear(mixed).breakdown.vat_benefit == Decimal("9200.00")

    def test_non_vat_payer(self) -> None:
        """Non-VAT payers recover nothing."""
        result = compare_all(_scenario(investments=(_cash_car(),), vat_payer=False))
        assert result.flat_rate.breakdown.vat_benefit == Decimal("0")
        assert result.linear.breakdown.vat_benefit == Decimal("0")

    def test_identical_across_regimes(self) -> None:
        """VAT benefit is the same in every regime."""
        result = compare_all(_scenario(investments=(_cash_car(), _laptop())))
        vat = {r.breakdown.vat_benefit for r in (result.flat_rate, result.linear, result.progressive)}
        assert vat == {Decimal("36800.00")}  # 34500 + 2300

    def test_added_to_net_cash(self) -> None:
        """Recovered VAT adds to net cash."""
        without = calculate_flat_rate(_scenario(investments=(_cash_car(),), vat_payer=False))
        with_vat = calculate_flat_rate(_scenario(investments=(_cash_car(),)))
        assert with_vat.net_cash_in_hand - without.net_cash_in_hand == Decimal("34500.00")


class TestCompareAll:
    def test_same_zus_in_every_regime(self) -> None:
        """ZUS does not depend on the regime."""
        result = compare_all(_scenario(zus_type=ZusType.DUZY))
        zus = {r.zus_total for r in (result.flat_rate, result.linear, result.progressive)}
        assert zus == {Decimal("17883.36")}  # 1490.28 × 12

    def test_regime_tags(self) -> None:
        """Each result carries its regime tag."""
        result = compare_all(_scenario())
        assert result.flat_rate.taxation_form == TaxationForm.RYCZALT
        assert result.linear.taxation_form == TaxationForm.LINIOWY
        assert result.progressive.taxation_form == TaxationForm.SKALA

    def test_missing_lease_terms_fail_whole_comparison(self) -> None:
        """Incomplete lease aborts the whole comparison."""
        leased = VehicleInvestment(
            name="Leased",
            car_price_netto=Decimal("150000"),
            engine_type=EngineType.COMBUSTION,
            financing_method=FinancingMethod.LEASING,
            usage_type=UsageType.FULL_BUSINESS,
            month_of_purchase=1,
        )
        with pytest.raises(MissingLeaseParametersError):
            compare_all(_scenario(investments=(leased,)))

    def test_json_keys(self) -> None:
        """Wire keys are the Polish regime tags."""
        payload = compare_all(_scenario()).model_dump(mode="json", by_alias=True)
        assert set(payload) == {"ryczalt", "liniowy", "skala"}
        assert payload["ryczalt"]["netCashInHand"] == 131916.0
        assert payload["liniowy"]["breakdown"]["vatBenefit"] == 0.0


class TestCalculateFor:
    @pytest.mark.parametrize("form", list(TaxationForm))
    def test_matches_comparison(self, form: TaxationForm) -> None:
        """Single-regime dispatch matches compare_all."""
        scenario = _scenario(investments=(_cash_car(),))
        single = calculate_for(form, scenario)
        comparison = compare_all(scenario)
        by_form = {r.taxation_form: r for r in (comparison.flat_rate, comparison.linear, comparison.progressive)}
        assert single == by_form[form]


class TestScenarioInput:
    """Engine input validation."""

    @pytest.mark.parametrize("base", ["0", "-1000"])
    def test_custom_social_base_must_be_positive(self, base: str) -> None:
        """Zero or negative ZUS base is rejected."""
        with pytest.raises(ValidationError):
            _scenario(custom_social_base=Decimal(base))

    def test_custom_social_base_accepted(self) -> None:
        """A positive maly_plus base flows into the yearly ZUS."""
        result = calculate_flat_rate(_scenario(custom_social_base=Decimal("2500")))
        assert result.zus_total < calculate_yearly_zus(ZusType.MALY_PLUS, CONFIG)
