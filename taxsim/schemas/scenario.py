"""Pydantic schemas for the calculation input.

Pure data classes, no DB dependencies. A Scenario is built per calculation
and never mutated; vary a field with `scenario.model_copy(update=...)`.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from taxsim.models.enums import (
    EngineType,
    FinancingMethod,
    LumpSumIndustry,
    UsageType,
    ZusType,
)
from taxsim.schemas.rates import Money, RateConfig

PurchaseMonth = Annotated[int, Field(ge=1, le=12)]


class EquipmentInvestment(BaseModel):
    """Equipment bought this year (computers, tools)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["equipment"] = "equipment"
    name: str = ""
    cost_netto: Money
    month_of_purchase: PurchaseMonth


class VehicleInvestment(BaseModel):
    """Company car bought for cash or taken on lease.

    Lease fields are fractions (0.10 = 10%). They are only read when
    financing_method is LEASING; the depreciation calculator rejects a
    leased vehicle that lacks any of them.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["vehicle"] = "vehicle"
    name: str = ""
    car_price_netto: Money
    engine_type: EngineType
    financing_method: FinancingMethod
    usage_type: UsageType
    month_of_purchase: PurchaseMonth
    leasing_initial_payment: Decimal | None = None
    leasing_months: int | None = None
    leasing_buyout: Decimal | None = None


Investment = Annotated[EquipmentInvestment | VehicleInvestment, Field(discriminator="kind")]


class Scenario(BaseModel):
    """Everything the tax engine needs for one fiscal-year comparison."""

    model_config = ConfigDict(frozen=True)

    yearly_revenue_netto: Money
    yearly_fixed_costs: Money
    vat_payer: bool = True
    vat_rate_mixed: Decimal = Decimal("1.0")  # share of VAT recoverable, 1.0 = 100%
    zus_type: ZusType
    investments: tuple[Investment, ...] = ()
    rate_config: RateConfig
    lump_sum_industry: LumpSumIndustry = LumpSumIndustry.IT_SERVICES
    custom_social_base: Annotated[Decimal, Field(gt=0)] | None = None  # maly_plus only
    voluntary_sickness: bool = False

    @property
    def vehicles(self) -> list[VehicleInvestment]:
        return [inv for inv in self.investments if isinstance(inv, VehicleInvestment)]

    @property
    def equipment(self) -> list[EquipmentInvestment]:
        return [inv for inv in self.investments if isinstance(inv, EquipmentInvestment)]
