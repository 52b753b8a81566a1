"""Request and response bodies for the simulation API.

Wire format is camelCase (`yearlyRevenueNetto`, `carDetails`, ...);
Python code uses the snake_case field names.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from taxsim.models.enums import (
    EngineType,
    FinancingMethod,
    InvestmentType,
    LumpSumIndustry,
    TaxationForm,
    UsageType,
    ZusType,
)
from taxsim.schemas.rates import Money, Rate

Percent = Annotated[Decimal, Field(ge=0, le=100)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class ScenarioCreate(_CamelModel):
    """Body of POST /api/simulation/create."""

    title: str | None = None
    yearly_revenue_netto: Money = Decimal("0")
    yearly_fixed_costs: Money = Decimal("0")
    vat_payer: bool = True
    vat_rate_mixed: Annotated[Decimal, Field(ge=0, le=1)] = Decimal("1.0")
    zus_type: ZusType
    current_taxation_form: TaxationForm
    lump_sum_industry: LumpSumIndustry | None = None
    custom_social_base: Annotated[Decimal, Field(gt=0)] | None = None
    voluntary_sickness: bool = False


class CarDetailsCreate(_CamelModel):
    """Vehicle part of an investment request. Lease terms in percent."""

    engine_type: EngineType
    financing_method: FinancingMethod
    car_price_netto: Annotated[Decimal, Field(ge=0)]
    leasing_initial_payment_percent: Percent | None = None
    leasing_months: Annotated[int, Field(gt=0)] | None = None
    leasing_buyout_percent: Percent | None = None
    usage_type: UsageType

    @model_validator(mode="after")
    def _lease_terms_present(self) -> CarDetailsCreate:
        if self.financing_method != FinancingMethod.LEASING:
            return self
        missing = [
            name
            for name in ("leasing_initial_payment_percent", "leasing_months", "leasing_buyout_percent")
            if getattr(self, name) is None
        ]
        if missing:
            msg = f"Leasing requires: {', '.join(missing)}"
            raise ValueError(msg)
        return self


class InvestmentCreate(_CamelModel):
    """Body of POST /api/simulation/{id}/investment."""

    name: str
    cost_netto: Annotated[Decimal, Field(ge=0)]
    month_of_purchase: Annotated[int, Field(ge=1, le=12)]
    type: InvestmentType
    car_details: CarDetailsCreate | None = None

    @model_validator(mode="after")
    def _car_details_match_type(self) -> InvestmentCreate:
        if not self.type.is_car:
            return self
        if self.car_details is None:
            msg = f"carDetails required for investment type {self.type.value}"
            raise ValueError(msg)
        expected = FinancingMethod.LEASING if self.type == InvestmentType.CAR_LEASING else FinancingMethod.CASH
        if self.car_details.financing_method != expected:
            msg = f"Investment type {self.type.value} requires financingMethod={expected.value}"
            raise ValueError(msg)
        return self


class CalculateRequest(_CamelModel):
    """Body of POST /api/simulation/{id}/calculate."""

    yearly_revenue_netto: Annotated[Decimal, Field(ge=0)]
    yearly_fixed_costs: Annotated[Decimal, Field(ge=0)]
    selected_tax_year: int | None = None


class TaxYearConfigPayload(_CamelModel):
    """Body of POST /api/tax-config. Omitted rates keep their defaults."""

    year: int
    minimum_wage_gross: Rate
    average_wage_prognosis: Rate
    average_wage_q4_previous_year: Rate
    retirement_rate: Rate | None = None
    disability_rate: Rate | None = None
    accident_rate: Rate | None = None
    sickness_rate: Rate | None = None
    work_fund_rate: Rate | None = None
    solidarity_fund_rate: Rate | None = None
    health_insurance_rate_skala: Rate | None = None
    health_insurance_rate_liniowy: Rate | None = None
    health_insurance_limit_linear: Rate | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class CreatedResponse(_CamelModel):
    id: uuid.UUID
    created_at: datetime | None = None


class MessageResponse(_CamelModel):
    id: uuid.UUID
    message: str


class ScenarioRead(_CamelModel):
    id: uuid.UUID
    created_at: datetime
    title: str | None
    yearly_revenue_netto: Money
    yearly_fixed_costs: Money
    vat_payer: bool
    vat_rate_mixed: Money
    zus_type: ZusType
    current_taxation_form: TaxationForm
    lump_sum_industry: LumpSumIndustry | None = None
    custom_social_base: Money | None = None
    voluntary_sickness: bool = False


class InvestmentRead(_CamelModel):
    id: uuid.UUID
    scenario_id: uuid.UUID
    name: str
    cost_netto: Money
    month_of_purchase: int
    type: InvestmentType


class CarDetailRead(_CamelModel):
    investment_id: uuid.UUID
    engine_type: EngineType
    financing_method: FinancingMethod
    car_price_netto: Money
    leasing_initial_payment_percent: Money | None = None
    leasing_months: int | None = None
    leasing_buyout_percent: Money | None = None
    usage_type: UsageType


class ScenarioDetail(_CamelModel):
    """Body of GET /api/simulation/{id}."""

    scenario: ScenarioRead
    investments: list[InvestmentRead]
    car_details: list[CarDetailRead]


class ScenarioSummary(ScenarioRead):
    """Entry of GET /api/simulations."""

    investment_count: int
    investments: list[InvestmentRead] = []


class TaxYearConfigRead(_CamelModel):
    id: uuid.UUID
    year: int
    minimum_wage_gross: Money
    average_wage_prognosis: Money
    average_wage_q4_previous_year: Money
    retirement_rate: Money
    disability_rate: Money
    accident_rate: Money
    sickness_rate: Money
    work_fund_rate: Money
    solidarity_fund_rate: Money
    health_insurance_rate_skala: Money
    health_insurance_rate_liniowy: Money
    health_insurance_limit_linear: Money
