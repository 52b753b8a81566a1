"""Database query functions for scenarios, investments and rate tables.

All functions take an AsyncSession and leave committing to the caller
(the `get_session` dependency commits at the end of a request).
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taxsim.calculators.rate_tables import DEFAULT_RATE_CONFIGS
from taxsim.models.scenario import CarDetail, Investment, Scenario
from taxsim.models.tax_year_config import TaxYearConfig
from taxsim.schemas.api import InvestmentCreate, ScenarioCreate, TaxYearConfigPayload

logger = logging.getLogger(__name__)

# Columns of tax_year_configs that a payload may set
TAX_YEAR_CONFIG_FIELDS: tuple[str, ...] = (
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


class ScenarioNotFoundError(LookupError):
    """Raised when a scenario id does not exist."""

    def __init__(self, scenario_id: uuid.UUID) -> None:
        super().__init__(f"Scenario not found: {scenario_id}")
        self.scenario_id = scenario_id


class TaxYearConfigNotFoundError(LookupError):
    """Raised when no rate table is stored for a year."""

    def __init__(self, year: int) -> None:
        super().__init__(f"Configuration not found for year {year}")
        self.year = year


# ── Scenarios ────────────────────────────────────────────────────────


async def create_scenario(db: AsyncSession, data: ScenarioCreate) -> Scenario:
    """Insert a new scenario and return it with its id assigned."""
    scenario = Scenario(
        id=uuid.uuid4(),
        created_at=datetime.now(UTC),
        title=data.title,
        yearly_revenue_netto=data.yearly_revenue_netto,
        yearly_fixed_costs=data.yearly_fixed_costs,
        vat_payer=data.vat_payer,
        vat_rate_mixed=data.vat_rate_mixed,
        zus_type=data.zus_type.value,
        current_taxation_form=data.current_taxation_form.value,
        lump_sum_industry=data.lump_sum_industry.value if data.lump_sum_industry else None,
        custom_social_base=data.custom_social_base,
        voluntary_sickness=data.voluntary_sickness,
    )
    db.add(scenario)
    await db.flush()
    logger.info("Scenario created: %s (zus=%s)", scenario.id, scenario.zus_type)
    return scenario


async def get_scenario(db: AsyncSession, scenario_id: uuid.UUID) -> Scenario:
    """Load a scenario with its investments and car details.

    Raises:
        ScenarioNotFoundError: No scenario with that id.
    """
    result = await db.execute(
        select(Scenario)
        .where(Scenario.id == scenario_id)
        .options(selectinload(Scenario.investments).selectinload(Investment.car_details))
    )
    scenario = result.scalar_one_or_none()
    if scenario is None:
        raise ScenarioNotFoundError(scenario_id)
    return scenario


async def list_scenarios(db: AsyncSession) -> list[Scenario]:
    """All scenarios, newest first, with their investments loaded."""
    result = await db.execute(
        select(Scenario)
        .options(selectinload(Scenario.investments))
        .order_by(Scenario.created_at.desc())
    )
    return list(result.scalars().all())


# ── Investments ──────────────────────────────────────────────────────


async def add_investment(db: AsyncSession, scenario_id: uuid.UUID, data: InvestmentCreate) -> Investment:
    """Attach an investment (and car details for car types) to a scenario.

    Raises:
        ScenarioNotFoundError: No scenario with that id.
    """
    exists = await db.execute(select(Scenario.id).where(Scenario.id == scenario_id))
    if exists.scalar_one_or_none() is None:
        raise ScenarioNotFoundError(scenario_id)

    investment = Investment(
        id=uuid.uuid4(),
        scenario_id=scenario_id,
        name=data.name,
        cost_netto=data.cost_netto,
        month_of_purchase=data.month_of_purchase,
        type=data.type.value,
    )
    db.add(investment)

    if data.type.is_car and data.car_details is not None:
        car = data.car_details
        db.add(CarDetail(
            investment_id=investment.id,
            engine_type=car.engine_type.value,
            financing_method=car.financing_method.value,
            car_price_netto=car.car_price_netto,
            leasing_initial_payment_percent=car.leasing_initial_payment_percent,
            leasing_months=car.leasing_months,
            leasing_buyout_percent=car.leasing_buyout_percent,
            usage_type=car.usage_type.value,
        ))

    await db.flush()
    logger.info("Investment added: scenario=%s type=%s id=%s", scenario_id, investment.type, investment.id)
    return investment


# ── Tax year configs ─────────────────────────────────────────────────


async def get_tax_year_config(db: AsyncSession, year: int) -> TaxYearConfig:
    """Stored rate table for a year.

    Raises:
        TaxYearConfigNotFoundError: Nothing stored for the year.
    """
    result = await db.execute(select(TaxYearConfig).where(TaxYearConfig.year == year))
    config = result.scalar_one_or_none()
    if config is None:
        raise TaxYearConfigNotFoundError(year)
    return config


async def upsert_tax_year_config(db: AsyncSession, data: TaxYearConfigPayload) -> tuple[TaxYearConfig, bool]:
    """Create or update the rate table for `data.year`.

    Fields left out of the payload keep their stored value on update and
    take the column default on create.

    Returns:
        (config, created) where created is False for an update.
    """
    values: dict[str, Any] = {
        name: getattr(data, name) for name in TAX_YEAR_CONFIG_FIELDS if getattr(data, name) is not None
    }

    result = await db.execute(select(TaxYearConfig).where(TaxYearConfig.year == data.year))
    config = result.scalar_one_or_none()

    if config is not None:
        for name, value in values.items():
            setattr(config, name, value)
        await db.flush()
        logger.info("Tax year config updated: year=%d fields=%s", data.year, sorted(values))
        return config, False

    config = TaxYearConfig(id=uuid.uuid4(), year=data.year, **values)
    db.add(config)
    await db.flush()
    logger.info("Tax year config created: year=%d", data.year)
    return config, True


async def seed_default_tax_year_configs(db: AsyncSession) -> int:
    """Insert statutory defaults for years that have no stored rate table.

    Idempotent: existing rows are never touched. Returns the number inserted.
    """
    result = await db.execute(select(TaxYearConfig.year))
    existing = set(result.scalars().all())

    inserted = 0
    for year, rates in DEFAULT_RATE_CONFIGS.items():
        if year in existing:
            continue
        db.add(TaxYearConfig(
            id=uuid.uuid4(),
            year=year,
            **{name: getattr(rates, name) for name in TAX_YEAR_CONFIG_FIELDS},
        ))
        inserted += 1

    if inserted:
        await db.flush()
    return inserted

