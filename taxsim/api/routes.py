"""Simulation API: FastAPI router for scenarios, investments and rate tables.

Endpoints:
- POST /api/simulation/create
- GET  /api/simulation/{id}
- POST /api/simulation/{id}/investment
- POST /api/simulation/{id}/calculate
- GET  /api/simulations
- GET  /api/tax-config/{year}
- POST /api/tax-config

Domain errors map to 404 (missing scenario or rate table) and 422
(incomplete lease terms or car details); anything else is logged and
returned as 500.
"""
# ruff: noqa: B008

from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from taxsim.calculators.depreciation import MissingLeaseParametersError
from taxsim.calculators.tax import compare_all
from taxsim.config import settings
from taxsim.db.engine import get_session
from taxsim.models.scenario import Scenario
from taxsim.schemas.api import (
    CalculateRequest,
    CarDetailRead,
    CreatedResponse,
    InvestmentCreate,
    InvestmentRead,
    MessageResponse,
    ScenarioCreate,
    ScenarioDetail,
    ScenarioRead,
    ScenarioSummary,
    TaxYearConfigPayload,
    TaxYearConfigRead,
)
from taxsim.simulations import repository
from taxsim.simulations.builder import (
    IncompleteInvestmentError,
    build_scenario,
    rate_config_from_record,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["simulation"])


def _not_found(exc: LookupError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _dump(model: Any) -> Any:
    return model.model_dump(mode="json", by_alias=True)


def _scenario_detail(scenario: Scenario) -> ScenarioDetail:
    return ScenarioDetail(
        scenario=ScenarioRead.model_validate(scenario),
        investments=[InvestmentRead.model_validate(inv) for inv in scenario.investments],
        car_details=[
            CarDetailRead.model_validate(inv.car_details)
            for inv in scenario.investments
            if inv.car_details is not None
        ],
    )


# ── Scenarios ────────────────────────────────────────────────────────


@router.post("/simulation/create")
async def create_simulation(
    body: ScenarioCreate,
    db: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Create a new simulation scenario."""
    scenario = await repository.create_scenario(db, body)
    return _dump(CreatedResponse(id=scenario.id, created_at=scenario.created_at))


@router.get("/simulation/{scenario_id}")
async def get_simulation(
    scenario_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Scenario with all its investments and car details."""
    try:
        scenario = await repository.get_scenario(db, scenario_id)
    except repository.ScenarioNotFoundError as exc:
        raise _not_found(exc) from exc
    return _dump(_scenario_detail(scenario))


@router.get("/simulations")
async def list_simulations(db: AsyncSession = Depends(get_session)) -> list[dict[str, Any]]:
    """All scenarios, newest first, with investment counts."""
    scenarios = await repository.list_scenarios(db)
    summaries = [
        ScenarioSummary.model_validate({
            **ScenarioRead.model_validate(s).model_dump(),
            "investment_count": len(s.investments),
            "investments": [InvestmentRead.model_validate(inv) for inv in s.investments],
        })
        for s in scenarios
    ]
    return [_dump(summary) for summary in summaries]


# ── Investments ──────────────────────────────────────────────────────


@router.post("/simulation/{scenario_id}/investment")
async def add_investment(
    scenario_id: uuid.UUID,
    body: InvestmentCreate,
    db: AsyncSession = Depends(get_session),
) -> dict[str, str]:
    """Add a car or equipment investment to a scenario."""
    try:
        investment = await repository.add_investment(db, scenario_id, body)
    except repository.ScenarioNotFoundError as exc:
        raise _not_found(exc) from exc
    return {"id": str(investment.id)}


# ── Calculation ──────────────────────────────────────────────────────


@router.post("/simulation/{scenario_id}/calculate")
async def calculate(
    scenario_id: uuid.UUID,
    body: CalculateRequest,
    db: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Compare ryczałt, liniowy and skala for a stored scenario."""
    year = body.selected_tax_year or settings.simulator.default_tax_year

    try:
        scenario = await repository.get_scenario(db, scenario_id)
        config_record = await repository.get_tax_year_config(db, year)
    except (repository.ScenarioNotFoundError, repository.TaxYearConfigNotFoundError) as exc:
        raise _not_found(exc) from exc

    try:
        engine_input = build_scenario(
            scenario,
            rate_config_from_record(config_record),
            yearly_revenue_netto=body.yearly_revenue_netto,
            yearly_fixed_costs=body.yearly_fixed_costs,
        )
        result = compare_all(engine_input)
    except (MissingLeaseParametersError, IncompleteInvestmentError) as exc:
        logger.warning("Calculation rejected for scenario %s: %s", scenario_id, exc)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Calculation failed for scenario %s", scenario_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate taxes: {exc}",
        ) from exc

    logger.info(
        "Calculated scenario %s (year=%d, investments=%d)",
        scenario_id,
        year,
        len(engine_input.investments),
    )
    return _dump(result)


# ── Tax year configs ─────────────────────────────────────────────────


@router.get("/tax-config/{year}")
async def get_tax_config(year: int, db: AsyncSession = Depends(get_session)) -> dict[str, Any]:
    """Stored rate table for a year."""
    try:
        config = await repository.get_tax_year_config(db, year)
    except repository.TaxYearConfigNotFoundError as exc:
        raise _not_found(exc) from exc
    return _dump(TaxYearConfigRead.model_validate(config))


@router.post("/tax-config")
async def save_tax_config(
    body: TaxYearConfigPayload,
    db: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Create or update the rate table for a year."""
    config, created = await repository.upsert_tax_year_config(db, body)
    message = "Config created" if created else "Config updated"
    return _dump(MessageResponse(id=config.id, message=message))
