"""SQLAlchemy ORM models for the tax simulator.

Import all models here so Alembic and Base.metadata.create_all() discover them.
"""

from __future__ import annotations

from taxsim.models.base import Base
from taxsim.models.enums import (
    EngineType,
    FinancingMethod,
    InvestmentType,
    LumpSumIndustry,
    TaxationForm,
    UsageType,
    ZusType,
)
from taxsim.models.scenario import CarDetail, Investment, Scenario
from taxsim.models.tax_year_config import TaxYearConfig

__all__ = [
    # Base
    "Base",
    # Models
    "Scenario",
    "Investment",
    "CarDetail",
    "TaxYearConfig",
    # Enums
    "ZusType",
    "TaxationForm",
    "EngineType",
    "FinancingMethod",
    "UsageType",
    "InvestmentType",
    "LumpSumIndustry",
]
