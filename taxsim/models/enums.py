"""Domain enums used across SQLAlchemy models and Pydantic schemas.

All enums use str mixin for JSON serialization; values are the tags stored
in the database and sent over the wire.
"""

from __future__ import annotations

from enum import Enum


class ZusType(str, Enum):
    """Social-insurance contribution class: determines the ZUS base."""

    ULGA_NA_START = "ulga_na_start"  # start relief, zero base
    PREFERENCYJNY = "preferencyjny"  # preferential, 30% of minimum wage
    MALY_PLUS = "maly_plus"  # small-flexible, custom base
    DUZY = "duzy"  # standard, 60% of average-wage prognosis


class TaxationForm(str, Enum):
    """Personal-business tax regime."""

    RYCZALT = "ryczalt"  # lump sum on revenue
    LINIOWY = "liniowy"  # flat 19% on income
    SKALA = "skala"  # progressive 12% / 32%


class EngineType(str, Enum):
    """Vehicle drivetrain: selects the depreciation ceiling."""

    COMBUSTION = "combustion"
    HYBRID_PLUGIN = "hybrid_plugin"
    ELECTRIC = "electric"


class FinancingMethod(str, Enum):
    """How a vehicle is paid for."""

    CASH = "cash"
    LEASING = "leasing"


class UsageType(str, Enum):
    """Vehicle usage: drives VAT recovery share."""

    MIXED = "mixed"
    FULL_BUSINESS = "full_business"


class InvestmentType(str, Enum):
    """Investment record tag. Car types carry a car_details row."""

    EQUIPMENT = "equipment"
    CAR_LEASING = "car_leasing"
    CAR_CASH = "car_cash"

    @property
    def is_car(self) -> bool:
        return self in (InvestmentType.CAR_LEASING, InvestmentType.CAR_CASH)


class LumpSumIndustry(str, Enum):
    """Industry whose lump-sum (ryczałt) rate applies to revenue."""

    IT_SERVICES = "it_services"
    TRADE = "trade"
    SERVICES_GENERAL = "services_general"
