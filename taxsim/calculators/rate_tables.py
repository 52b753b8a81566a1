"""Statutory rate tables for 2025-2028.

Seeded into `tax_year_configs` at startup and used by tests. Wage figures
for 2027-2028 are projections and should be updated once announced.
"""

from __future__ import annotations

from decimal import Decimal

from taxsim.schemas.rates import RateConfig


def _config(
    year: int,
    minimum_wage: str,
    average_wage: str,
    average_wage_q4: str,
    health_limit_linear: str,
) -> RateConfig:
    return RateConfig(
        year=year,
        minimum_wage_gross=Decimal(minimum_wage),
        average_wage_prognosis=Decimal(average_wage),
        average_wage_q4_previous_year=Decimal(average_wage_q4),
        health_insurance_limit_linear=Decimal(health_limit_linear),
    )


DEFAULT_RATE_CONFIGS: dict[int, RateConfig] = {
    2025: _config(2025, "4388", "7143", "7000", "11300"),
    2026: _config(2026, "4626", "7286", "7000", "11600"),
    2027: _config(2027, "4750", "7500", "7286", "11900"),
    2028: _config(2028, "4900", "7700", "7500", "12200"),
}


def get_default_rate_config(year: int) -> RateConfig:
    """Statutory defaults for a year.

    Raises:
        KeyError: No defaults are known for the year.
    """
    try:
        return DEFAULT_RATE_CONFIGS[year]
    except KeyError:
        msg = f"No default rate table for {year} (known: {sorted(DEFAULT_RATE_CONFIGS)})"
        raise KeyError(msg) from None
