"""Tests for application settings and the per-year rate tables."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from taxsim.calculators.rate_tables import DEFAULT_RATE_CONFIGS, get_default_rate_config
from taxsim.config import Settings, SimulatorSettings
from taxsim.models.enums import EngineType, LumpSumIndustry
from taxsim.schemas.rates import RateConfig


class TestSettings:
    def test_log_level_uppercased(self):
        """Log level is normalised to upper case."""
        assert Settings(log_level="info").log_level == "INFO"

    def test_invalid_log_level(self):
        """Unknown log level fails validation."""
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_is_production(self):
        """Production flag follows the environment name."""
        assert Settings(environment="production").is_production
        assert not Settings(environment="development").is_production

    def test_simulator_defaults_from_env(self, monkeypatch):
        """Simulator defaults are read from the environment."""
        monkeypatch.setenv("DEFAULT_TAX_YEAR", "2027")
        monkeypatch.setenv("DEFAULT_LUMP_SUM_INDUSTRY", "trade")

        simulator = SimulatorSettings()

        assert simulator.default_tax_year == 2027
        assert simulator.default_lump_sum_industry == LumpSumIndustry.TRADE

    def test_sync_database_url(self):
        """Alembic gets a sync driver URL."""
        settings = Settings()
        assert "+asyncpg" not in settings.db.database_url_sync


class TestRateConfig:
    def _config(self, **overrides) -> RateConfig:
        values = {
            "year": 2026,
            "minimum_wage_gross": Decimal("4626"),
            "average_wage_prognosis": Decimal("7286"),
            "average_wage_q4_previous_year": Decimal("7000"),
        }
        values.update(overrides)
        return RateConfig(**values)

    def test_negative_rate_rejected(self):
        """Negative rates are rejected."""
        with pytest.raises(ValidationError):
            self._config(retirement_rate=Decimal("-0.01"))

    def test_negative_wage_rejected(self):
        """Negative wages are rejected."""
        with pytest.raises(ValidationError):
            self._config(minimum_wage_gross=Decimal("-1"))

    def test_immutable(self):
        """RateConfig is frozen."""
        config = self._config()
        with pytest.raises(ValidationError):
            config.year = 2027

    def test_car_limits(self):
        """Vehicle ceiling depends on engine type."""
        config = self._config()
        assert config.car_depreciation_limit(EngineType.COMBUSTION) == Decimal("100000")
        assert config.car_depreciation_limit(EngineType.HYBRID_PLUGIN) == Decimal("150000")
        assert config.car_depreciation_limit(EngineType.ELECTRIC) == Decimal("225000")

    def test_lump_sum_rates(self):
        """Each industry has its own lump-sum rate."""
        config = self._config()
        assert config.lump_sum_rate(LumpSumIndustry.IT_SERVICES) == Decimal("0.12")
        assert config.lump_sum_rate(LumpSumIndustry.TRADE) == Decimal("0.03")
        assert config.lump_sum_rate(LumpSumIndustry.SERVICES_GENERAL) == Decimal("0.085")

    def test_accepts_camel_case(self):
        """camelCase input is accepted."""
        config = RateConfig.model_validate({
            "year": 2026,
            "minimumWageGross": 4626,
            "averageWagePrognosis": 7286,
            "averageWageQ4PreviousYear": 7000,
        })
        assert config.average_wage_q4_previous_year == Decimal("7000")

    def test_json_dump_uses_numbers(self):
        """Money and rates serialise as JSON numbers."""
        payload = self._config().model_dump(mode="json", by_alias=True)
        assert payload["minimumWageGross"] == 4626.0
        assert payload["linearTaxRate"] == 0.19


class TestDefaultRateTables:
    def test_known_years(self):
        """Defaults cover 2025-2028."""
        assert sorted(DEFAULT_RATE_CONFIGS) == [2025, 2026, 2027, 2028]

    def test_2026_values(self):
        """2026 table matches the published figures."""
        config = get_default_rate_config(2026)
        assert config.minimum_wage_gross == Decimal("4626")
        assert config.average_wage_prognosis == Decimal("7286")
        assert config.health_insurance_limit_linear == Decimal("11600")

    def test_unknown_year(self):
        """Unknown year raises KeyError."""
        with pytest.raises(KeyError, match="2019"):
            get_default_rate_config(2019)
