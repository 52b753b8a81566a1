"""Tax calculators: contributions, depreciation, regime comparison."""

from taxsim.calculators.contributions import calculate_health_insurance, calculate_social_insurance
from taxsim.calculators.depreciation import (
    MissingLeaseParametersError,
    calculate_car_depreciation,
    calculate_car_vat_benefit,
    calculate_equipment_depreciation,
)
from taxsim.calculators.tax import (
    calculate_flat_rate,
    calculate_for,
    calculate_linear,
    calculate_progressive,
    calculate_yearly_zus,
    compare_all,
)

__all__ = [
    "MissingLeaseParametersError",
    "calculate_car_depreciation",
    "calculate_car_vat_benefit",
    "calculate_equipment_depreciation",
    "calculate_flat_rate",
    "calculate_for",
    "calculate_health_insurance",
    "calculate_linear",
    "calculate_progressive",
    "calculate_social_insurance",
    "calculate_yearly_zus",
    "compare_all",
]
