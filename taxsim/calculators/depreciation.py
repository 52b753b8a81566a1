"""Depreciation and VAT recovery for planned investments.

Pure Python, Decimal arithmetic. Single-year view: only the part of the
deduction that falls into the fiscal year of purchase is computed.

Cash vehicle:
    min(price, ceiling) × 20% × months_left / 12
Leased vehicle:
    initial × ratio + capital / term × months × ratio + capital × 5% × months / 12
    where ratio = min(1, ceiling / price) and months = min(months_left, term).
    Interest is not subject to the ceiling.
Equipment:
    cost × 30% × months_left / 12

months_left counts the purchase month, so a January purchase gives 12.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from taxsim.models.enums import FinancingMethod, UsageType
from taxsim.schemas.rates import RateConfig
from taxsim.schemas.scenario import EquipmentInvestment, VehicleInvestment

_ZERO = Decimal("0")
_ONE = Decimal("1")
_TWELVE = Decimal("12")


class MissingLeaseParametersError(ValueError):
    """Raised when a leased vehicle lacks term, initial payment or buyout."""

    def __init__(self, vehicle_name: str, missing: list[str]) -> None:
        super().__init__(
            f"Missing lease parameters for vehicle '{vehicle_name}': {', '.join(missing)}"
        )
        self.vehicle_name = vehicle_name
        self.missing = missing


def _to_pln(value: Decimal) -> Decimal:
    """Round to grosze (2 decimal places)."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def months_remaining(month_of_purchase: int) -> int:
    """Months of ownership in the purchase year, purchase month included."""
    return 13 - month_of_purchase


def deductible_ratio(price: Decimal, limit: Decimal) -> Decimal:
    """Share of a vehicle's cost that fits under the ceiling.

    A zero price trivially fits, so the ratio is 1.
    """
    if price <= _ZERO:
        return _ONE
    return min(_ONE, limit / price)


def _missing_lease_fields(vehicle: VehicleInvestment) -> list[str]:
    missing = []
    if vehicle.leasing_months is None:
        missing.append("leasing_months")
    if vehicle.leasing_initial_payment is None:
        missing.append("leasing_initial_payment")
    if vehicle.leasing_buyout is None:
        missing.append("leasing_buyout")
    return missing


def calculate_car_depreciation(vehicle: VehicleInvestment, config: RateConfig) -> Decimal:
    """Deductible vehicle cost falling into the purchase year.

    Args:
        vehicle: Vehicle investment.
        config: Rate table (ceilings, depreciation and interest rates).

    Returns:
        This year's deduction.

    Raises:
        MissingLeaseParametersError: Leased vehicle without complete lease terms.
    """
    limit = config.car_depreciation_limit(vehicle.engine_type)
    months_left = months_remaining(vehicle.month_of_purchase)
    price = vehicle.car_price_netto

    if vehicle.financing_method == FinancingMethod.CASH:
        depreciable = min(price, limit)
        return _to_pln(depreciable * config.car_depreciation_rate * months_left / _TWELVE)

    missing = _missing_lease_fields(vehicle)
    if missing or not vehicle.leasing_months:
        raise MissingLeaseParametersError(vehicle.name, missing or ["leasing_months"])

    initial_payment = price * vehicle.leasing_initial_payment
    buyout = price * vehicle.leasing_buyout
    capital = price - initial_payment - buyout
    ratio = deductible_ratio(price, limit)

    months = min(months_left, vehicle.leasing_months)
    capital_deduction = capital / vehicle.leasing_months * months * ratio
    initial_deduction = initial_payment * ratio
    # Flat interest approximation, fully deductible
    interest = capital * config.leasing_interest_rate * months / _TWELVE

    return _to_pln(initial_deduction + capital_deduction + interest)


def calculate_car_vat_benefit(vehicle: VehicleInvestment, config: RateConfig) -> Decimal:
    """Recoverable VAT on a vehicle: full for business use, half for mixed use."""
    vat = vehicle.car_price_netto * config.vat_rate
    if vehicle.usage_type == UsageType.FULL_BUSINESS:
        return _to_pln(vat)
    return _to_pln(vat * config.vat_recovery_mixed_use)


def calculate_equipment_depreciation(equipment: EquipmentInvestment, config: RateConfig) -> Decimal:
    """Equipment deduction for the purchase year. No ceiling."""
    months_left = months_remaining(equipment.month_of_purchase)
    return _to_pln(equipment.cost_netto * config.equipment_depreciation_rate * months_left / _TWELVE)


def calculate_equipment_vat_benefit(equipment: EquipmentInvestment, config: RateConfig) -> Decimal:
    """Recoverable VAT on equipment before the scenario's recoverable fraction."""
    return _to_pln(equipment.cost_netto * config.vat_rate)
