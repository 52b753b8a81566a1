"""Tax year configuration: one row of statutory rates per fiscal year.

Rows for 2025-2028 are seeded at startup from the default rate tables and
can be edited through the tax-config API.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from taxsim.models.base import Base, TimestampMixin, money_column, rate_column


class TaxYearConfig(TimestampMixin, Base):
    """Rate table for one fiscal year."""

    __tablename__ = "tax_year_configs"

    year: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)

    # Wage bases (monthly)
    minimum_wage_gross: Mapped[Decimal] = money_column()
    average_wage_prognosis: Mapped[Decimal] = money_column()
    average_wage_q4_previous_year: Mapped[Decimal] = money_column()

    # ZUS component rates
    retirement_rate: Mapped[Decimal] = rate_column("0.1952")
    disability_rate: Mapped[Decimal] = rate_column("0.08")
    accident_rate: Mapped[Decimal] = rate_column("0.0167")
    sickness_rate: Mapped[Decimal] = rate_column("0.0245")
    work_fund_rate: Mapped[Decimal] = rate_column("0.0245")
    solidarity_fund_rate: Mapped[Decimal] = rate_column("0.0245")

    # Health insurance
    health_insurance_rate_skala: Mapped[Decimal] = rate_column("0.09")
    health_insurance_rate_liniowy: Mapped[Decimal] = rate_column("0.049")
    health_insurance_limit_linear: Mapped[Decimal] = money_column(
        default=Decimal("11600"), comment="Yearly liniowy deduction limit"
    )

    def __repr__(self) -> str:
        return f"<TaxYearConfig year={self.year} min_wage={self.minimum_wage_gross}>"
