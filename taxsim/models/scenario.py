"""Scenario models: a user's saved simulation and its planned investments.

All financial amounts use Numeric(12, 2) / Decimal, never float.
Revenue and costs stored here are the last values used; the calculate
endpoint may override them per request.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taxsim.models.base import Base, TimestampMixin, money_column


class Scenario(TimestampMixin, Base):
    """Base configuration of one simulation."""

    __tablename__ = "scenarios"

    title: Mapped[str | None] = mapped_column(String(200))
    yearly_revenue_netto: Mapped[Decimal] = money_column(default=Decimal("0"))
    yearly_fixed_costs: Mapped[Decimal] = money_column(default=Decimal("0"))
    vat_payer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    vat_rate_mixed: Mapped[Decimal] = mapped_column(
        Numeric(5, 4), nullable=False, default=Decimal("1.0"), comment="Recoverable VAT share, 1.0 = 100%"
    )
    zus_type: Mapped[str] = mapped_column(String(20), nullable=False, comment="ZusType enum value")
    current_taxation_form: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="TaxationForm enum value"
    )
    lump_sum_industry: Mapped[str | None] = mapped_column(String(30), comment="LumpSumIndustry enum value")
    custom_social_base: Mapped[Decimal | None] = money_column(nullable=True, comment="maly_plus base")
    voluntary_sickness: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    investments: Mapped[list[Investment]] = relationship(
        "Investment",
        back_populates="scenario",
        cascade="all, delete-orphan",
        order_by="Investment.created_at",
    )

    def __repr__(self) -> str:
        return f"<Scenario id={self.id} zus={self.zus_type} form={self.current_taxation_form}>"


class Investment(TimestampMixin, Base):
    """A planned purchase: equipment or a car (cash or leasing)."""

    __tablename__ = "investments"

    scenario_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("scenarios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    cost_netto: Mapped[Decimal] = money_column()
    month_of_purchase: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, comment="InvestmentType enum value")

    # Relationships
    scenario: Mapped[Scenario] = relationship("Scenario", back_populates="investments")
    car_details: Mapped[CarDetail | None] = relationship(
        "CarDetail",
        back_populates="investment",
        cascade="all, delete-orphan",
        uselist=False,
    )

    def __repr__(self) -> str:
        return f"<Investment type={self.type} name={self.name!r} cost={self.cost_netto}>"


class CarDetail(Base):
    """Vehicle-specific fields, 1:1 with a car_* investment."""

    __tablename__ = "car_details"

    investment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("investments.id", ondelete="CASCADE"), primary_key=True
    )
    engine_type: Mapped[str] = mapped_column(String(20), nullable=False, comment="EngineType enum value")
    financing_method: Mapped[str] = mapped_column(String(20), nullable=False, comment="FinancingMethod enum value")
    car_price_netto: Mapped[Decimal] = money_column()
    # Lease terms are stored in percent (10 = 10%)
    leasing_initial_payment_percent: Mapped[Decimal | None] = mapped_column(Numeric(5, 2))
    leasing_months: Mapped[int | None] = mapped_column(Integer)
    leasing_buyout_percent: Mapped[Decimal | None] = mapped_column(Numeric(5, 2))
    usage_type: Mapped[str] = mapped_column(String(20), nullable=False, comment="UsageType enum value")

    # Relationships
    investment: Mapped[Investment] = relationship("Investment", back_populates="car_details")

    def __repr__(self) -> str:
        return f"<CarDetail engine={self.engine_type} financing={self.financing_method} price={self.car_price_netto}>"
