"""Initial schema: scenarios, investments, car details, tax year configs.

Seeds statutory rate tables for 2025-2028.

Revision ID: 001
Revises: None
Create Date: 2026-01-05
"""
from __future__ import annotations

import uuid
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, tuple[str, ...], None] = None
depends_on: Union[str, tuple[str, ...], None] = None

# year, minimum wage, average wage prognosis, average wage Q4 previous year, liniowy health limit
_DEFAULT_YEARS = (
    (2025, 4388, 7143, 7000, 11300),
    (2026, 4626, 7286, 7000, 11600),
    (2027, 4750, 7500, 7286, 11900),
    (2028, 4900, 7700, 7500, 12200),
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    # ── Standalone tables (no FKs) ─────────────────────────────────────

    op.create_table(
        "scenarios",
        sa.Column("title", sa.String(200)),
        sa.Column("yearly_revenue_netto", sa.Numeric(12, 2), nullable=False),
        sa.Column("yearly_fixed_costs", sa.Numeric(12, 2), nullable=False),
        sa.Column("vat_payer", sa.Boolean(), nullable=False),
        sa.Column("vat_rate_mixed", sa.Numeric(5, 4), nullable=False, comment="Recoverable VAT share, 1.0 = 100%"),
        sa.Column("zus_type", sa.String(20), nullable=False, comment="ZusType enum value"),
        sa.Column("current_taxation_form", sa.String(20), nullable=False, comment="TaxationForm enum value"),
        sa.Column("lump_sum_industry", sa.String(30), comment="LumpSumIndustry enum value"),
        sa.Column("custom_social_base", sa.Numeric(12, 2), comment="maly_plus base"),
        sa.Column("voluntary_sickness", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    tax_year_configs = op.create_table(
        "tax_year_configs",
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("minimum_wage_gross", sa.Numeric(12, 2), nullable=False),
        sa.Column("average_wage_prognosis", sa.Numeric(12, 2), nullable=False),
        sa.Column("average_wage_q4_previous_year", sa.Numeric(12, 2), nullable=False),
        sa.Column("retirement_rate", sa.Numeric(6, 4), nullable=False),
        sa.Column("disability_rate", sa.Numeric(6, 4), nullable=False),
        sa.Column("accident_rate", sa.Numeric(6, 4), nullable=False),
        sa.Column("sickness_rate", sa.Numeric(6, 4), nullable=False),
        sa.Column("work_fund_rate", sa.Numeric(6, 4), nullable=False),
        sa.Column("solidarity_fund_rate", sa.Numeric(6, 4), nullable=False),
        sa.Column("health_insurance_rate_skala", sa.Numeric(6, 4), nullable=False),
        sa.Column("health_insurance_rate_liniowy", sa.Numeric(6, 4), nullable=False),
        sa.Column(
            "health_insurance_limit_linear", sa.Numeric(12, 2), nullable=False, comment="Yearly liniowy deduction limit"
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("year"),
    )
    op.create_index("ix_tax_year_configs_year", "tax_year_configs", ["year"])

    # ── Dependent tables ───────────────────────────────────────────────

    op.create_table(
        "investments",
        sa.Column("scenario_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("cost_netto", sa.Numeric(12, 2), nullable=False),
        sa.Column("month_of_purchase", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, comment="InvestmentType enum value"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["scenario_id"], ["scenarios.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_investments_scenario_id", "investments", ["scenario_id"])

    op.create_table(
        "car_details",
        sa.Column("investment_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("engine_type", sa.String(20), nullable=False, comment="EngineType enum value"),
        sa.Column("financing_method", sa.String(20), nullable=False, comment="FinancingMethod enum value"),
        sa.Column("car_price_netto", sa.Numeric(12, 2), nullable=False),
        sa.Column("leasing_initial_payment_percent", sa.Numeric(5, 2)),
        sa.Column("leasing_months", sa.Integer()),
        sa.Column("leasing_buyout_percent", sa.Numeric(5, 2)),
        sa.Column("usage_type", sa.String(20), nullable=False, comment="UsageType enum value"),
        sa.ForeignKeyConstraint(["investment_id"], ["investments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("investment_id"),
    )

    # ── Default rate tables ────────────────────────────────────────────

    op.bulk_insert(
        tax_year_configs,
        [
            {
                "id": uuid.uuid4(),
                "year": year,
                "minimum_wage_gross": min_wage,
                "average_wage_prognosis": avg_wage,
                "average_wage_q4_previous_year": avg_wage_q4,
                "retirement_rate": 0.1952,
                "disability_rate": 0.08,
                "accident_rate": 0.0167,
                "sickness_rate": 0.0245,
                "work_fund_rate": 0.0245,
                "solidarity_fund_rate": 0.0245,
                "health_insurance_rate_skala": 0.09,
                "health_insurance_rate_liniowy": 0.049,
                "health_insurance_limit_linear": health_limit,
            }
            for year, min_wage, avg_wage, avg_wage_q4, health_limit in _DEFAULT_YEARS
        ],
    )


def downgrade() -> None:
    op.drop_table("car_details")
    op.drop_index("ix_investments_scenario_id", table_name="investments")
    op.drop_table("investments")
    op.drop_index("ix_tax_year_configs_year", table_name="tax_year_configs")
    op.drop_table("tax_year_configs")
    op.drop_table("scenarios")
