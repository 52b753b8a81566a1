"""SQLAlchemy declarative base, shared mixin and column helpers.

scenarios, investments and tax_year_configs get a UUID `id` plus
server-side `created_at` / `updated_at` from TimestampMixin. car_details
is keyed by its investment and has no timestamps of its own.

Amounts are Numeric(12, 2) and statutory rates Numeric(6, 4); both map to
Decimal, never float.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, Numeric, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    type_annotation_map = {
        uuid.UUID: UUID(as_uuid=True),
        datetime: DateTime(timezone=True),
    }


def money_column(*, nullable: bool = False, **kwargs: Any) -> Mapped[Any]:
    """PLN amount column."""
    return mapped_column(Numeric(12, 2), nullable=nullable, **kwargs)


def rate_column(default: str) -> Mapped[Decimal]:
    """Non-null statutory rate column with its default (e.g. "0.0245")."""
    return mapped_column(Numeric(6, 4), nullable=False, default=Decimal(default))


class TimestampMixin:
    """UUID primary key with creation and update timestamps.

    Values come from PostgreSQL (gen_random_uuid(), now()); the id also has a
    client-side default so it is known before flush.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
        server_default=func.gen_random_uuid(),
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())
