"""
Class Entity

A class offered by a studio (e.g. "Reformer Pilates"). Concrete occurrences
are ClassSession rows.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class StudioClass(SQLModel, table=True):
    """
    Class entity - template for bookable sessions.

    Business Rules:
    - category_id is matched against membership plan categories
    - drop_in_enabled allows pay-per-visit bookings at drop_in_price
    - drop_in_price is snapshotted onto the booking at admission time
    """

    __tablename__ = "classes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    title: str = Field(max_length=255)
    category_id: Optional[UUID] = Field(default=None)

    drop_in_enabled: bool = Field(default=False)
    drop_in_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_class_tenant_category", "tenant_id", "category_id"),)
