"""
Tenant Entity

Represents an isolated studio account. Every other entity carries a tenant_id.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolation boundary for a gym/studio.

    Business Rules:
    - No entity is ever read or written across tenants
    - Suspended tenants (unpaid subscription) cannot delete bookings
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    status: TenantStatus = Field(default=TenantStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_tenant_status", "status"),)

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.active
