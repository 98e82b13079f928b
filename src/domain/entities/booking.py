"""
Booking Entity

The central entity: one member's seat in one class session.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import LIVE_BOOKING_STATUSES, BookingStatus, BookingType

_LIVE_STATUS_PREDICATE = "status IN ('booked', 'checked_in')"


class Booking(SQLModel, table=True):
    """
    Booking entity.

    Business Rules:
    - At most one live booking (booked/checked_in) per (tenant, session, member),
      enforced by a partial unique index
    - membership_id is set iff the booking consumed a sessions-plan credit
    - drop_in_price is set iff booking_type=drop_in
    - Cancelled and deleted bookings are never resurrected
    """

    __tablename__ = "bookings"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    session_id: UUID = Field(foreign_key="class_sessions.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="profiles.id", nullable=False, index=True)

    status: BookingStatus = Field(default=BookingStatus.booked)
    booking_type: BookingType = Field(default=BookingType.membership)

    membership_id: Optional[UUID] = Field(default=None, foreign_key="memberships.id")
    drop_in_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    drop_in_paid: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_booking_live_member_session",
            "tenant_id",
            "session_id",
            "user_id",
            unique=True,
            sqlite_where=text(_LIVE_STATUS_PREDICATE),
            postgresql_where=text(_LIVE_STATUS_PREDICATE),
        ),
        Index("idx_booking_session_status", "session_id", "status"),
    )

    @property
    def is_live(self) -> bool:
        return self.status in LIVE_BOOKING_STATUSES

    @property
    def has_consumed_credit(self) -> bool:
        return self.membership_id is not None
