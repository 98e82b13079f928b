"""
ClassSession Entity

A concrete, dated occurrence of a class with an optional seat limit.
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class ClassSession(SQLModel, table=True):
    """
    ClassSession entity - a bookable slot.

    Business Rules:
    - capacity None or <= 0 means unbounded
    - ends_at is optional; check-in falls back to a fixed window after start
    """

    __tablename__ = "class_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    class_id: UUID = Field(foreign_key="classes.id", nullable=False, index=True)

    starts_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    capacity: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_tenant_starts_at", "tenant_id", "starts_at"),)

    @property
    def is_capacity_limited(self) -> bool:
        return self.capacity is not None and self.capacity > 0

    def checkin_window(
        self, opens_before: timedelta, closes_after: timedelta, fallback: timedelta
    ) -> Tuple[datetime, datetime]:
        """Return (opens_at, closes_at) for attendance at this session"""
        opens_at = self.starts_at - opens_before
        if self.ends_at is not None:
            return opens_at, self.ends_at + closes_after
        return opens_at, self.starts_at + fallback

    def cancel_deadline(self, cutoff: timedelta) -> datetime:
        return self.starts_at - cutoff
