"""
MemberNotification Entity

In-app inbox entry for a member (e.g. "booking confirmed").
Written best-effort, outside the booking transaction.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class MemberNotification(SQLModel, table=True):
    """
    MemberNotification entity.

    Business Rules:
    - Never part of a booking transaction; failures are logged and dropped
    - payload stores ids needed by the client to deep-link
    """

    __tablename__ = "user_notifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(nullable=False, index=True)
    user_id: UUID = Field(nullable=False, index=True)

    kind: str = Field(max_length=100)  # e.g., "booking_created"
    title: str = Field(max_length=255)
    body: Optional[str] = Field(default=None)
    payload: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    read_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_notification_user_read", "user_id", "read_at"),)
