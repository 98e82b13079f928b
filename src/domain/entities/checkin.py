"""
Checkin Entity

Physical attendance marker. Informational only, not used for billing.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Checkin(SQLModel, table=True):
    """One row per (tenant, session, member) that attended"""

    __tablename__ = "checkins"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    session_id: UUID = Field(foreign_key="class_sessions.id", nullable=False)
    user_id: UUID = Field(foreign_key="profiles.id", nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uq_checkin_tenant_session_user", "tenant_id", "session_id", "user_id", unique=True),
    )
