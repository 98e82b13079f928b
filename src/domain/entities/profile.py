"""
Profile Entity

A person known to a tenant. The id is the user id issued by the identity
provider; role decides whether the person operates the studio or trains in it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import ProfileRole


class Profile(SQLModel, table=True):
    """
    Profile entity - a member or administrator of one tenant.

    Business Rules:
    - Belongs to exactly one tenant
    - Administrators may book, check in and delete on behalf of members
    """

    __tablename__ = "profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    full_name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    role: ProfileRole = Field(default=ProfileRole.member)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_profile_tenant_role", "tenant_id", "role"),)
