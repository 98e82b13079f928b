from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Membership


class IMembershipRepository(ABC):
    """
    Membership repository interface - application layer

    Deliberately has no way to change remaining_sessions: credits move only
    through the SessionCreditLedger.
    """

    @abstractmethod
    async def get_by_id(self, membership_id: UUID) -> Optional[Membership]:
        """Get membership by ID"""
        pass

    @abstractmethod
    async def get_latest_active(
        self, tenant_id: UUID, user_id: UUID
    ) -> Optional[Membership]:
        """Most recently started membership with status=active"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass
