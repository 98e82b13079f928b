from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Checkin


class ICheckinRepository(ABC):
    """Checkin repository interface - application layer"""

    @abstractmethod
    async def get(
        self, tenant_id: UUID, session_id: UUID, user_id: UUID
    ) -> Optional[Checkin]:
        """Get attendance row for the triple"""
        pass

    @abstractmethod
    async def create(self, checkin: Checkin) -> Checkin:
        """Create attendance row"""
        pass
