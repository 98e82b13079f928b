from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import MembershipPlan


class IMembershipPlanRepository(ABC):
    """Membership plan repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, plan_id: UUID) -> Optional[MembershipPlan]:
        """Get plan by ID"""
        pass
