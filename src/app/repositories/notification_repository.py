from abc import ABC, abstractmethod

from src.domain.entities import MemberNotification


class INotificationRepository(ABC):
    """Member inbox repository interface - application layer"""

    @abstractmethod
    async def create(self, notification: MemberNotification) -> MemberNotification:
        """Create inbox entry"""
        pass
