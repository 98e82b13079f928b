from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ClassSession


class IClassSessionRepository(ABC):
    """Class session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, session_id: UUID, for_update: bool = False
    ) -> Optional[ClassSession]:
        """
        Get session by ID.

        for_update locks the row until the end of the transaction, which
        serializes admissions competing for the same session's seats.
        """
        pass

    @abstractmethod
    async def get_ids_with_closed_checkin(
        self, tenant_id: UUID, ended_before: datetime, started_before: datetime
    ) -> List[UUID]:
        """
        Sessions whose check-in window has closed: ended before ended_before,
        or without an end time and started before started_before.
        """
        pass
