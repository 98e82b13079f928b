from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import StudioClass


class IClassRepository(ABC):
    """Class repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, class_id: UUID) -> Optional[StudioClass]:
        """Get class by ID"""
        pass
