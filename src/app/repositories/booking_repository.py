from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Booking


class IBookingRepository(ABC):
    """Booking repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, booking_id: UUID) -> Optional[Booking]:
        """Get booking by ID"""
        pass

    @abstractmethod
    async def get_live(
        self, tenant_id: UUID, session_id: UUID, user_id: UUID
    ) -> Optional[Booking]:
        """Get the booked/checked_in booking for a member in a session"""
        pass

    @abstractmethod
    async def get_latest_not_cancelled(
        self, tenant_id: UUID, session_id: UUID, user_id: UUID
    ) -> Optional[Booking]:
        """Most recently created booking for the triple that is not cancelled"""
        pass

    @abstractmethod
    async def count_live(
        self,
        tenant_id: UUID,
        session_id: UUID,
        exclude_booking_id: Optional[UUID] = None,
    ) -> int:
        """Count seats taken in a session, optionally ignoring one booking"""
        pass

    @abstractmethod
    async def create(self, booking: Booking) -> Booking:
        """Create a new booking (flushes, so constraint violations surface here)"""
        pass

    @abstractmethod
    async def update(self, booking: Booking) -> Booking:
        """Update existing booking"""
        pass

    @abstractmethod
    async def delete(self, booking: Booking) -> None:
        """Delete a booking row"""
        pass

    @abstractmethod
    async def mark_no_show(self, tenant_id: UUID, session_ids: List[UUID]) -> int:
        """Flip booked bookings of the given sessions to no_show; returns count"""
        pass
