from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.booking_repository import IBookingRepository
from src.domain.base import utcnow
from src.domain.entities import LIVE_BOOKING_STATUSES, Booking, BookingStatus


class BookingRepository(IBookingRepository):
    """Booking repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, booking_id: UUID) -> Optional[Booking]:
        """Get booking by ID"""
        stmt = select(Booking).where(Booking.id == booking_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_live(
        self, tenant_id: UUID, session_id: UUID, user_id: UUID
    ) -> Optional[Booking]:
        """Get the live booking for a member in a session"""
        stmt = (
            select(Booking)
            .where(
                Booking.tenant_id == tenant_id,
                Booking.session_id == session_id,
                Booking.user_id == user_id,
                Booking.status.in_(LIVE_BOOKING_STATUSES),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_latest_not_cancelled(
        self, tenant_id: UUID, session_id: UUID, user_id: UUID
    ) -> Optional[Booking]:
        """Most recent non-cancelled booking for the triple"""
        stmt = (
            select(Booking)
            .where(
                Booking.tenant_id == tenant_id,
                Booking.session_id == session_id,
                Booking.user_id == user_id,
                Booking.status != BookingStatus.cancelled,
            )
            .order_by(Booking.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_live(
        self,
        tenant_id: UUID,
        session_id: UUID,
        exclude_booking_id: Optional[UUID] = None,
    ) -> int:
        """Count live bookings in a session"""
        stmt = select(func.count(Booking.id)).where(
            Booking.tenant_id == tenant_id,
            Booking.session_id == session_id,
            Booking.status.in_(LIVE_BOOKING_STATUSES),
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(Booking.id != exclude_booking_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def create(self, booking: Booking) -> Booking:
        """Create a new booking"""
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def update(self, booking: Booking) -> Booking:
        """Update existing booking"""
        booking.updated_at = utcnow()
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def delete(self, booking: Booking) -> None:
        """Delete a booking row"""
        stmt = delete(Booking).where(Booking.id == booking.id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_no_show(self, tenant_id: UUID, session_ids: List[UUID]) -> int:
        """Flip still-booked bookings of the given sessions to no_show"""
        if not session_ids:
            return 0
        stmt = (
            update(Booking)
            .where(
                Booking.tenant_id == tenant_id,
                Booking.session_id.in_(session_ids),
                Booking.status == BookingStatus.booked,
            )
            .values(status=BookingStatus.no_show, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
