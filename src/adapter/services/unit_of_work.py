from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.booking_repository import BookingRepository
from src.adapter.repositories.checkin_repository import CheckinRepository
from src.adapter.repositories.class_repository import ClassRepository
from src.adapter.repositories.class_session_repository import ClassSessionRepository
from src.adapter.repositories.membership_plan_repository import MembershipPlanRepository
from src.adapter.repositories.membership_repository import MembershipRepository
from src.adapter.repositories.notification_repository import NotificationRepository
from src.adapter.repositories.profile_repository import ProfileRepository
from src.adapter.repositories.tenant_repository import TenantRepository
from src.adapter.services.session_credit_ledger import (
    DisabledSessionCreditLedger,
    SqlSessionCreditLedger,
)
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession, ledger_enabled: bool = True):
        self.session = session
        self.ledger_enabled = ledger_enabled

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.tenants = TenantRepository(self.session)
        self.profiles = ProfileRepository(self.session)
        self.classes = ClassRepository(self.session)
        self.class_sessions = ClassSessionRepository(self.session)
        self.membership_plans = MembershipPlanRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.bookings = BookingRepository(self.session)
        self.checkins = CheckinRepository(self.session)
        self.notifications = NotificationRepository(self.session)
        if self.ledger_enabled:
            self.ledger = SqlSessionCreditLedger(self.session)
        else:
            self.ledger = DisabledSessionCreditLedger()
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
