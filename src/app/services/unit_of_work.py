from abc import ABC, abstractmethod

from src.app.repositories.booking_repository import IBookingRepository
from src.app.repositories.checkin_repository import ICheckinRepository
from src.app.repositories.class_repository import IClassRepository
from src.app.repositories.class_session_repository import IClassSessionRepository
from src.app.repositories.membership_plan_repository import IMembershipPlanRepository
from src.app.repositories.membership_repository import IMembershipRepository
from src.app.repositories.notification_repository import INotificationRepository
from src.app.repositories.profile_repository import IProfileRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.app.services.session_credit_ledger import SessionCreditLedger


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    profiles: IProfileRepository
    classes: IClassRepository
    class_sessions: IClassSessionRepository
    membership_plans: IMembershipPlanRepository
    memberships: IMembershipRepository
    bookings: IBookingRepository
    checkins: ICheckinRepository
    notifications: INotificationRepository

    # Credit ledger bound to the same transaction
    ledger: SessionCreditLedger

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
