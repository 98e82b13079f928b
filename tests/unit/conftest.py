from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return
from src.app.services.caller_context import CallerContext
from src.app.services.session_credit_ledger import ConsumeOutcome, RestoreOutcome
from src.domain.entities import (
    ClassSession,
    Profile,
    ProfileRole,
    StudioClass,
    Tenant,
)

NOW = datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def tenant():
    return Tenant(id=uuid4(), name="Core Studio")


@pytest.fixture
def member(tenant):
    return Profile(id=uuid4(), tenant_id=tenant.id, role=ProfileRole.member)


@pytest.fixture
def admin(tenant):
    return Profile(id=uuid4(), tenant_id=tenant.id, role=ProfileRole.admin)


@pytest.fixture
def member_caller(member):
    return CallerContext(user_id=member.id, tenant_id=member.tenant_id)


@pytest.fixture
def admin_caller(admin):
    return CallerContext(user_id=admin.id, tenant_id=admin.tenant_id, is_admin=True)


@pytest.fixture
def studio_class(tenant):
    return StudioClass(
        id=uuid4(),
        tenant_id=tenant.id,
        title="Reformer Pilates",
        drop_in_enabled=True,
        drop_in_price=Decimal("10.00"),
    )


@pytest.fixture
def class_session(tenant, studio_class):
    return ClassSession(
        id=uuid4(),
        tenant_id=tenant.id,
        class_id=studio_class.id,
        starts_at=NOW + timedelta(days=1),
        ends_at=NOW + timedelta(days=1, hours=1),
        capacity=10,
    )


@pytest.fixture
def mock_uow(tenant, member, admin, studio_class, class_session):
    """Mock UnitOfWork with all repositories, pre-wired to the fixtures above"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    profiles = {member.id: member, admin.id: admin}

    uow.tenants = MagicMock()
    uow.tenants.get_by_id = AsyncMock(return_value=tenant)

    uow.profiles = MagicMock()
    uow.profiles.get_by_id = AsyncMock(side_effect=lambda user_id: profiles.get(user_id))

    uow.classes = MagicMock()
    uow.classes.get_by_id = AsyncMock(return_value=studio_class)

    uow.class_sessions = MagicMock()
    uow.class_sessions.get_by_id = AsyncMock(return_value=class_session)
    uow.class_sessions.get_ids_with_closed_checkin = AsyncMock(return_value=[])

    uow.membership_plans = MagicMock()
    uow.membership_plans.get_by_id = AsyncMock(return_value=None)

    uow.memberships = MagicMock()
    uow.memberships.get_latest_active = AsyncMock(return_value=None)
    uow.memberships.create = AsyncMock(side_effect=lambda m: m)

    uow.bookings = MagicMock()
    uow.bookings.get_by_id = AsyncMock(return_value=None)
    uow.bookings.get_live = AsyncMock(return_value=None)
    uow.bookings.get_latest_not_cancelled = AsyncMock(return_value=None)
    uow.bookings.count_live = AsyncMock(return_value=0)
    uow.bookings.create = AsyncMock(side_effect=lambda b: b)
    uow.bookings.update = AsyncMock(side_effect=lambda b: b)
    uow.bookings.delete = AsyncMock()
    uow.bookings.mark_no_show = AsyncMock(return_value=0)

    uow.checkins = MagicMock()
    uow.checkins.get = AsyncMock(return_value=None)
    uow.checkins.create = AsyncMock(side_effect=lambda c: c)

    uow.notifications = MagicMock()
    uow.notifications.create = AsyncMock(side_effect=lambda n: n)

    uow.ledger = MagicMock()
    uow.ledger.consume = AsyncMock(
        return_value=Return.ok(ConsumeOutcome(consumed=True, remaining_sessions=0))
    )
    uow.ledger.restore = AsyncMock(
        side_effect=lambda booking_id: Return.ok(
            RestoreOutcome(booking_id=booking_id, restored_sessions=0)
        )
    )
    return uow
