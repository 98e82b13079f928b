from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from libs.result import Error, Return
from src.app.use_cases.bookings import CreateBookingUseCase
from src.domain.entities import (
    Booking,
    BookingStatus,
    BookingType,
    Membership,
    MembershipPlan,
    MembershipStatus,
    PlanKind,
)


@pytest.fixture
def sessions_membership(member, now):
    return Membership(
        id=uuid4(),
        tenant_id=member.tenant_id,
        user_id=member.id,
        plan_id=uuid4(),
        status=MembershipStatus.active,
        starts_at=now - timedelta(days=1),
        ends_at=now + timedelta(days=30),
        remaining_sessions=1,
        plan_kind=PlanKind.sessions,
    )


@pytest.fixture
def use_case(mock_uow, now):
    return CreateBookingUseCase(mock_uow, clock=lambda: now)


@pytest.mark.asyncio
async def test_membership_booking_consumes_credit(
    use_case, mock_uow, member_caller, class_session, sessions_membership
):
    mock_uow.memberships.get_latest_active.return_value = sessions_membership
    mock_uow.membership_plans.get_by_id.return_value = MembershipPlan(
        id=sessions_membership.plan_id, tenant_id=member_caller.tenant_id, name="Pack"
    )

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.is_ok()
    booking = result.value.booking
    assert booking.booking_type == "membership"
    assert booking.status == "booked"
    assert booking.user_id == str(member_caller.user_id)

    created = mock_uow.bookings.create.call_args.args[0]
    # stamped by the ledger, never on insert
    assert created.membership_id is None
    mock_uow.ledger.consume.assert_awaited_once_with(
        member_caller.tenant_id, member_caller.user_id, created.id
    )
    mock_uow.commit.assert_awaited()
    mock_uow.notifications.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_drop_in_snapshot_price(use_case, mock_uow, member_caller, class_session):
    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.is_ok()
    booking = result.value.booking
    assert booking.booking_type == "drop_in"
    assert booking.drop_in_price == Decimal("10.00")
    assert booking.drop_in_paid is False
    mock_uow.ledger.consume.assert_not_called()


@pytest.mark.asyncio
async def test_member_books_for_themselves_even_if_user_id_given(
    use_case, mock_uow, member_caller, class_session
):
    result = await use_case.execute(
        member_caller, member_caller.tenant_id, class_session.id, user_id=uuid4()
    )

    assert result.is_ok()
    assert result.value.booking.user_id == str(member_caller.user_id)


@pytest.mark.asyncio
async def test_tenant_mismatch(use_case, mock_uow, member_caller, class_session):
    result = await use_case.execute(member_caller, uuid4(), class_session.id)

    assert result.is_err()
    assert result.error.code == "tenant_mismatch"
    mock_uow.bookings.create.assert_not_called()


@pytest.mark.asyncio
async def test_admin_requires_user_id(use_case, admin_caller, class_session):
    result = await use_case.execute(admin_caller, admin_caller.tenant_id, class_session.id)

    assert result.error.code == "user_id_required_for_admin"


@pytest.mark.asyncio
async def test_invalid_booking_type(use_case, member_caller, class_session):
    result = await use_case.execute(
        member_caller, member_caller.tenant_id, class_session.id, booking_type="gift"
    )

    assert result.error.code == "invalid_booking_type"


@pytest.mark.asyncio
async def test_precondition_order_duplicate_before_capacity(
    use_case, mock_uow, member_caller, class_session
):
    mock_uow.bookings.get_live.return_value = Booking(
        tenant_id=member_caller.tenant_id,
        session_id=class_session.id,
        user_id=member_caller.user_id,
    )
    mock_uow.bookings.count_live.return_value = class_session.capacity

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.error.code == "already_booked"
    mock_uow.bookings.create.assert_not_called()


@pytest.mark.asyncio
async def test_full_session(use_case, mock_uow, member_caller, class_session):
    mock_uow.bookings.count_live.return_value = class_session.capacity

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.error.code == "session_full"
    mock_uow.bookings.create.assert_not_called()


@pytest.mark.asyncio
async def test_unlimited_capacity_is_never_full(
    use_case, mock_uow, member_caller, class_session
):
    class_session.capacity = 0
    mock_uow.bookings.count_live.return_value = 500

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_seat_taken_between_count_and_insert(
    use_case, mock_uow, member_caller, class_session
):
    class_session.capacity = 1
    mock_uow.bookings.count_live.side_effect = [0, 2]

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.error.code == "session_full"
    mock_uow.rollback.assert_awaited()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unique_index_conflict_reports_already_booked(
    use_case, mock_uow, member_caller, class_session
):
    mock_uow.bookings.create.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.error.code == "already_booked"
    mock_uow.rollback.assert_awaited()


@pytest.mark.asyncio
async def test_wrong_tenant_session(use_case, mock_uow, member_caller, class_session):
    class_session.tenant_id = uuid4()

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.error.code == "session_wrong_tenant"


@pytest.mark.asyncio
async def test_missing_class(use_case, mock_uow, member_caller, class_session):
    mock_uow.classes.get_by_id.return_value = None

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.error.code == "class_not_found"


@pytest.mark.asyncio
async def test_failed_consume_removes_booking(
    use_case, mock_uow, member_caller, class_session, sessions_membership
):
    mock_uow.memberships.get_latest_active.return_value = sessions_membership
    mock_uow.ledger.consume.return_value = Return.err(
        Error("no_credits_remaining", "Membership has no remaining sessions")
    )

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.is_err()
    assert result.error.code == "no_credits_remaining"
    created = mock_uow.bookings.create.call_args.args[0]
    mock_uow.bookings.delete.assert_awaited_once_with(created)
    mock_uow.rollback.assert_awaited()
    mock_uow.commit.assert_not_called()
    mock_uow.notifications.create.assert_not_called()


@pytest.mark.asyncio
async def test_notification_failure_keeps_booking(
    use_case, mock_uow, member_caller, class_session
):
    mock_uow.notifications.create = AsyncMock(side_effect=SQLAlchemyError("inbox down"))

    result = await use_case.execute(member_caller, member_caller.tenant_id, class_session.id)

    assert result.is_ok()
    assert mock_uow.commit.await_count == 1


@pytest.mark.asyncio
async def test_admin_books_member_of_tenant(
    use_case, mock_uow, admin_caller, member, class_session
):
    result = await use_case.execute(
        admin_caller,
        admin_caller.tenant_id,
        class_session.id,
        user_id=member.id,
        booking_type="membership",
    )

    assert result.is_ok()
    assert result.value.booking.user_id == str(member.id)
    assert result.value.booking.booking_type == BookingType.membership.value
    assert result.value.booking.status == BookingStatus.booked.value
    mock_uow.memberships.get_latest_active.assert_not_called()
    mock_uow.ledger.consume.assert_not_called()


@pytest.mark.asyncio
async def test_admin_cannot_book_unknown_member(use_case, admin_caller, class_session):
    result = await use_case.execute(
        admin_caller, admin_caller.tenant_id, class_session.id, user_id=uuid4()
    )

    assert result.error.code == "target_user_wrong_tenant"
