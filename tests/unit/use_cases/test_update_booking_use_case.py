from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.bookings import UpdateBookingUseCase
from src.domain.entities import Booking, BookingStatus, ClassSession

CUTOFF = timedelta(minutes=120)


@pytest.fixture
def booking(member, class_session):
    return Booking(
        id=uuid4(),
        tenant_id=member.tenant_id,
        session_id=class_session.id,
        user_id=member.id,
        status=BookingStatus.booked,
    )


def use_case_at(uow, moment):
    return UpdateBookingUseCase(uow, cancel_cutoff=CUTOFF, clock=lambda: moment)


@pytest.mark.asyncio
async def test_cancel_one_second_before_cutoff(mock_uow, member_caller, booking, class_session):
    mock_uow.bookings.get_by_id.return_value = booking
    moment = class_session.starts_at - CUTOFF - timedelta(seconds=1)

    result = await use_case_at(mock_uow, moment).execute(
        member_caller, booking.id, status="cancelled"
    )

    assert result.is_ok()
    assert result.value.booking.status == "cancelled"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_cancel_exactly_at_cutoff(mock_uow, member_caller, booking, class_session):
    mock_uow.bookings.get_by_id.return_value = booking

    result = await use_case_at(mock_uow, class_session.starts_at - CUTOFF).execute(
        member_caller, booking.id, status="cancelled"
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_cancel_one_second_after_cutoff(mock_uow, member_caller, booking, class_session):
    mock_uow.bookings.get_by_id.return_value = booking
    moment = class_session.starts_at - CUTOFF + timedelta(seconds=1)

    result = await use_case_at(mock_uow, moment).execute(
        member_caller, booking.id, status="cancelled"
    )

    assert result.error.code == "cancel_deadline_passed"
    assert booking.status == BookingStatus.booked
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_cancel_without_session_is_rejected(mock_uow, member_caller, booking, now):
    mock_uow.bookings.get_by_id.return_value = booking
    mock_uow.class_sessions.get_by_id.return_value = None

    result = await use_case_at(mock_uow, now).execute(
        member_caller, booking.id, status="cancelled"
    )

    assert result.error.code == "session_not_found"
    assert booking.status == BookingStatus.booked
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_cancel_does_not_restore_credit(mock_uow, member_caller, booking, now):
    booking.membership_id = uuid4()
    mock_uow.bookings.get_by_id.return_value = booking

    result = await use_case_at(mock_uow, now).execute(
        member_caller, booking.id, status="cancelled"
    )

    assert result.is_ok()
    mock_uow.ledger.restore.assert_not_called()


@pytest.mark.parametrize(
    "current, target",
    [
        (BookingStatus.cancelled, "booked"),
        (BookingStatus.cancelled, "no_show"),
        (BookingStatus.no_show, "booked"),
        (BookingStatus.booked, "checked_in"),
        (BookingStatus.checked_in, "cancelled"),
    ],
)
@pytest.mark.asyncio
async def test_invalid_transitions(mock_uow, admin_caller, booking, now, current, target):
    booking.status = current
    mock_uow.bookings.get_by_id.return_value = booking

    result = await use_case_at(mock_uow, now).execute(admin_caller, booking.id, status=target)

    assert result.error.code == "invalid_status_transition"


@pytest.mark.asyncio
async def test_same_status_is_a_no_op(mock_uow, admin_caller, booking, now):
    booking.status = BookingStatus.cancelled
    mock_uow.bookings.get_by_id.return_value = booking

    result = await use_case_at(mock_uow, now).execute(
        admin_caller, booking.id, status="cancelled"
    )

    assert result.is_ok()
    assert result.value.booking.status == "cancelled"


@pytest.mark.asyncio
async def test_unknown_status_value(mock_uow, admin_caller, booking, now):
    result = await use_case_at(mock_uow, now).execute(admin_caller, booking.id, status="refunded")

    assert result.error.code == "invalid_status"
    mock_uow.bookings.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_member_cannot_mark_no_show(mock_uow, member_caller, booking, now):
    result = await use_case_at(mock_uow, now).execute(
        member_caller, booking.id, status="no_show"
    )

    assert result.error.code == "forbidden"


@pytest.mark.asyncio
async def test_booking_of_another_tenant(mock_uow, admin_caller, booking, now):
    booking.tenant_id = uuid4()
    mock_uow.bookings.get_by_id.return_value = booking

    result = await use_case_at(mock_uow, now).execute(
        admin_caller, booking.id, status="no_show"
    )

    assert result.error.code == "tenant_mismatch"


@pytest.mark.asyncio
async def test_reassign_counts_seats_without_own_booking(
    mock_uow, admin_caller, booking, class_session, now
):
    destination = ClassSession(
        id=uuid4(),
        tenant_id=class_session.tenant_id,
        class_id=class_session.class_id,
        starts_at=class_session.starts_at + timedelta(days=7),
        capacity=2,
    )
    mock_uow.bookings.get_by_id.return_value = booking
    mock_uow.class_sessions.get_by_id.return_value = destination
    mock_uow.bookings.count_live.side_effect = [1, 2]

    result = await use_case_at(mock_uow, now).execute(
        admin_caller, booking.id, session_id=destination.id
    )

    assert result.is_ok()
    assert result.value.booking.session_id == str(destination.id)
    first_count = mock_uow.bookings.count_live.await_args_list[0]
    assert first_count.kwargs["exclude_booking_id"] == booking.id


@pytest.mark.asyncio
async def test_reassign_into_full_session(mock_uow, admin_caller, booking, class_session, now):
    destination = ClassSession(
        id=uuid4(),
        tenant_id=class_session.tenant_id,
        class_id=class_session.class_id,
        starts_at=class_session.starts_at,
        capacity=2,
    )
    mock_uow.bookings.get_by_id.return_value = booking
    mock_uow.class_sessions.get_by_id.return_value = destination
    mock_uow.bookings.count_live.return_value = 2

    result = await use_case_at(mock_uow, now).execute(
        admin_caller, booking.id, session_id=destination.id
    )

    assert result.error.code == "session_full"
    mock_uow.rollback.assert_awaited()


@pytest.mark.asyncio
async def test_reassign_conflicting_booking(mock_uow, admin_caller, booking, class_session, now):
    destination_id = uuid4()
    mock_uow.bookings.get_by_id.return_value = booking
    mock_uow.bookings.update.side_effect = IntegrityError("UPDATE", {}, Exception("unique"))

    result = await use_case_at(mock_uow, now).execute(
        admin_caller, booking.id, session_id=destination_id
    )

    assert result.error.code == "already_booked"


@pytest.mark.asyncio
async def test_reassign_requires_live_booking(mock_uow, admin_caller, booking, now):
    booking.status = BookingStatus.no_show
    mock_uow.bookings.get_by_id.return_value = booking

    result = await use_case_at(mock_uow, now).execute(
        admin_caller, booking.id, session_id=uuid4()
    )

    assert result.error.code == "booking_not_live"


@pytest.mark.asyncio
async def test_reassign_to_unknown_session(mock_uow, admin_caller, booking, now):
    mock_uow.bookings.get_by_id.return_value = booking
    mock_uow.class_sessions.get_by_id.return_value = None

    result = await use_case_at(mock_uow, now).execute(
        admin_caller, booking.id, session_id=uuid4()
    )

    assert result.error.code == "session_not_found"


@pytest.mark.asyncio
async def test_nothing_to_update(mock_uow, admin_caller, booking, now):
    result = await use_case_at(mock_uow, now).execute(admin_caller, booking.id)

    assert result.error.code == "missing_fields"
