"""
Studio Booking Domain Enums

All enumeration types used across domain entities. Values are closed sets:
anything not listed here is rejected at the boundary.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant (studio account) status"""

    active = "active"
    suspended = "suspended"


class ProfileRole(str, Enum):
    """Role of a person within a tenant"""

    admin = "admin"
    member = "member"


class PlanKind(str, Enum):
    """How a membership plan is metered. Only `sessions` consumes credits."""

    duration = "duration"
    sessions = "sessions"
    hybrid = "hybrid"


class MembershipStatus(str, Enum):
    """Membership status"""

    active = "active"
    paused = "paused"
    cancelled = "cancelled"
    expired = "expired"


class BookingStatus(str, Enum):
    """Booking lifecycle status"""

    booked = "booked"
    checked_in = "checked_in"
    cancelled = "cancelled"
    no_show = "no_show"


class BookingType(str, Enum):
    """How a booking is paid for"""

    membership = "membership"
    drop_in = "drop_in"


# Statuses that occupy a seat in a session
LIVE_BOOKING_STATUSES = (BookingStatus.booked, BookingStatus.checked_in)
