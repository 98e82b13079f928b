"""
Studio Booking Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    LIVE_BOOKING_STATUSES,
    BookingStatus,
    BookingType,
    MembershipStatus,
    PlanKind,
    ProfileRole,
    TenantStatus,
)

# Export all entities
from .tenant import Tenant
from .profile import Profile
from .studio_class import StudioClass
from .class_session import ClassSession
from .membership_plan import MembershipPlan
from .membership import Membership
from .booking import Booking
from .checkin import Checkin
from .notification import MemberNotification

__all__ = [
    # Enums
    "LIVE_BOOKING_STATUSES",
    "BookingStatus",
    "BookingType",
    "MembershipStatus",
    "PlanKind",
    "ProfileRole",
    "TenantStatus",
    # Entities
    "Tenant",
    "Profile",
    "StudioClass",
    "ClassSession",
    "MembershipPlan",
    "Membership",
    "Booking",
    "Checkin",
    "MemberNotification",
]
