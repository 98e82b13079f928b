"""
Membership Use Cases
"""

from .create_membership_use_case import CreateMembershipUseCase
from .dtos import MembershipResponse

__all__ = [
    "CreateMembershipUseCase",
    "MembershipResponse",
]
