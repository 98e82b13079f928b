"""
Session-Credit Ledger contract.

The ledger is the only component allowed to change a membership's
remaining_sessions. Both operations run as one indivisible unit against the
datastore, inside the caller's transaction.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Result


class ConsumeOutcome(BaseModel):
    """Result of a consume call"""

    consumed: bool
    membership_id: Optional[UUID] = None
    remaining_sessions: Optional[int] = None


class RestoreOutcome(BaseModel):
    """Result of a restore call; the booking row is gone either way"""

    booking_id: UUID
    membership_id: Optional[UUID] = None
    restored_sessions: int = 0


class SessionCreditLedger(ABC):
    """
    Atomic consume/restore primitives.

    Error codes:
    - no_active_membership: nothing to charge the booking against
    - no_credits_remaining: the atomic decrement found remaining_sessions = 0
    - booking_not_found: restore/consume target does not exist
    - ledger_unavailable: no credit system configured
    - ledger_failure: datastore error while executing the operation
    """

    @abstractmethod
    async def consume(
        self, tenant_id: UUID, user_id: UUID, booking_id: UUID
    ) -> Result[ConsumeOutcome]:
        """
        Decrement one credit and stamp booking.membership_id.

        Uses the booking's pinned membership if it has one, otherwise the
        member's most recently started active membership. Non-metered
        memberships succeed with consumed=False.
        """
        pass

    @abstractmethod
    async def restore(self, booking_id: UUID) -> Result[RestoreOutcome]:
        """Delete the booking and give back the credit it consumed, if any"""
        pass
