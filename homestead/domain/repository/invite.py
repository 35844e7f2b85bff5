"""Rental invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from homestead.domain.model import RentalInvite
from homestead.domain.value import InviteCode, InviteId, RentalId, UserId


class InviteRepository(ABC):
    """Repository for RentalInvite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> RentalInvite | None:
        """Find an invite by ID."""
        pass

    @abstractmethod
    async def find_by_code(self, code: InviteCode) -> RentalInvite | None:
        """Find an invite by its (normalized) code.

        Args:
            code: The invite code, already upper-cased

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, invite: RentalInvite) -> RentalInvite:
        """Insert a new invite and return it with its assigned ID.

        Raises:
            IntegrityError: If the code is already taken
        """
        pass

    @abstractmethod
    async def find_by_rental(self, rental_id: RentalId) -> list[RentalInvite]:
        """List invites for a rental, newest (highest ID) first."""
        pass

    @abstractmethod
    async def mark_accepted(
        self, invite_id: InviteId, accepted_by: UserId, accepted_at: datetime
    ) -> RentalInvite | None:
        """Atomically move a pending invite to accepted.

        The status check and the update are one conditional write, so of
        several concurrent callers at most one gets the invite back.

        Args:
            invite_id: Invite to accept
            accepted_by: Redeeming user
            accepted_at: Acceptance time

        Returns:
            The accepted invite, or None if it was no longer pending
        """
        pass
