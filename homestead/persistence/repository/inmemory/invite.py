"""In-memory invite repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from homestead.domain.model.invite import RentalInvite
from homestead.domain.repository.invite import InviteRepository
from homestead.domain.value import InviteCode, InviteId, InviteStatus, RentalId, UserId


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: list[RentalInvite] = []

    async def find_by_id(self, invite_id: InviteId) -> Optional[RentalInvite]:
        """Find an invite by ID."""
        for invite in self._invites:
            if invite.id == invite_id:
                return invite
        return None

    async def find_by_code(self, code: InviteCode) -> Optional[RentalInvite]:
        """Find an invite by its code."""
        for invite in self._invites:
            if invite.code == code:
                return invite
        return None

    async def save(self, invite: RentalInvite) -> RentalInvite:
        """Insert a new invite.

        Raises:
            IntegrityError: If the code is already taken
        """
        if await self.find_by_code(invite.code):
            raise IntegrityError("Duplicate invite code", None, Exception())

        saved = invite.model_copy(update={"id": InviteId(len(self._invites) + 1)})
        self._invites.append(saved)
        return saved

    async def find_by_rental(self, rental_id: RentalId) -> list[RentalInvite]:
        """List invites for a rental, newest first."""
        matches = [i for i in self._invites if i.rental_id == rental_id]
        matches.sort(key=lambda inv: inv.id, reverse=True)
        return matches

    async def mark_accepted(
        self, invite_id: InviteId, accepted_by: UserId, accepted_at: datetime
    ) -> Optional[RentalInvite]:
        """Move a pending invite to accepted; None if it was not pending."""
        for i, invite in enumerate(self._invites):
            if invite.id != invite_id:
                continue
            if invite.status != InviteStatus.PENDING:
                return None
            accepted = invite.model_copy(
                update={
                    "status": InviteStatus.ACCEPTED,
                    "accepted_by": accepted_by,
                    "accepted_at": accepted_at,
                }
            )
            self._invites[i] = accepted
            return accepted
        return None
