"""Rental invite entity.

Invites link a second participant into an existing rental. Each invite
carries a short code that a user types in to redeem it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from homestead.domain.model.common import DomainModel, utcnow
from homestead.domain.value import (
    InviteCode,
    InviteId,
    InviteStatus,
    RentalId,
    UserId,
)


class RentalInvite(DomainModel):
    """Rental invite entity.

    Business rules:
    - Codes are globally unique and matched case-insensitively
    - Invites expire a fixed time after creation; expiry is never extended
    - Status moves from pending to accepted exactly once
    - Invites are never deleted
    """

    id: Optional[InviteId] = None
    rental_id: RentalId
    code: InviteCode
    inviter_id: UserId
    invitee_email: Optional[str] = None
    status: InviteStatus = InviteStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    accepted_by: Optional[UserId] = None
    accepted_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite can no longer be redeemed at ``now``."""
        return now > self.expires_at
