"""Domain value objects for Homestead."""

from homestead.domain.value.identifiers import (
    ChatId,
    InviteId,
    MessageId,
    PropertyId,
    RentalId,
    UserId,
)
from homestead.domain.value.types import (
    INVITE_CODE_ALPHABET,
    InviteCode,
    InviteStatus,
    MessageContent,
    Principal,
    RentalRole,
    Role,
)

__all__ = [
    # Identifiers
    "UserId",
    "PropertyId",
    "RentalId",
    "ChatId",
    "MessageId",
    "InviteId",
    # Types
    "INVITE_CODE_ALPHABET",
    "InviteCode",
    "InviteStatus",
    "MessageContent",
    "Principal",
    "RentalRole",
    "Role",
]
