"""Domain value objects for Homestead.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from homestead.domain.value.common import RootValueObject, ValueObject
from homestead.domain.value.identifiers import UserId

# 32 symbols: no 0/O or 1/I, upper case only so case folding never collides
INVITE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


class Role(str, Enum):
    """Account role carried in the auth token."""

    USER = "user"
    ADMIN = "admin"


class InviteStatus(str, Enum):
    """Status of a rental invite."""

    PENDING = "pending"
    ACCEPTED = "accepted"


class RentalRole(str, Enum):
    """Side of a rental a user is looking from."""

    OWNER = "owner"
    RENTER = "renter"


class Principal(ValueObject):
    """Authenticated identity behind a request or connection."""

    user_id: UserId
    role: Role = Role.USER

    @property
    def is_elevated(self) -> bool:
        """Admins may act on rentals they are not part of."""
        return self.role == Role.ADMIN


class InviteCode(RootValueObject[str]):
    """Rental invite code as presented by a user.

    Codes are normalized to upper case, so lookups are case-insensitive.
    """

    @field_validator("root")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Trim and upper-case the code."""
        v = v.strip().upper()
        if len(v) < 1 or len(v) > 64:
            raise ValueError("Invite code must be 1-64 characters")
        return v

    @property
    def well_formed(self) -> bool:
        """Whether the code only uses symbols from the invite alphabet."""
        return re.fullmatch(f"[{INVITE_CODE_ALPHABET}]+", self.root) is not None


class MessageContent(RootValueObject[str]):
    """Chat message text, trimmed and never blank."""

    @field_validator("root")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank content."""
        v = v.strip()
        if not v:
            raise ValueError("Message content must not be empty")
        return v
