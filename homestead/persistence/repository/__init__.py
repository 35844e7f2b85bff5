"""PostgreSQL repository implementations."""

from homestead.persistence.repository.chat import (
    PostgresChatRepository,
    PostgresMessageRepository,
)
from homestead.persistence.repository.invite import PostgresInviteRepository
from homestead.persistence.repository.rental import PostgresRentalRepository
from homestead.persistence.repository.user import (
    PostgresPropertyRepository,
    PostgresUserRepository,
)

__all__ = [
    "PostgresChatRepository",
    "PostgresInviteRepository",
    "PostgresMessageRepository",
    "PostgresPropertyRepository",
    "PostgresRentalRepository",
    "PostgresUserRepository",
]
