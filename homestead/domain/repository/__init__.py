"""Repository interfaces for Homestead domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from homestead.domain.repository.chat import ChatRepository, MessageRepository
from homestead.domain.repository.invite import InviteRepository
from homestead.domain.repository.rental import PropertyRepository, RentalRepository
from homestead.domain.repository.user import UserRepository

__all__ = [
    "ChatRepository",
    "InviteRepository",
    "MessageRepository",
    "PropertyRepository",
    "RentalRepository",
    "UserRepository",
]
