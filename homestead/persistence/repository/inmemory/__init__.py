"""In-memory repository implementations for testing."""

from .chat import InMemoryChatRepository, InMemoryMessageRepository
from .invite import InMemoryInviteRepository
from .rental import InMemoryRentalRepository
from .user import InMemoryPropertyRepository, InMemoryUserRepository

__all__ = [
    "InMemoryChatRepository",
    "InMemoryInviteRepository",
    "InMemoryMessageRepository",
    "InMemoryPropertyRepository",
    "InMemoryRentalRepository",
    "InMemoryUserRepository",
]
