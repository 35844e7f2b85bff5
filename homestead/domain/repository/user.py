"""User repository interface."""

from abc import ABC, abstractmethod

from homestead.domain.model import User
from homestead.domain.value import UserId


class UserRepository(ABC):
    """Read access to user accounts. Registration lives elsewhere."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find a user by ID."""
        pass
