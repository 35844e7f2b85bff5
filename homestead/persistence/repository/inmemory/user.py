"""In-memory user and property repositories for testing."""

from typing import Optional

from homestead.domain.model.property import Property
from homestead.domain.model.user import User
from homestead.domain.repository.rental import PropertyRepository
from homestead.domain.repository.user import UserRepository
from homestead.domain.value import PropertyId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        """Seed a user. Accounts are created outside this service."""
        self._users[user.id] = user
        return user


class InMemoryPropertyRepository(PropertyRepository):
    """In-memory implementation of PropertyRepository for testing."""

    def __init__(self) -> None:
        self._properties: dict[PropertyId, Property] = {}

    async def find_by_id(self, property_id: PropertyId) -> Optional[Property]:
        """Find a property by ID."""
        return self._properties.get(property_id)

    def add(self, prop: Property) -> Property:
        """Seed a property."""
        self._properties[prop.id] = prop
        return prop

    def owned_by(self, owner_id: UserId) -> set[PropertyId]:
        return {p.id for p in self._properties.values() if p.owner_id == owner_id}
