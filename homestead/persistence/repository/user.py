"""PostgreSQL implementations of the user and property read repositories."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homestead.domain.model import Property, User
from homestead.domain.repository import PropertyRepository, UserRepository
from homestead.domain.value import PropertyId, UserId
from homestead.persistence.mappers import row_to_property, row_to_user
from homestead.persistence.tables import properties_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None


class PostgresPropertyRepository(PropertyRepository):
    """PostgreSQL implementation of PropertyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, property_id: PropertyId) -> Optional[Property]:
        """Find a property by ID."""
        stmt = select(properties_table).where(properties_table.c.id == property_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_property(dict(row)) if row else None
