"""PostgreSQL implementation of Rental repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homestead.domain.error import NotFoundError
from homestead.domain.model import Rental
from homestead.domain.repository import RentalRepository
from homestead.domain.value import RentalId, UserId
from homestead.persistence.mappers import rental_to_dict, row_to_rental
from homestead.persistence.tables import properties_table, rentals_table


class PostgresRentalRepository(RentalRepository):
    """PostgreSQL implementation of RentalRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, rental_id: RentalId) -> Optional[Rental]:
        """Find a rental by ID."""
        stmt = select(rentals_table).where(rentals_table.c.id == rental_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_rental(dict(row)) if row else None

    async def save(self, rental: Rental) -> Rental:
        """Insert a new rental and return it with its assigned ID."""
        stmt = (
            insert(rentals_table)
            .values(**rental_to_dict(rental))
            .returning(*rentals_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_rental(dict(row))

    async def _update(self, rental_id: RentalId, **values) -> Rental:
        stmt = (
            update(rentals_table)
            .where(rentals_table.c.id == rental_id)
            .values(**values)
            .returning(*rentals_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            raise NotFoundError("Rental", rental_id)
        await self.session.flush()
        return row_to_rental(dict(row))

    async def set_borrower(self, rental_id: RentalId, borrower_id: UserId) -> Rental:
        """Set the rental's borrower, replacing any previous one.

        Raises:
            NotFoundError: If the rental does not exist
        """
        return await self._update(rental_id, borrower_id=borrower_id)

    async def deactivate(self, rental_id: RentalId) -> Rental:
        """Mark the rental as ended.

        Raises:
            NotFoundError: If the rental does not exist
        """
        return await self._update(rental_id, is_active=False)

    async def find_by_owner(self, owner_id: UserId) -> list[Rental]:
        """List rentals of properties owned by the user, newest start first."""
        stmt = (
            select(rentals_table)
            .join(properties_table, properties_table.c.id == rentals_table.c.property_id)
            .where(properties_table.c.owner_id == owner_id)
            .order_by(rentals_table.c.start_date.desc(), rentals_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_rental(dict(row)) for row in rows]

    async def find_by_borrower(self, borrower_id: UserId) -> list[Rental]:
        """List rentals where the user is the borrower, newest start first."""
        stmt = (
            select(rentals_table)
            .where(rentals_table.c.borrower_id == borrower_id)
            .order_by(rentals_table.c.start_date.desc(), rentals_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_rental(dict(row)) for row in rows]
