"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homestead.domain.model import RentalInvite
from homestead.domain.repository import InviteRepository
from homestead.domain.value import InviteCode, InviteId, InviteStatus, RentalId, UserId
from homestead.persistence.mappers import invite_to_dict, row_to_invite
from homestead.persistence.tables import rental_invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[RentalInvite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(rental_invites_table).where(rental_invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_code(self, code: InviteCode) -> Optional[RentalInvite]:
        """Find an invite by its code.

        Args:
            code: Normalized invite code

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(rental_invites_table).where(
            rental_invites_table.c.code == code.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def save(self, invite: RentalInvite) -> RentalInvite:
        """Insert a new invite.

        Runs in a savepoint so a code collision can be retried inside the
        same transaction.

        Raises:
            IntegrityError: If the code is already taken
        """
        stmt = (
            insert(rental_invites_table)
            .values(**invite_to_dict(invite))
            .returning(*rental_invites_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_invite(dict(row))

    async def find_by_rental(self, rental_id: RentalId) -> list[RentalInvite]:
        """List invites for a rental, newest first."""
        stmt = (
            select(rental_invites_table)
            .where(rental_invites_table.c.rental_id == rental_id)
            .order_by(rental_invites_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_invite(dict(row)) for row in rows]

    async def mark_accepted(
        self, invite_id: InviteId, accepted_by: UserId, accepted_at: datetime
    ) -> Optional[RentalInvite]:
        """Move a pending invite to accepted in one conditional update.

        Returns:
            The accepted invite, or None if no pending row matched
        """
        stmt = (
            update(rental_invites_table)
            .where(
                and_(
                    rental_invites_table.c.id == invite_id,
                    rental_invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .values(
                status=InviteStatus.ACCEPTED.value,
                accepted_by=accepted_by,
                accepted_at=accepted_at,
            )
            .returning(*rental_invites_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_invite(dict(row)) if row else None
