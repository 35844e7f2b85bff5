"""Rental invite domain service."""

import secrets
from collections.abc import Callable
from datetime import timedelta

import logfire
from sqlalchemy.exc import IntegrityError

from homestead.config import InvitationSettings
from homestead.domain.error import ConflictError, GoneError, NotFoundError, UnexpectedError
from homestead.domain.model import Rental, RentalInvite
from homestead.domain.model.common import utcnow
from homestead.domain.repository import InviteRepository
from homestead.domain.value import (
    INVITE_CODE_ALPHABET,
    InviteCode,
    InviteStatus,
    Principal,
    RentalId,
)

from .base import Service
from .rental_service import RentalService


def generate_invite_code(length: int) -> str:
    """Draw ``length`` symbols uniformly, with replacement, from the invite alphabet."""
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


class InviteService(Service):
    """Domain service for creating, listing and redeeming rental invites."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        rental_service: RentalService,
        settings: InvitationSettings,
        code_factory: Callable[[int], str] = generate_invite_code,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            rental_service: Rental domain service
            settings: Invitation settings
            code_factory: Produces a code of the given length
        """
        self.invite_repository = invite_repository
        self.rental_service = rental_service
        self.settings = settings
        self.code_factory = code_factory

    async def create_invite(
        self,
        rental_id: RentalId,
        requester: Principal,
        invitee_email: str | None = None,
    ) -> RentalInvite:
        """Create a pending invite for a rental.

        A generated code that collides with an existing one is rejected by
        the unique constraint; a fresh code is drawn up to
        ``max_code_attempts`` times.

        Args:
            rental_id: Rental to invite into
            requester: Borrower, property owner or admin
            invitee_email: Optional address to notify

        Returns:
            Created invite

        Raises:
            NotFoundError: If the rental does not exist
            ForbiddenError: If the requester is not a rental participant
            UnexpectedError: If no unique code could be generated
        """
        with logfire.span(
            "invite_service.create_invite",
            rental_id=rental_id,
            inviter_id=requester.user_id,
        ):
            await self.rental_service.get_rental_for_participant(rental_id, requester)

            created_at = utcnow()
            expires_at = created_at + timedelta(days=self.settings.ttl_days)

            for attempt in range(1, self.settings.max_code_attempts + 1):
                invite = RentalInvite(
                    rental_id=rental_id,
                    code=InviteCode(self.code_factory(self.settings.code_length)),
                    inviter_id=requester.user_id,
                    invitee_email=invitee_email,
                    status=InviteStatus.PENDING,
                    created_at=created_at,
                    expires_at=expires_at,
                )
                try:
                    saved = await self.invite_repository.save(invite)
                except IntegrityError:
                    logfire.warn(
                        "Invite code collision", rental_id=rental_id, attempt=attempt
                    )
                    continue

                logfire.info(
                    "Invite created",
                    invite_id=saved.id,
                    rental_id=rental_id,
                    inviter_id=requester.user_id,
                    expires_at=expires_at,
                )
                return saved

            logfire.error(
                "Invite code generation exhausted",
                rental_id=rental_id,
                attempts=self.settings.max_code_attempts,
            )
            raise UnexpectedError("Could not generate a unique invite code")

    async def list_invites(
        self, rental_id: RentalId, requester: Principal
    ) -> list[RentalInvite]:
        """List a rental's invites, newest first.

        Raises:
            NotFoundError: If the rental does not exist
            ForbiddenError: If the requester is not a rental participant
        """
        with logfire.span(
            "invite_service.list_invites",
            rental_id=rental_id,
            user_id=requester.user_id,
        ):
            await self.rental_service.get_rental_for_participant(rental_id, requester)
            invites = await self.invite_repository.find_by_rental(rental_id)
            logfire.info("Invites listed", rental_id=rental_id, count=len(invites))
            return invites

    async def get_invite_by_code(self, code: InviteCode) -> RentalInvite | None:
        """Get invite by code.

        Args:
            code: Normalized invite code

        Returns:
            Invite if found, None otherwise
        """
        with logfire.span("invite_service.get_invite_by_code", code=code.root[:2] + "..."):
            if not code.well_formed:
                logfire.info("Malformed invite code")
                return None
            invite = await self.invite_repository.find_by_code(code)
            if invite is None:
                logfire.warn("Invite not found", code=code.root[:2] + "...")
            return invite

    async def redeem_invite(self, code: InviteCode, redeemer: Principal) -> Rental:
        """Redeem an invite code and link the redeemer into the rental.

        The invite is claimed with a conditional pending -> accepted update
        before the rental is touched; a caller that loses the claim gets a
        conflict and never links. Claim and link share the request's
        transaction, so they commit or roll back together.

        Args:
            code: Presented invite code (case-insensitive)
            redeemer: Redeeming user

        Returns:
            The rental after linking

        Raises:
            NotFoundError: If no invite matches the code
            GoneError: If the invite has expired
            ConflictError: If the invite was already redeemed
        """
        with logfire.span("invite_service.redeem_invite", user_id=redeemer.user_id):
            invite = await self.get_invite_by_code(code)
            if invite is None or invite.id is None:
                raise NotFoundError("Invite", code.root)

            now = utcnow()
            if invite.is_expired(now):
                logfire.info("Expired invite redeemed", invite_id=invite.id)
                raise GoneError("Invite has expired")

            if invite.status != InviteStatus.PENDING:
                logfire.info("Accepted invite redeemed again", invite_id=invite.id)
                raise ConflictError("Invite has already been accepted")

            accepted = await self.invite_repository.mark_accepted(
                invite.id, redeemer.user_id, now
            )
            if accepted is None:
                logfire.warn("Invite redemption lost race", invite_id=invite.id)
                raise ConflictError("Invite has already been accepted")

            rental = await self.rental_service.link_borrower(
                invite.rental_id, redeemer.user_id
            )
            logfire.info(
                "Invite accepted",
                invite_id=invite.id,
                rental_id=invite.rental_id,
                accepted_by=redeemer.user_id,
            )
            return rental
