"""Rental domain service.

Holds the rental lifecycle (start, end, list) and the linking rule applied
when an invite is redeemed.
"""

from datetime import datetime
from enum import Enum

import logfire

from homestead.domain.error import ForbiddenError, NotFoundError, ValidationError
from homestead.domain.model import Property, Rental
from homestead.domain.repository import PropertyRepository, RentalRepository
from homestead.domain.value import (
    Principal,
    PropertyId,
    RentalId,
    RentalRole,
    UserId,
)

from .base import Service


class LinkTransition(str, Enum):
    """Outcome of linking a redeeming user to a rental."""

    LINKED = "linked"
    ALREADY_BORROWER = "already_borrower"
    OWNER_SKIPPED = "owner_skipped"


def decide_link(rental: Rental, prop: Property, redeemer_id: UserId) -> LinkTransition:
    """Decide how a redeeming user attaches to a rental.

    Owners never become borrowers of their own property, and the current
    borrower redeeming again is a no-op. Anyone else becomes the borrower,
    replacing whoever held the slot before.
    """
    if prop.owner_id == redeemer_id:
        return LinkTransition.OWNER_SKIPPED
    if rental.borrower_id == redeemer_id:
        return LinkTransition.ALREADY_BORROWER
    return LinkTransition.LINKED


class RentalService(Service):
    """Domain service for rentals."""

    def __init__(
        self,
        rental_repository: RentalRepository,
        property_repository: PropertyRepository,
    ) -> None:
        """Initialize rental service.

        Args:
            rental_repository: Rental repository
            property_repository: Property repository
        """
        self.rental_repository = rental_repository
        self.property_repository = property_repository

    async def get_rental_with_property(
        self, rental_id: RentalId
    ) -> tuple[Rental, Property]:
        """Load a rental together with its property.

        Raises:
            NotFoundError: If the rental or its property does not exist
        """
        rental = await self.rental_repository.find_by_id(rental_id)
        if rental is None:
            raise NotFoundError("Rental", rental_id)
        prop = await self.property_repository.find_by_id(rental.property_id)
        if prop is None:
            raise NotFoundError("Property", rental.property_id)
        return rental, prop

    async def get_rental_for_participant(
        self, rental_id: RentalId, principal: Principal
    ) -> tuple[Rental, Property]:
        """Load a rental the principal may act on.

        Borrower, property owner and admins are allowed.

        Raises:
            NotFoundError: If the rental does not exist
            ForbiddenError: If the principal is not a participant
        """
        rental, prop = await self.get_rental_with_property(rental_id)
        if not (
            principal.is_elevated
            or rental.borrower_id == principal.user_id
            or prop.owner_id == principal.user_id
        ):
            raise ForbiddenError("rental", rental_id, principal.user_id)
        return rental, prop

    async def start_rental(
        self,
        principal: Principal,
        property_id: PropertyId,
        borrower_id: UserId | None,
        start_date: datetime,
        next_due_date: datetime,
        rent_amount: float,
    ) -> Rental:
        """Start a rental on a property.

        Only the property owner or an admin may start a rental.

        Raises:
            ValidationError: If the rent amount is not positive
            NotFoundError: If the property does not exist
            ForbiddenError: If the principal does not own the property
        """
        with logfire.span(
            "rental_service.start_rental",
            property_id=property_id,
            user_id=principal.user_id,
        ):
            if rent_amount <= 0:
                raise ValidationError("Rent amount must be positive", "rentAmount")

            prop = await self.property_repository.find_by_id(property_id)
            if prop is None:
                raise NotFoundError("Property", property_id)
            if prop.owner_id != principal.user_id and not principal.is_elevated:
                raise ForbiddenError("property", property_id, principal.user_id)

            rental = await self.rental_repository.save(
                Rental(
                    property_id=property_id,
                    borrower_id=borrower_id,
                    start_date=start_date,
                    next_due_date=next_due_date,
                    rent_amount=rent_amount,
                )
            )
            logfire.info("Rental started", rental_id=rental.id, property_id=property_id)
            return rental

    async def end_rental(self, principal: Principal, rental_id: RentalId) -> Rental:
        """End a rental. Owner or admin only.

        Raises:
            NotFoundError: If the rental does not exist
            ForbiddenError: If the principal does not own the property
        """
        with logfire.span(
            "rental_service.end_rental", rental_id=rental_id, user_id=principal.user_id
        ):
            _, prop = await self.get_rental_with_property(rental_id)
            if prop.owner_id != principal.user_id and not principal.is_elevated:
                raise ForbiddenError("rental", rental_id, principal.user_id)

            rental = await self.rental_repository.deactivate(rental_id)
            logfire.info("Rental ended", rental_id=rental_id)
            return rental

    async def list_rentals(self, user_id: UserId, role: RentalRole) -> list[Rental]:
        """List the user's rentals as owner or as renter."""
        with logfire.span(
            "rental_service.list_rentals", user_id=user_id, role=role.value
        ):
            if role == RentalRole.OWNER:
                return await self.rental_repository.find_by_owner(user_id)
            return await self.rental_repository.find_by_borrower(user_id)

    async def link_borrower(self, rental_id: RentalId, redeemer_id: UserId) -> Rental:
        """Attach a redeeming user to a rental as its borrower.

        An existing different borrower is overwritten: the most recently
        accepted invite decides who the borrower is.

        Args:
            rental_id: Rental the invite belongs to
            redeemer_id: User redeeming the invite

        Returns:
            The rental after linking (unchanged for owners and the current borrower)

        Raises:
            NotFoundError: If the rental or its property does not exist
        """
        with logfire.span(
            "rental_service.link_borrower", rental_id=rental_id, redeemer_id=redeemer_id
        ):
            rental, prop = await self.get_rental_with_property(rental_id)
            transition = decide_link(rental, prop, redeemer_id)

            if transition != LinkTransition.LINKED:
                logfire.info(
                    "Rental link skipped",
                    rental_id=rental_id,
                    redeemer_id=redeemer_id,
                    transition=transition.value,
                )
                return rental

            if rental.borrower_id is not None:
                logfire.warn(
                    "Replacing existing borrower",
                    rental_id=rental_id,
                    previous_borrower_id=rental.borrower_id,
                    redeemer_id=redeemer_id,
                )

            linked = await self.rental_repository.set_borrower(rental_id, redeemer_id)
            logfire.info("Borrower linked", rental_id=rental_id, borrower_id=redeemer_id)
            return linked
