"""Start rental use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.domain.model import Rental
from homestead.domain.service import RentalService
from homestead.domain.value import Principal, PropertyId, Role, UserId


class StartRentalRequest(BaseModel):
    """Start rental request."""

    user_id: int
    role: Role = Role.USER
    property_id: int
    borrower_id: Optional[int] = None
    start_date: datetime
    next_due_date: datetime
    rent_amount: float


class RentalItem(CamelModel):
    """Rental as returned to clients."""

    id: int
    property_id: int
    borrower_id: Optional[int]
    start_date: datetime
    next_due_date: datetime
    rent_amount: float
    is_active: bool

    @classmethod
    def from_rental(cls, rental: Rental) -> "RentalItem":
        return cls(
            id=rental.id,
            property_id=rental.property_id,
            borrower_id=rental.borrower_id,
            start_date=rental.start_date,
            next_due_date=rental.next_due_date,
            rent_amount=rental.rent_amount,
            is_active=rental.is_active,
        )


class StartRentalUseCase(BaseUseCase):
    """Use case for an owner starting a rental on their property."""

    def __init__(self, rental_service: RentalService) -> None:
        """Initialize start rental use case.

        Args:
            rental_service: Rental domain service
        """
        self.rental_service = rental_service

    async def execute(self, request: StartRentalRequest) -> RentalItem:
        """Execute start rental flow.

        Raises:
            ValidationError: If the rent amount is not positive
            NotFoundError: If the property does not exist
            ForbiddenError: If the user does not own the property
        """
        rental = await self.rental_service.start_rental(
            Principal(user_id=UserId(request.user_id), role=request.role),
            PropertyId(request.property_id),
            UserId(request.borrower_id) if request.borrower_id is not None else None,
            request.start_date,
            request.next_due_date,
            request.rent_amount,
        )
        return RentalItem.from_rental(rental)
