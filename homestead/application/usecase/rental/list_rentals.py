"""List my rentals use case."""

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.application.usecase.rental.start_rental import RentalItem
from homestead.domain.service import RentalService
from homestead.domain.value import RentalRole, UserId


class ListRentalsRequest(BaseModel):
    """List rentals request."""

    user_id: int
    role: RentalRole = RentalRole.RENTER


class ListRentalsResponse(CamelModel):
    """Rentals seen from one side, newest start first."""

    rentals: list[RentalItem]


class ListRentalsUseCase(BaseUseCase):
    """Use case for listing rentals the user owns or rents."""

    def __init__(self, rental_service: RentalService) -> None:
        self.rental_service = rental_service

    async def execute(self, request: ListRentalsRequest) -> ListRentalsResponse:
        rentals = await self.rental_service.list_rentals(
            UserId(request.user_id), request.role
        )
        return ListRentalsResponse(rentals=[RentalItem.from_rental(r) for r in rentals])
