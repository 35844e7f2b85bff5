"""End rental use case."""

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase
from homestead.application.usecase.rental.start_rental import RentalItem
from homestead.domain.service import RentalService
from homestead.domain.value import Principal, RentalId, Role, UserId


class EndRentalRequest(BaseModel):
    """End rental request."""

    user_id: int
    role: Role = Role.USER
    rental_id: int


class EndRentalUseCase(BaseUseCase):
    """Use case for ending a rental."""

    def __init__(self, rental_service: RentalService) -> None:
        self.rental_service = rental_service

    async def execute(self, request: EndRentalRequest) -> RentalItem:
        rental = await self.rental_service.end_rental(
            Principal(user_id=UserId(request.user_id), role=request.role),
            RentalId(request.rental_id),
        )
        return RentalItem.from_rental(rental)
