"""Rental use cases."""

from homestead.application.usecase.rental.end_rental import (
    EndRentalRequest,
    EndRentalUseCase,
)
from homestead.application.usecase.rental.list_rentals import (
    ListRentalsRequest,
    ListRentalsResponse,
    ListRentalsUseCase,
)
from homestead.application.usecase.rental.start_rental import (
    RentalItem,
    StartRentalRequest,
    StartRentalUseCase,
)

__all__ = [
    "EndRentalRequest",
    "EndRentalUseCase",
    "ListRentalsRequest",
    "ListRentalsResponse",
    "ListRentalsUseCase",
    "RentalItem",
    "StartRentalRequest",
    "StartRentalUseCase",
]
