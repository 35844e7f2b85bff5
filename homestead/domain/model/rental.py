"""Rental entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from homestead.domain.model.common import DomainModel
from homestead.domain.value import PropertyId, RentalId, UserId


class Rental(DomainModel):
    """A rental of a property.

    The owner is the property's owner. The borrower may be unset until a
    second participant is linked through an invite.
    """

    id: Optional[RentalId] = None
    property_id: PropertyId
    borrower_id: Optional[UserId] = None
    start_date: datetime
    next_due_date: datetime
    rent_amount: float = Field(gt=0)
    is_active: bool = True
