"""Property entity (read-only in this service)."""

from datetime import datetime

from pydantic import Field

from homestead.domain.model.common import DomainModel, utcnow
from homestead.domain.value import PropertyId, UserId


class Property(DomainModel):
    """A listed property. Rentals take their owner from here."""

    id: PropertyId
    owner_id: UserId
    title: str
    location: str = ""
    price: float = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
