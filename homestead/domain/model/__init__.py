"""Domain model entities for Homestead."""

from homestead.domain.model.chat import Chat
from homestead.domain.model.invite import RentalInvite
from homestead.domain.model.message import Message
from homestead.domain.model.property import Property
from homestead.domain.model.rental import Rental
from homestead.domain.model.user import User

__all__ = [
    "Chat",
    "Message",
    "Property",
    "Rental",
    "RentalInvite",
    "User",
]
