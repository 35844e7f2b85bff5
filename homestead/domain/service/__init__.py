"""Domain services."""

from .base import Service
from .chat_service import ChatService
from .invite_service import InviteService, generate_invite_code
from .jwt_service import JWTService
from .notification_service import EmailSender, NotificationService
from .rental_service import LinkTransition, RentalService, decide_link

__all__ = [
    "ChatService",
    "EmailSender",
    "InviteService",
    "JWTService",
    "LinkTransition",
    "NotificationService",
    "RentalService",
    "Service",
    "decide_link",
    "generate_invite_code",
]
