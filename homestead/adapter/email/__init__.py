"""Email adapter."""

from .client import (
    EmailDeliveryError,
    MockEmailSender,
    NullEmailSender,
    SmtpEmailSender,
)

__all__ = [
    "EmailDeliveryError",
    "MockEmailSender",
    "NullEmailSender",
    "SmtpEmailSender",
]
