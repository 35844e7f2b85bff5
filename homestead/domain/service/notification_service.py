"""Notification domain service."""

from datetime import datetime

import logfire

from homestead.config import Settings

from .base import Service


class EmailSender:
    """Generic outbound email interface."""

    async def send(self, to: str, subject: str, body: str) -> None:
        """Send a plain-text email.

        Args:
            to: Destination address
            subject: Subject line
            body: Plain-text body

        Raises:
            Exception: Any transport failure
        """
        raise NotImplementedError


class NotificationService(Service):
    """Best-effort user notifications.

    Nothing here raises: a failed email is logged and dropped, and the
    operation that triggered it has already succeeded.
    """

    def __init__(self, email_sender: EmailSender, settings: Settings) -> None:
        """Initialize notification service.

        Args:
            email_sender: Outbound email transport
            settings: Application settings
        """
        self.email_sender = email_sender
        self.settings = settings

    async def send_invite_email(
        self,
        invitee_email: str | None,
        code: str,
        expires_at: datetime,
        invite_id: int | None = None,
    ) -> bool:
        """Email an invite code to the invitee, if an address was given.

        Args:
            invitee_email: Destination address, may be empty
            code: The invite code
            expires_at: When the code stops working
            invite_id: Invite ID, for logging

        Returns:
            True if the email was handed to the transport
        """
        if not invitee_email:
            return False

        redeem_url = (
            f"{self.settings.api.frontend_url}"
            f"{self.settings.invitations.frontend_redeem_path}/{code}"
        )
        body = (
            "You have been invited to join a rental on Homestead.\n\n"
            f"Your invite code is {code}. It expires on "
            f"{expires_at:%Y-%m-%d %H:%M} UTC.\n\n"
            f"Redeem it at {redeem_url}\n"
        )

        with logfire.span(
            "notification_service.send_invite_email",
            invite_id=invite_id,
        ):
            try:
                await self.email_sender.send(
                    invitee_email, "Your Homestead rental invite", body
                )
            except Exception as e:
                logfire.warn(
                    "Invite email failed",
                    invite_id=invite_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False

            logfire.info("Invite email sent", invite_id=invite_id)
            return True
