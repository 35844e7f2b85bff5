"""Domain layer DI providers."""

from dishka import Scope, provide

from homestead.config import AuthSettings, InvitationSettings, Settings
from homestead.domain.repository import (
    ChatRepository,
    InviteRepository,
    MessageRepository,
    PropertyRepository,
    RentalRepository,
    UserRepository,
)
from homestead.domain.service import (
    ChatService,
    EmailSender,
    InviteService,
    JWTService,
    NotificationService,
    RentalService,
)
from homestead.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request (or realtime operation) gets fresh service instances with
    their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_chat_service(
        self,
        chat_repository: ChatRepository,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        property_repository: PropertyRepository,
    ) -> ChatService:
        """Provide chat domain service."""
        return ChatService(
            chat_repository=chat_repository,
            message_repository=message_repository,
            user_repository=user_repository,
            property_repository=property_repository,
        )

    @provide
    def get_rental_service(
        self,
        rental_repository: RentalRepository,
        property_repository: PropertyRepository,
    ) -> RentalService:
        """Provide rental domain service."""
        return RentalService(
            rental_repository=rental_repository,
            property_repository=property_repository,
        )

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        rental_service: RentalService,
        settings: InvitationSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            rental_service=rental_service,
            settings=settings,
        )

    @provide(scope=Scope.APP)
    def get_notification_service(
        self, email_sender: EmailSender, settings: Settings
    ) -> NotificationService:
        """Provide notification service.

        APP-scoped: it holds no session and runs in background tasks after
        the request has finished.
        """
        return NotificationService(email_sender=email_sender, settings=settings)
