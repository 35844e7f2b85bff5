"""Application layer DI providers."""

from dishka import Scope, provide

from homestead.application.usecase.chat import (
    ListChatsUseCase,
    ListMessagesUseCase,
    SendMessageUseCase,
    StartChatUseCase,
)
from homestead.application.usecase.invite import (
    CreateInviteUseCase,
    ListInvitesUseCase,
    PreviewInviteUseCase,
    RedeemInviteUseCase,
)
from homestead.application.usecase.rental import (
    EndRentalUseCase,
    ListRentalsUseCase,
    StartRentalUseCase,
)
from homestead.config import Settings
from homestead.domain.service import ChatService, InviteService, RentalService
from homestead.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Chat use cases
    @provide(scope=Scope.REQUEST)
    def get_start_chat_use_case(self, chat_service: ChatService) -> StartChatUseCase:
        """Provide start chat use case."""
        return StartChatUseCase(chat_service=chat_service)

    @provide(scope=Scope.REQUEST)
    def get_list_chats_use_case(self, chat_service: ChatService) -> ListChatsUseCase:
        """Provide list chats use case."""
        return ListChatsUseCase(chat_service=chat_service)

    @provide(scope=Scope.REQUEST)
    def get_list_messages_use_case(
        self, chat_service: ChatService
    ) -> ListMessagesUseCase:
        """Provide list messages use case."""
        return ListMessagesUseCase(chat_service=chat_service)

    @provide(scope=Scope.REQUEST)
    def get_send_message_use_case(
        self, chat_service: ChatService
    ) -> SendMessageUseCase:
        """Provide send message use case."""
        return SendMessageUseCase(chat_service=chat_service)

    # Rental use cases
    @provide(scope=Scope.REQUEST)
    def get_start_rental_use_case(
        self, rental_service: RentalService
    ) -> StartRentalUseCase:
        """Provide start rental use case."""
        return StartRentalUseCase(rental_service=rental_service)

    @provide(scope=Scope.REQUEST)
    def get_end_rental_use_case(self, rental_service: RentalService) -> EndRentalUseCase:
        """Provide end rental use case."""
        return EndRentalUseCase(rental_service=rental_service)

    @provide(scope=Scope.REQUEST)
    def get_list_rentals_use_case(
        self, rental_service: RentalService
    ) -> ListRentalsUseCase:
        """Provide list rentals use case."""
        return ListRentalsUseCase(rental_service=rental_service)

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(invite_service=invite_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_list_invites_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> ListInvitesUseCase:
        """Provide list invites use case."""
        return ListInvitesUseCase(invite_service=invite_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_preview_invite_use_case(
        self, invite_service: InviteService
    ) -> PreviewInviteUseCase:
        """Provide preview invite use case."""
        return PreviewInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_redeem_invite_use_case(
        self, invite_service: InviteService
    ) -> RedeemInviteUseCase:
        """Provide redeem invite use case."""
        return RedeemInviteUseCase(invite_service=invite_service)
