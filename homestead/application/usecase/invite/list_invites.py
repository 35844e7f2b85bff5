"""List rental invites use case."""

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.application.usecase.invite.create_invite import InviteItem
from homestead.config import Settings
from homestead.domain.service import InviteService
from homestead.domain.value import Principal, RentalId, Role, UserId


class ListInvitesRequest(BaseModel):
    """List invites request."""

    user_id: int
    role: Role = Role.USER
    rental_id: int


class ListInvitesResponse(CamelModel):
    """A rental's invites, newest first."""

    invites: list[InviteItem]


class ListInvitesUseCase(BaseUseCase):
    """Use case for listing a rental's invites."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        invites = await self.invite_service.list_invites(
            RentalId(request.rental_id),
            Principal(user_id=UserId(request.user_id), role=request.role),
        )
        return ListInvitesResponse(
            invites=[InviteItem.from_invite(i, self.settings) for i in invites]
        )
