"""Create rental invite use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.config import Settings
from homestead.domain.model import RentalInvite
from homestead.domain.service import InviteService
from homestead.domain.value import InviteStatus, Principal, RentalId, Role, UserId


class CreateInviteRequest(BaseModel):
    """Create invite request."""

    user_id: int
    role: Role = Role.USER
    rental_id: int
    invitee_email: Optional[EmailStr] = None


class InviteItem(CamelModel):
    """Invite as returned to rental participants."""

    id: int
    rental_id: int
    code: str
    redeem_url: str
    inviter_id: int
    invitee_email: Optional[str]
    status: InviteStatus
    created_at: datetime
    expires_at: datetime
    accepted_by: Optional[int]
    accepted_at: Optional[datetime]

    @classmethod
    def from_invite(cls, invite: RentalInvite, settings: Settings) -> "InviteItem":
        return cls(
            id=invite.id,
            rental_id=invite.rental_id,
            code=invite.code.root,
            redeem_url=(
                f"{settings.api.frontend_url}"
                f"{settings.invitations.frontend_redeem_path}/{invite.code.root}"
            ),
            inviter_id=invite.inviter_id,
            invitee_email=invite.invitee_email,
            status=invite.status,
            created_at=invite.created_at,
            expires_at=invite.expires_at,
            accepted_by=invite.accepted_by,
            accepted_at=invite.accepted_at,
        )


class CreateInviteUseCase(BaseUseCase):
    """Use case for inviting a second participant into a rental.

    The invitee email, if any, is sent by the caller after the response;
    see ``NotificationService.send_invite_email``.
    """

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        """Initialize create invite use case.

        Args:
            invite_service: Invite domain service
            settings: Application settings
        """
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: CreateInviteRequest) -> InviteItem:
        """Execute create invite flow.

        Raises:
            NotFoundError: If the rental does not exist
            ForbiddenError: If the user is not a rental participant
            UnexpectedError: If no unique code could be generated
        """
        invite = await self.invite_service.create_invite(
            RentalId(request.rental_id),
            Principal(user_id=UserId(request.user_id), role=request.role),
            str(request.invitee_email) if request.invitee_email else None,
        )
        return InviteItem.from_invite(invite, self.settings)
