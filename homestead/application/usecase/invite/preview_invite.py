"""Preview invite use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.domain.model.common import utcnow
from homestead.domain.service import InviteService
from homestead.domain.value import InviteCode, InviteStatus


class PreviewInviteRequest(BaseModel):
    """Preview invite request."""

    code: str


class PreviewInviteResponse(CamelModel):
    """Whether a code can be redeemed right now."""

    valid: bool
    status: Optional[InviteStatus] = None
    rental_id: Optional[int] = None
    expires_at: Optional[datetime] = None
    message: Optional[str] = None


class PreviewInviteUseCase(BaseUseCase):
    """Use case for checking an invite code before redeeming it.

    Never raises for unknown, expired or accepted codes; the answer is in
    the response.
    """

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize preview invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: PreviewInviteRequest) -> PreviewInviteResponse:
        """Look the code up and describe its state.

        Args:
            request: Preview request with the presented code

        Returns:
            Preview response
        """
        with logfire.span("preview_invite.execute"):
            try:
                code = InviteCode(request.code)
            except PydanticValidationError:
                return PreviewInviteResponse(valid=False, message="Invite not found")

            invite = await self.invite_service.get_invite_by_code(code)
            if invite is None:
                return PreviewInviteResponse(valid=False, message="Invite not found")

            if invite.status != InviteStatus.PENDING:
                return PreviewInviteResponse(
                    valid=False,
                    status=invite.status,
                    rental_id=invite.rental_id,
                    expires_at=invite.expires_at,
                    message="Invite has already been accepted",
                )

            if invite.is_expired(utcnow()):
                return PreviewInviteResponse(
                    valid=False,
                    status=invite.status,
                    rental_id=invite.rental_id,
                    expires_at=invite.expires_at,
                    message="Invite has expired",
                )

            return PreviewInviteResponse(
                valid=True,
                status=invite.status,
                rental_id=invite.rental_id,
                expires_at=invite.expires_at,
                message="Valid invite",
            )
