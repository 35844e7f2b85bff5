"""Redeem invite use case."""

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.application.usecase.rental.start_rental import RentalItem
from homestead.domain.error import NotFoundError
from homestead.domain.service import InviteService
from homestead.domain.value import InviteCode, Principal, Role, UserId


class RedeemInviteRequest(BaseModel):
    """Redeem invite request."""

    user_id: int
    role: Role = Role.USER
    code: str


class RedeemInviteResponse(CamelModel):
    """The rental the redeemer is now linked to."""

    rental: RentalItem


class RedeemInviteUseCase(BaseUseCase):
    """Use case for redeeming an invite code."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize redeem invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: RedeemInviteRequest) -> RedeemInviteResponse:
        """Execute redeem invite flow.

        Raises:
            NotFoundError: If no invite matches the code
            GoneError: If the invite has expired
            ConflictError: If the invite was already redeemed
        """
        try:
            code = InviteCode(request.code)
        except PydanticValidationError:
            raise NotFoundError("Invite", request.code)

        rental = await self.invite_service.redeem_invite(
            code, Principal(user_id=UserId(request.user_id), role=request.role)
        )
        return RedeemInviteResponse(rental=RentalItem.from_rental(rental))
