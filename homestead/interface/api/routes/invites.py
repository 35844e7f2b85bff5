"""Invite redemption routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from homestead.application.usecase.base import CamelModel
from homestead.application.usecase.invite import (
    PreviewInviteRequest,
    PreviewInviteResponse,
    PreviewInviteUseCase,
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
)
from homestead.domain.service import JWTService
from homestead.interface.api.auth import require_principal

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class RedeemInviteAPIRequest(CamelModel):
    """API request for redeeming an invite code."""

    code: str


@router.post("/redeem", response_model=RedeemInviteResponse)
async def redeem_invite(
    request: RedeemInviteAPIRequest,
    redeem_invite_use_case: FromDishka[RedeemInviteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> RedeemInviteResponse:
    """Redeem an invite code and join the rental.

    Codes are case-insensitive. Unknown codes give 404, expired codes 410
    and already-used codes 409.
    """
    principal = require_principal(jwt_service, authorization, auth_token)
    return await redeem_invite_use_case.execute(
        RedeemInviteRequest(
            user_id=principal.user_id, role=principal.role, code=request.code
        )
    )


@router.get("/{code}", response_model=PreviewInviteResponse)
async def preview_invite(
    code: str,
    preview_invite_use_case: FromDishka[PreviewInviteUseCase],
) -> PreviewInviteResponse:
    """Check whether an invite code can be redeemed.

    Public, so the frontend can show the invite before the user signs in.
    """
    return await preview_invite_use_case.execute(PreviewInviteRequest(code=code))
