"""Invite use cases."""

from homestead.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    InviteItem,
)
from homestead.application.usecase.invite.list_invites import (
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
)
from homestead.application.usecase.invite.preview_invite import (
    PreviewInviteRequest,
    PreviewInviteResponse,
    PreviewInviteUseCase,
)
from homestead.application.usecase.invite.redeem_invite import (
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
)

__all__ = [
    "CreateInviteRequest",
    "CreateInviteUseCase",
    "InviteItem",
    "ListInvitesRequest",
    "ListInvitesResponse",
    "ListInvitesUseCase",
    "PreviewInviteRequest",
    "PreviewInviteResponse",
    "PreviewInviteUseCase",
    "RedeemInviteRequest",
    "RedeemInviteResponse",
    "RedeemInviteUseCase",
]
