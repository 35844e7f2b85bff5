"""Rental routes."""

from datetime import datetime
from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, BackgroundTasks, Cookie, Header, Query, status
from pydantic import EmailStr

from homestead.application.usecase.base import CamelModel
from homestead.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    InviteItem,
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
)
from homestead.application.usecase.rental import (
    EndRentalRequest,
    EndRentalUseCase,
    ListRentalsRequest,
    ListRentalsResponse,
    ListRentalsUseCase,
    RentalItem,
    StartRentalRequest,
    StartRentalUseCase,
)
from homestead.domain.service import JWTService, NotificationService
from homestead.domain.value import RentalRole
from homestead.interface.api.auth import require_principal

router = APIRouter(prefix="/rentals", tags=["rentals"], route_class=DishkaRoute)


class StartRentalAPIRequest(CamelModel):
    """API request for starting a rental."""

    property_id: int
    borrower_id: Optional[int] = None
    start_date: datetime
    next_due_date: datetime
    rent_amount: float


class CreateInviteAPIRequest(CamelModel):
    """API request for creating a rental invite."""

    invitee_email: Optional[EmailStr] = None


@router.post("/start", response_model=RentalItem, status_code=status.HTTP_201_CREATED)
async def start_rental(
    request: StartRentalAPIRequest,
    start_rental_use_case: FromDishka[StartRentalUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> RentalItem:
    """Start a rental on a property the current user owns."""
    principal = require_principal(jwt_service, authorization, auth_token)
    return await start_rental_use_case.execute(
        StartRentalRequest(
            user_id=principal.user_id,
            role=principal.role,
            property_id=request.property_id,
            borrower_id=request.borrower_id,
            start_date=request.start_date,
            next_due_date=request.next_due_date,
            rent_amount=request.rent_amount,
        )
    )


@router.post("/{rental_id}/end", response_model=RentalItem)
async def end_rental(
    rental_id: int,
    end_rental_use_case: FromDishka[EndRentalUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> RentalItem:
    """End a rental. Property owner or admin only."""
    principal = require_principal(jwt_service, authorization, auth_token)
    return await end_rental_use_case.execute(
        EndRentalRequest(
            user_id=principal.user_id, role=principal.role, rental_id=rental_id
        )
    )


@router.get("/mine", response_model=ListRentalsResponse)
async def list_my_rentals(
    list_rentals_use_case: FromDishka[ListRentalsUseCase],
    jwt_service: FromDishka[JWTService],
    role: RentalRole = Query(default=RentalRole.RENTER),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListRentalsResponse:
    """List rentals the current user owns or rents."""
    principal = require_principal(jwt_service, authorization, auth_token)
    return await list_rentals_use_case.execute(
        ListRentalsRequest(user_id=principal.user_id, role=role)
    )


@router.post(
    "/{rental_id}/invites",
    response_model=InviteItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_invite(
    rental_id: int,
    request: CreateInviteAPIRequest,
    background_tasks: BackgroundTasks,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    notification_service: FromDishka[NotificationService],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> InviteItem:
    """Create an invite code for a rental.

    When an invitee email is given, the code is emailed after the response
    is sent. A failed email does not affect the created invite.

    Args:
        rental_id: Rental to invite into
        request: Optional invitee email
        background_tasks: FastAPI background tasks
        create_invite_use_case: Create invite use case from DI
        notification_service: Notification service from DI
        jwt_service: JWT service from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        The created invite
    """
    principal = require_principal(jwt_service, authorization, auth_token)
    invite = await create_invite_use_case.execute(
        CreateInviteRequest(
            user_id=principal.user_id,
            role=principal.role,
            rental_id=rental_id,
            invitee_email=request.invitee_email,
        )
    )

    if invite.invitee_email:
        background_tasks.add_task(
            notification_service.send_invite_email,
            invite.invitee_email,
            invite.code,
            invite.expires_at,
            invite.id,
        )

    return invite


@router.get("/{rental_id}/invites", response_model=ListInvitesResponse)
async def list_invites(
    rental_id: int,
    list_invites_use_case: FromDishka[ListInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListInvitesResponse:
    """List a rental's invites, newest first."""
    principal = require_principal(jwt_service, authorization, auth_token)
    return await list_invites_use_case.execute(
        ListInvitesRequest(
            user_id=principal.user_id, role=principal.role, rental_id=rental_id
        )
    )
