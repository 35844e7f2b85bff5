"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from homestead.domain.model import Chat, Message, Property, Rental, RentalInvite, User
from homestead.domain.value import (
    ChatId,
    InviteCode,
    InviteId,
    InviteStatus,
    MessageContent,
    MessageId,
    PropertyId,
    RentalId,
    Role,
    UserId,
)


def _optional_user_id(value: Any) -> UserId | None:
    return UserId(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        created_at=row["created_at"],
    )


def row_to_property(row: Dict[str, Any]) -> Property:
    """Convert database row to Property domain model."""
    return Property(
        id=PropertyId(row["id"]),
        owner_id=UserId(row["owner_id"]),
        title=row["title"],
        location=row.get("location") or "",
        price=row.get("price") or 0,
        created_at=row["created_at"],
    )


def row_to_chat(row: Dict[str, Any]) -> Chat:
    """Convert database row to Chat domain model.

    Args:
        row: Database row as dict

    Returns:
        Chat domain model
    """
    return Chat(
        id=ChatId(row["id"]),
        user_a_id=UserId(row["user_a_id"]),
        user_b_id=UserId(row["user_b_id"]),
        property_id=PropertyId(row["property_id"])
        if row.get("property_id") is not None
        else None,
        created_at=row["created_at"],
    )


def chat_to_dict(chat: Chat) -> Dict[str, Any]:
    """Convert Chat domain model to an insert dict (ID left to the database)."""
    return chat.model_dump(exclude={"id"})


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model."""
    return Message(
        id=MessageId(row["id"]),
        chat_id=ChatId(row["chat_id"]),
        sender_id=UserId(row["sender_id"]),
        content=MessageContent(row["content"]),
        sent_at=row["sent_at"],
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message domain model to an insert dict."""
    return {
        "chat_id": message.chat_id,
        "sender_id": message.sender_id,
        "content": message.content.root,
        "sent_at": message.sent_at,
    }


def row_to_rental(row: Dict[str, Any]) -> Rental:
    """Convert database row to Rental domain model."""
    return Rental(
        id=RentalId(row["id"]),
        property_id=PropertyId(row["property_id"]),
        borrower_id=_optional_user_id(row.get("borrower_id")),
        start_date=row["start_date"],
        next_due_date=row["next_due_date"],
        rent_amount=row["rent_amount"],
        is_active=row["is_active"],
    )


def rental_to_dict(rental: Rental) -> Dict[str, Any]:
    """Convert Rental domain model to an insert dict."""
    return rental.model_dump(exclude={"id"})


def row_to_invite(row: Dict[str, Any]) -> RentalInvite:
    """Convert database row to RentalInvite domain model.

    Args:
        row: Database row as dict

    Returns:
        RentalInvite domain model
    """
    return RentalInvite(
        id=InviteId(row["id"]),
        rental_id=RentalId(row["rental_id"]),
        code=InviteCode(row["code"]),
        inviter_id=UserId(row["inviter_id"]),
        invitee_email=row.get("invitee_email"),
        status=InviteStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        accepted_by=_optional_user_id(row.get("accepted_by")),
        accepted_at=row.get("accepted_at"),
    )


def invite_to_dict(invite: RentalInvite) -> Dict[str, Any]:
    """Convert RentalInvite domain model to an insert dict.

    Args:
        invite: RentalInvite domain model

    Returns:
        Dict suitable for database insertion
    """
    data = invite.model_dump(exclude={"id"})
    data["status"] = invite.status.value
    return data
