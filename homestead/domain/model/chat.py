"""Chat entity.

A chat is a persisted conversation between exactly two users, optionally
scoped to one property.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from homestead.domain.model.common import DomainModel, utcnow
from homestead.domain.value import ChatId, PropertyId, UserId


class Chat(DomainModel):
    """Chat entity.

    Business rules:
    - Participants are stored ordered, user_a_id < user_b_id, so the same
      pair can never produce two rows in swapped order
    - One chat per pair without a property, plus one per linked property
    - Chats are never deleted
    """

    id: Optional[ChatId] = None  # Assigned by the repository on insert
    user_a_id: UserId
    user_b_id: UserId
    property_id: Optional[PropertyId] = None
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_participant_order(self) -> "Chat":
        """Enforce the canonical participant order."""
        if self.user_a_id >= self.user_b_id:
            raise ValueError("Chat participants must be distinct and ordered")
        return self

    @classmethod
    def between(
        cls, user_id: UserId, other_user_id: UserId, property_id: PropertyId | None
    ) -> "Chat":
        """Build an unsaved chat for two users in canonical order."""
        user_a_id, user_b_id = sorted((user_id, other_user_id))
        return cls(
            user_a_id=UserId(user_a_id),
            user_b_id=UserId(user_b_id),
            property_id=property_id,
        )

    def has_participant(self, user_id: UserId) -> bool:
        """Whether the user is one of the two participants."""
        return user_id in (self.user_a_id, self.user_b_id)
