"""User entity (read-only in this service)."""

from datetime import datetime

from pydantic import Field

from homestead.domain.model.common import DomainModel, utcnow
from homestead.domain.value import Role, UserId


class User(DomainModel):
    """Marketplace account. Profile editing lives outside this service."""

    id: UserId
    name: str
    email: str
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=utcnow)
