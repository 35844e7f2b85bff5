"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import logfire

from homestead.domain.model import Property, Rental, User
from homestead.domain.value import PropertyId, Role, UserId

# Keep spans and logs local during tests
logfire.configure(send_to_logfire=False, console=False)


def make_user(user_id: int, name: str | None = None, role: Role = Role.USER) -> User:
    """Helper to build a user for seeding in-memory repositories."""
    name = name or f"user{user_id}"
    return User(
        id=UserId(user_id),
        name=name,
        email=f"{name}@example.com",
        role=role,
    )


def make_property(property_id: int, owner_id: int, title: str | None = None) -> Property:
    """Helper to build a property for seeding in-memory repositories."""
    return Property(
        id=PropertyId(property_id),
        owner_id=UserId(owner_id),
        title=title or f"Property {property_id}",
        location="Lisbon",
        price=950,
    )


def make_rental(
    property_id: int,
    borrower_id: int | None = None,
    rent_amount: float = 1200.0,
) -> Rental:
    """Helper to build an unsaved, active rental starting today."""
    start = datetime.now(timezone.utc).replace(microsecond=0)
    return Rental(
        property_id=PropertyId(property_id),
        borrower_id=UserId(borrower_id) if borrower_id is not None else None,
        start_date=start,
        next_due_date=start + timedelta(days=30),
        rent_amount=rent_amount,
    )
