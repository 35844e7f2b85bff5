"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Carries the offending field so the interface layer can report it.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when an authenticated user is not entitled to a resource."""

    def __init__(self, resource: str, resource_id: object, user_id: object):
        self.resource = resource
        super().__init__(
            f"User {user_id} is not allowed to access {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: object):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when an operation conflicts with the current state."""

    pass


class GoneError(DomainError):
    """Raised when a resource existed but is no longer usable."""

    pass


class UnexpectedError(DomainError):
    """Infrastructure failure that the caller cannot act on."""

    pass
