"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span entities, such as who may
    join a chat or how an invite attaches a borrower to a rental.
    """

    pass
