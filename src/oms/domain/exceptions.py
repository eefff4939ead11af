"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each error kind carries the status class it maps to at the service boundary.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 500


class ValidationError(DomainException):
    """A business rule or invariant was violated, or the request was bad."""

    status_code = 400


class NotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404


class ProductServiceError(DomainException):
    """The product service failed or rejected the requested product ids."""

    status_code = 502
