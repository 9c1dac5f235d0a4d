"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Every exception raised by the domain and service layers derives from
DomainError, which the HTTP layer renders as {"error": message} using the
status code declared on the class.
"""


class DomainError(ValueError):
    """Base class for business errors surfaced to API callers."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """
    Exception raised when an identifier does not resolve to a stored row.
    """

    status_code = 404

    @classmethod
    def for_entity(cls, entity: str, entity_id: str) -> "NotFoundError":
        return cls(f"{entity} with id {entity_id} not found")


class InvalidTransitionError(DomainError):
    """
    Exception raised when a delivery status change violates the lifecycle
    PICKED_UP -> DELIVERED -> SETTLED.
    """

    status_code = 400


class BadRequestError(DomainError):
    """Exception raised when required request fields are missing or malformed."""

    status_code = 400
