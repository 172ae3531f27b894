"""Domain errors raised by the scheduling services.

Each error carries a human-readable message that is returned verbatim in
the HTTP error body, and the status code the API layer maps it to.
"""


class VetClinicError(Exception):
    """Base class for all errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(VetClinicError):
    """Raised when a lookup by id returns no result."""

    status_code = 404


class InvalidPinError(VetClinicError):
    """Raised when the request PIN does not match the customer's PIN."""

    status_code = 400


class UnavailableDateError(VetClinicError):
    """Raised when a requested slot is in the past, outside opening hours or taken."""

    status_code = 409


class RemovalFailureError(VetClinicError):
    """Raised when an appointment still exists after being deleted."""

    status_code = 500


class InvalidArgumentError(VetClinicError):
    """Raised when request data fails validation."""

    status_code = 400


__all__ = [
    "VetClinicError",
    "NotFoundError",
    "InvalidPinError",
    "UnavailableDateError",
    "RemovalFailureError",
    "InvalidArgumentError",
]
