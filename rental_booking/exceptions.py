"""
Custom exception classes for the vehicle rental booking service.

Every failure the booking rules or services can produce is a subclass of
BookingError. Each carries a machine-readable ``kind`` and the HTTP status the
API layer answers with, so controllers can let them propagate and a single
error handler renders them.
"""


class BookingError(Exception):
    """Base class for request-scoped failures."""

    kind = "error"
    status_code = 400
    default_message = "Error: request failed"

    def __init__(self, message: str = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message, "error": self.kind}


class ValidationError(BookingError):
    """Raised when a request payload fails validation."""

    kind = "validation_error"
    default_message = "Invalid input"


class InvalidDateRangeError(ValidationError):
    """Raised when start date is after end date or an invalid date is provided."""

    default_message = "Error: invalid date range"


class UnauthorizedError(BookingError):
    """Raised when no authenticated actor is present or credentials are wrong."""

    kind = "unauthorized"
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(BookingError):
    """Raised when the actor lacks the rights for the requested action."""

    kind = "forbidden"
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(BookingError):
    kind = "not_found"
    status_code = 404
    default_message = "Error: not found"


class VehicleNotFoundError(NotFoundError):
    """Raised when a vehicle ID cannot be found in the system."""

    default_message = "Vehicle not found"


class BookingNotFoundError(NotFoundError):
    """Raised when a booking record cannot be found in the system."""

    default_message = "Booking not found"


class UserNotFoundError(NotFoundError):
    """Raised when a user ID cannot be found in the system."""

    default_message = "User not found"


class VehicleUnavailableError(BookingError):
    """Raised when a booking is requested for a vehicle that is not available."""

    kind = "vehicle_unavailable"
    default_message = "Vehicle not available"


class CancellationWindowClosedError(BookingError):
    """Raised when a customer tries to cancel on or after the rent start date."""

    kind = "cancellation_window_closed"
    default_message = "Booking can only be cancelled before the rent start date."


class InvalidTransitionError(BookingError):
    """Raised when a booking status change is not allowed from its current state."""

    kind = "invalid_transition"
    status_code = 409
    default_message = "Only active bookings can change status"


class ConflictError(BookingError):
    """Raised on uniqueness violations and guarded deletes."""

    kind = "conflict"
    status_code = 409
    default_message = "Conflict"
