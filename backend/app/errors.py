"""Domain errors raised by the booking services.

Each error knows its HTTP status and how to render itself; the handlers in
``app.main`` turn them into JSON responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class BookingError(Exception):
    """Base class for all booking-domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message}


class ValidationError(BookingError):
    """One or more request fields are invalid.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` dicts.
    """

    def __init__(self, errors: list[dict[str, str]], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> ValidationError:
        return cls([{"field": field, "message": message}])

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class ConflictError(BookingError):
    """The requested dates overlap an active booking on the same listing."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(
        self,
        requested_check_in: str,
        requested_check_out: str,
        conflicting_booking: dict[str, str],
    ) -> None:
        super().__init__("The selected dates are not available")
        self.requested_check_in = requested_check_in
        self.requested_check_out = requested_check_out
        self.conflicting_booking = conflicting_booking

    def to_dict(self) -> dict[str, Any]:
        return {
            "detail": self.message,
            "requested_check_in": self.requested_check_in,
            "requested_check_out": self.requested_check_out,
            "conflicting_booking": self.conflicting_booking,
        }


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidStateError(BookingError):
    """The requested transition is not legal from the booking's current status."""


class InfrastructureError(BookingError):
    """Persistence or counter failure. The message carries no driver detail."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
