"""Booking status transitions.

::

    pending   -> confirmed | cancelled
    confirmed -> completed | cancelled
    cancelled, completed: terminal
"""

from app.errors import InvalidStateError
from app.models.booking import BookingStatus

_ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in _ALLOWED_TRANSITIONS[current]


def ensure_transition(current: BookingStatus, target: BookingStatus) -> None:
    """Raise :class:`InvalidStateError` unless ``current -> target`` is allowed.

    Each rejected transition carries its own user-facing message.
    """
    if can_transition(current, target):
        return

    if current is BookingStatus.CANCELLED:
        raise InvalidStateError("This booking is already cancelled")

    if target is BookingStatus.CANCELLED:
        # Only completed remains here.
        raise InvalidStateError("Cannot cancel a completed booking")

    if target is BookingStatus.CONFIRMED:
        if current is BookingStatus.CONFIRMED:
            raise InvalidStateError("This booking is already confirmed")
        raise InvalidStateError("Only pending bookings can be confirmed")

    if target is BookingStatus.COMPLETED:
        if current is BookingStatus.COMPLETED:
            raise InvalidStateError("This booking is already completed")
        raise InvalidStateError("Only confirmed bookings can be completed")

    raise InvalidStateError(f"Cannot move a {current.value} booking to {target.value}")
