"""
Booking rule engine.

Pure functions deciding prices, whether a booking may be created, and which
status changes an actor may make. Nothing here touches the store: callers
fetch the records, apply the returned values, and persist them.

Availability is a single flag per vehicle. A vehicle that is 'booked' cannot
take another booking even for a disjoint date range, and no overlap check is
made against other bookings of the same vehicle.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..exceptions import (
    CancellationWindowClosedError,
    ForbiddenError,
    InvalidTransitionError,
    VehicleUnavailableError,
)
from ..models.booking import Booking
from ..models.user import User
from ..models.vehicle import Vehicle
from ..utils.constants import BookingStatus, Role, VehicleStatus
from ..utils.dates import as_date


@dataclass(frozen=True)
class VehicleChange:
    """A pending write of a vehicle's availability flag."""
    vehicle_id: int
    availability_status: str


# -------- authorization guards --------
def is_admin(actor: Optional[User]) -> bool:
    return actor is not None and actor.role == Role.ADMIN


def is_owner(actor: Optional[User], booking: Booking) -> bool:
    return actor is not None and actor.id == booking.customer_id


# -------- pricing --------
def rental_days(start, end) -> int:
    """
    Billable days for a rental, counting both the start and the end day.
    Inputs are floored to calendar dates first, so 2024-01-01 -> 2024-01-03 is 3 days
    and a same-day rental is 1 day. ``start <= end`` is not checked here.
    """
    return (as_date(end) - as_date(start)).days + 1


def price_booking(vehicle: Vehicle, start, end) -> int:
    """Total price in the smallest currency unit."""
    return rental_days(start, end) * vehicle.daily_rent_price


# -------- creation --------
def create_booking(vehicle: Optional[Vehicle], start, end, customer_id: int):
    """
    Build a new active booking for ``customer_id`` and the availability change it implies.

    Returns:
        (booking: Booking, change: VehicleChange); the booking has no id yet.
    """
    if vehicle is None or not vehicle.is_available:
        raise VehicleUnavailableError()

    start_d = as_date(start)
    end_d = as_date(end)
    booking = Booking(
        id=None,
        customer_id=customer_id,
        vehicle_id=vehicle.id,
        rent_start_date=start_d,
        rent_end_date=end_d,
        total_price=price_booking(vehicle, start_d, end_d),
        status=BookingStatus.ACTIVE,
    )
    return booking, VehicleChange(vehicle.id, VehicleStatus.BOOKED)


# -------- status transitions --------
def transition_booking(booking: Booking, vehicle: Optional[Vehicle], target_status: str,
                       actor: Optional[User], today: date):
    """
    Apply the status policy for ``actor`` moving ``booking`` to ``target_status``.

    Rules:
    - Only an admin or the booking's customer may act; anyone else is forbidden
      before status rules are looked at.
    - Only 'active' bookings move, and only to 'returned' or 'cancelled'.
    - 'returned' is admin only.
    - 'cancelled' is always allowed for an admin; the customer may cancel only
      while ``today`` is strictly before the rent start date.
    - Both outcomes free the vehicle.

    Returns:
        (updated booking, VehicleChange or None when the vehicle row is gone)
    """
    admin = is_admin(actor)
    if not admin and not is_owner(actor, booking):
        raise ForbiddenError()

    if target_status not in BookingStatus.TERMINAL:
        raise InvalidTransitionError(f"Cannot change booking status to '{target_status}'")
    if not booking.is_active:
        raise InvalidTransitionError(f"Booking is already {booking.status}")

    if target_status == BookingStatus.RETURNED and not admin:
        raise ForbiddenError("Only an admin can mark a booking as returned")

    if target_status == BookingStatus.CANCELLED and not admin:
        if not as_date(today) < booking.rent_start_date:
            raise CancellationWindowClosedError()

    change = None
    if vehicle is not None:
        change = VehicleChange(vehicle.id, VehicleStatus.AVAILABLE)
    return booking.with_status(target_status), change
