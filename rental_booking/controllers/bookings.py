from flask import Blueprint, g

from ..exceptions import InvalidDateRangeError, ValidationError
from ..services.booking_service import BookingService
from ..services.common import to_int_safe
from ..utils.constants import BookingStatus
from ..utils.dates import parse_date
from ..utils.decorators import login_required
from .common import json_body, ok

bp = Blueprint("bookings", __name__, url_prefix="/api/v1/bookings")


def _date_field(body: dict, name: str):
    raw = body.get(name)
    if not isinstance(raw, str):
        raise InvalidDateRangeError(f"{name} is required (YYYY-MM-DD)")
    try:
        return parse_date(raw.strip())
    except ValueError:
        raise InvalidDateRangeError(f"Invalid {name} (YYYY-MM-DD)")


@bp.post("")
@login_required
def create_booking():
    """Book a vehicle for the signed-in user. The customer is always the session user."""
    body = json_body()
    vehicle_id = to_int_safe(body.get("vehicleId"))
    if vehicle_id is None:
        raise ValidationError("vehicleId is required")
    start = _date_field(body, "rentStartDate")
    end = _date_field(body, "rentEndDate")
    if end < start:
        raise InvalidDateRangeError("rentEndDate cannot be before rentStartDate")

    booking = BookingService.create(g.actor.id, vehicle_id, start, end)
    return ok("Booking created successfully", booking.to_dict(), 201)


@bp.get("")
@login_required
def list_bookings():
    return ok("Bookings retrieved successfully", BookingService.list_for(g.actor))


@bp.put("/<int:booking_id>")
@login_required
def update_booking(booking_id):
    """Return or cancel a booking."""
    status = json_body().get("status")
    if status not in BookingStatus.ALL:
        raise ValidationError("status must be one of active/cancelled/returned")

    booking = BookingService.transition(booking_id, status, g.actor)
    return ok("Booking updated successfully", booking.to_dict())
