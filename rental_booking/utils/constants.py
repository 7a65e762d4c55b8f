# rental_booking/utils/constants.py

"""
Global constants for roles, statuses, and allowed types.
These literal sets are the persisted contract of the store rows.
"""

# Date format (used for rent start/end)
DATE_FMT = "%Y-%m-%d"


class Role:
    ADMIN = "admin"
    CUSTOMER = "customer"

    ALL = frozenset({ADMIN, CUSTOMER})


class BookingStatus:
    ACTIVE = "active"
    CANCELLED = "cancelled"
    RETURNED = "returned"

    ALL = frozenset({ACTIVE, CANCELLED, RETURNED})
    TERMINAL = frozenset({CANCELLED, RETURNED})


class VehicleStatus:
    AVAILABLE = "available"
    BOOKED = "booked"

    ALL = frozenset({AVAILABLE, BOOKED})


# --- Misc ---
ALLOWED_TYPES = {"car", "bike", "van", "SUV"}
MIN_PASSWORD_LENGTH = 6
