from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from ..utils.constants import BookingStatus
from ..utils.dates import as_date


@dataclass(frozen=True)
class Booking:
    """
    A time-bounded rental of one vehicle by one customer.
    Created 'active'; 'cancelled' and 'returned' are terminal.
    """
    id: Optional[int]
    customer_id: int
    vehicle_id: int
    rent_start_date: date
    rent_end_date: date
    total_price: int
    status: str = BookingStatus.ACTIVE
    created_at: Optional[str] = field(default=None, compare=False)

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    def with_status(self, status: str) -> "Booking":
        return replace(self, status=status)

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Optional["Booking"]:
        if not d:
            return None
        return cls(
            id=d.get("id"),
            customer_id=d["customer_id"],
            vehicle_id=d["vehicle_id"],
            rent_start_date=as_date(d["rent_start_date"]),
            rent_end_date=as_date(d["rent_end_date"]),
            total_price=int(d.get("total_price") or 0),
            status=d.get("status", BookingStatus.ACTIVE),
            created_at=d.get("created_at"),
        )

    def to_row(self) -> dict:
        """Storage row (snake_case, dates as ISO strings)."""
        return {
            "customer_id": self.customer_id,
            "vehicle_id": self.vehicle_id,
            "rent_start_date": self.rent_start_date.isoformat(),
            "rent_end_date": self.rent_end_date.isoformat(),
            "total_price": self.total_price,
            "status": self.status,
        }

    def to_dict(self) -> dict:
        """Wire representation used by the JSON API."""
        return {
            "id": self.id,
            "customerId": self.customer_id,
            "vehicleId": self.vehicle_id,
            "rentStartDate": self.rent_start_date.isoformat(),
            "rentEndDate": self.rent_end_date.isoformat(),
            "totalPrice": self.total_price,
            "status": self.status,
            "createdAt": self.created_at,
        }
