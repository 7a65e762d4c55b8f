from dataclasses import dataclass, field
from typing import Optional

from ..utils.constants import VehicleStatus


@dataclass(frozen=True)
class Vehicle:
    """
    Fleet vehicle. The Store keeps raw dicts; we wrap them into value objects
    so the booking rules never touch storage rows directly.
    """
    id: int
    vehicle_name: str
    type: str  # "car" | "bike" | "van" | "SUV"
    registration_number: str
    daily_rent_price: int  # smallest currency unit per day
    availability_status: str = VehicleStatus.AVAILABLE
    image_url: Optional[str] = None
    created_at: Optional[str] = field(default=None, compare=False)

    @property
    def is_available(self) -> bool:
        return self.availability_status == VehicleStatus.AVAILABLE

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Optional["Vehicle"]:
        if not d:
            return None
        return cls(
            id=d["id"],
            vehicle_name=d.get("vehicle_name", ""),
            type=d.get("type", "car"),
            registration_number=d.get("registration_number", ""),
            daily_rent_price=int(d.get("daily_rent_price") or 0),
            availability_status=d.get("availability_status", VehicleStatus.AVAILABLE),
            image_url=d.get("image_url"),
            created_at=d.get("created_at"),
        )

    def to_dict(self) -> dict:
        """Wire representation used by the JSON API."""
        return {
            "id": self.id,
            "vehicleName": self.vehicle_name,
            "type": self.type,
            "registrationNumber": self.registration_number,
            "imageUrl": self.image_url,
            "dailyRentPrice": self.daily_rent_price,
            "availabilityStatus": self.availability_status,
            "createdAt": self.created_at,
        }
