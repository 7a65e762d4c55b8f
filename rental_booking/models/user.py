from dataclasses import dataclass
from typing import Optional

from ..utils.constants import Role


@dataclass(frozen=True)
class User:
    """
    Account model. Only the role and id matter to the booking rules;
    the remaining fields are profile data for the API.
    """
    id: int
    role: str  # "admin" | "customer"
    name: str = ""
    email: str = ""
    phone: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Optional["User"]:
        if not d:
            return None
        return cls(
            id=d["id"],
            role=(d.get("role") or Role.CUSTOMER).lower(),
            name=d.get("name", ""),
            email=d.get("email", ""),
            phone=d.get("phone", ""),
            created_at=d.get("created_at"),
        )

    def to_dict(self) -> dict:
        """Public representation; the password hash is never exposed."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "createdAt": self.created_at,
        }
