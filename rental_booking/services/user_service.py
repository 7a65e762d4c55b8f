from __future__ import annotations

import logging
import re

from werkzeug.security import check_password_hash, generate_password_hash

from ..exceptions import ConflictError, ForbiddenError, UnauthorizedError, UserNotFoundError, ValidationError
from ..models.user import User
from ..utils.constants import MIN_PASSWORD_LENGTH, Role
from . import common, rules

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PROFILE_FIELDS = ("name", "email", "phone", "password", "role")


def _clean_profile(payload: dict, partial: bool) -> dict:
    unknown = set(payload) - set(PROFILE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    data = {}
    for f in ("name", "phone"):
        if f in payload:
            val = payload[f]
            if not isinstance(val, str) or not val.strip():
                raise ValidationError(f"{f} is required")
            data[f] = val.strip()
    if "email" in payload:
        email = (payload["email"] or "").strip().lower() if isinstance(payload["email"], str) else ""
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("A valid email is required")
        data["email"] = email
    if "password" in payload:
        pw = payload["password"]
        if not isinstance(pw, str) or len(pw) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must have at least {MIN_PASSWORD_LENGTH} characters")
        data["password_hash"] = generate_password_hash(pw)
    if "role" in payload:
        role = (payload["role"] or "").lower().strip() if isinstance(payload["role"], str) else ""
        if role not in Role.ALL:
            raise ValidationError("Role must be admin/customer")
        data["role"] = role

    if not partial:
        missing = [f for f in ("name", "email", "phone", "password_hash") if f not in data]
        if missing:
            raise ValidationError("Name, email, phone and password are required.")
    return data


class UserService:
    """Account registration, sign-in, and user administration."""

    @staticmethod
    def _get_store(store=None):
        return store if store is not None else common._store()

    @staticmethod
    def register(payload: dict, store=None) -> User:
        st = UserService._get_store(store)
        data = _clean_profile(payload, partial=False)
        data.setdefault("role", Role.CUSTOMER)
        if st.find_user_by_email(data["email"]):
            raise ConflictError("User with this email already exists")
        row = st.create_user(data)
        logger.info("User %s registered as %s", row["id"], row["role"])
        return User.from_dict(row)

    @staticmethod
    def authenticate(email: str, password: str, store=None) -> User:
        st = UserService._get_store(store)
        row = st.find_user_by_email(email or "")
        if not row or not check_password_hash(row["password_hash"], password or ""):
            raise UnauthorizedError("Invalid credentials")
        return User.from_dict(row)

    @staticmethod
    def get_user(user_id: int, store=None) -> User:
        st = UserService._get_store(store)
        user = User.from_dict(st.get_user(user_id))
        if user is None:
            raise UserNotFoundError()
        return user

    @staticmethod
    def list_users(store=None) -> list[User]:
        st = UserService._get_store(store)
        return sorted((User.from_dict(u) for u in st.users.values()), key=lambda u: u.id)

    @staticmethod
    def update_user(user_id: int, payload: dict, actor: User, store=None) -> User:
        """
        Admins may edit anyone; a customer may edit only their own profile
        and may never give themselves the admin role.
        """
        st = UserService._get_store(store)
        if not rules.is_admin(actor) and actor.id != user_id:
            raise ForbiddenError()
        UserService.get_user(user_id, store=st)

        data = _clean_profile(payload, partial=True)
        if not rules.is_admin(actor) and data.get("role") == Role.ADMIN:
            raise ForbiddenError("Cannot change role to admin")
        if "email" in data:
            other = st.find_user_by_email(data["email"])
            if other and other["id"] != user_id:
                raise ConflictError("User with this email already exists")

        row = st.update_user(user_id, **data)
        logger.info("User %s updated by %s: %s", user_id, actor.id,
                    sorted(k for k in data if k != "password_hash"))
        return User.from_dict(row)

    @staticmethod
    def delete_user(user_id: int, store=None) -> None:
        st = UserService._get_store(store)
        UserService.get_user(user_id, store=st)
        if st.active_bookings(customer_id=user_id):
            raise ConflictError("Cannot delete user with active bookings.")
        st.delete_user(user_id)
        logger.info("User %s deleted", user_id)
