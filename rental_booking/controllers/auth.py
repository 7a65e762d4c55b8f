from flask import Blueprint, session

from ..exceptions import ValidationError
from ..services.user_service import UserService
from .common import json_body, ok

bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


@bp.post("/signup")
def signup():
    payload = json_body()
    # Self-registration always creates a customer; admins are promoted by an admin.
    payload.pop("role", None)
    user = UserService.register(payload)
    return ok("User registered successfully", user.to_dict(), 201)


@bp.post("/signin")
def signin():
    body = json_body()
    email = body.get("email")
    password = body.get("password")
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("Email and password are required.")

    user = UserService.authenticate(email, password)
    session.clear()
    session["uid"] = user.id
    return ok("Login successful", {"user": user.to_dict()})


@bp.post("/signout")
def signout():
    session.clear()
    return ok("Logged out")
