from flask import Blueprint, g

from ..services.user_service import UserService
from ..utils.decorators import admin_required, login_required
from .common import json_body, ok

bp = Blueprint("users", __name__, url_prefix="/api/v1/users")


@bp.get("")
@admin_required
def list_users():
    return ok("Users retrieved successfully", [u.to_dict() for u in UserService.list_users()])


@bp.put("/<int:user_id>")
@login_required
def update_user(user_id):
    user = UserService.update_user(user_id, json_body(), g.actor)
    return ok("User updated successfully", user.to_dict())


@bp.delete("/<int:user_id>")
@admin_required
def delete_user(user_id):
    UserService.delete_user(user_id)
    return ok("User deleted successfully")
