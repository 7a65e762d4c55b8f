from flask import Blueprint, request

from ..services.vehicle_service import VehicleService
from ..utils.decorators import admin_required
from .common import json_body, ok

bp = Blueprint("vehicles", __name__, url_prefix="/api/v1/vehicles")


@bp.get("")
def list_vehicles():
    """Catalog with optional filters: type, search, status, min, max."""
    q = {k: (v or "").strip() for k, v in request.args.items()}
    vehicles = VehicleService.list_vehicles(
        vtype=q.get("type") or None,
        search=q.get("search") or None,
        status=q.get("status") or None,
        min_price=q.get("min") or None,
        max_price=q.get("max") or None,
    )
    return ok("Vehicles retrieved successfully", [v.to_dict() for v in vehicles])


@bp.get("/<int:vehicle_id>")
def get_vehicle(vehicle_id):
    v = VehicleService.get_vehicle(vehicle_id)
    return ok("Vehicle retrieved successfully", v.to_dict())


@bp.post("")
@admin_required
def create_vehicle():
    v = VehicleService.admin_create_vehicle(json_body())
    return ok("Vehicle created successfully", v.to_dict(), 201)


@bp.put("/<int:vehicle_id>")
@admin_required
def update_vehicle(vehicle_id):
    v = VehicleService.admin_update_vehicle(vehicle_id, json_body())
    return ok("Vehicle updated successfully", v.to_dict())


@bp.delete("/<int:vehicle_id>")
@admin_required
def delete_vehicle(vehicle_id):
    VehicleService.delete_vehicle(vehicle_id)
    return ok("Vehicle deleted successfully")
