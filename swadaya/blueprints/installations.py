from flask import Blueprint, jsonify, request

from swadaya.errors import ValidationError
from swadaya.services import installations as installation_service
from swadaya.services.materials import create_material_preset, get_material_presets
from swadaya.utils.helpers import json_body, optional_int

installations_bp = Blueprint("installations", __name__, url_prefix="/api")


# ── Installations ─────────────────────────────────────────────────────────────

@installations_bp.route("/installations", methods=["GET"])
def list_installations():
    installations = installation_service.get_installations(
        customer_id=optional_int(request.args.get("customer_id"), "customer_id"),
    )
    return jsonify([i.to_dict() for i in installations])


@installations_bp.route("/installations", methods=["POST"])
def create():
    data = json_body()
    installation = installation_service.create_installation(
        customer_id=optional_int(data.get("customer_id"), "customer_id"),
        installation_fee=data.get("installation_fee"),
        scheduled_date=data.get("scheduled_date"),
    )
    return jsonify(installation.to_dict()), 201


@installations_bp.route("/installations/<int:installation_id>", methods=["GET"])
def detail(installation_id):
    installation = installation_service.get_installation(installation_id)
    payload = installation.to_dict()
    payload["materials"] = [m.to_dict() for m in installation.materials]
    return jsonify(payload)


@installations_bp.route("/installations/<int:installation_id>", methods=["PATCH"])
def edit(installation_id):
    data = json_body()
    fields = {}
    if "status" in data:
        fields["status"] = data["status"]
    if "fee_paid" in data:
        if not isinstance(data["fee_paid"], bool):
            raise ValidationError("fee_paid must be true or false.", field="fee_paid")
        fields["fee_paid"] = data["fee_paid"]
    if "completed_date" in data:
        fields["completed_date"] = data["completed_date"]
    installation = installation_service.update_installation(installation_id, **fields)
    return jsonify(installation.to_dict())


# ── Materials ─────────────────────────────────────────────────────────────────

@installations_bp.route("/installations/<int:installation_id>/materials", methods=["GET"])
def list_materials(installation_id):
    materials = installation_service.get_installation_materials(installation_id)
    return jsonify([m.to_dict() for m in materials])


@installations_bp.route("/installations/<int:installation_id>/materials", methods=["POST"])
def add_material(installation_id):
    data = json_body()
    material = installation_service.add_installation_material(
        installation_id,
        material_name=data.get("material_name") or data.get("name"),
        quantity=data.get("quantity"),
        unit_price=data.get("unit_price"),
    )
    return jsonify(material.to_dict()), 201


# ── Material presets ──────────────────────────────────────────────────────────

@installations_bp.route("/material-presets", methods=["GET"])
def list_presets():
    return jsonify([p.to_dict() for p in get_material_presets()])


@installations_bp.route("/material-presets", methods=["POST"])
def create_preset():
    data = json_body()
    preset = create_material_preset(
        name=data.get("name"),
        default_unit_price=data.get("default_unit_price"),
        unit=data.get("unit"),
    )
    return jsonify(preset.to_dict()), 201
