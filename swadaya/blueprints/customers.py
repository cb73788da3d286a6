from flask import Blueprint, jsonify, request

from swadaya.services import customers as customer_service
from swadaya.utils.helpers import json_body

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.route("", methods=["GET"])
def list_customers():
    status = request.args.get("status") or None
    customers = customer_service.get_customers(status=status)
    return jsonify([c.to_dict() for c in customers])


@customers_bp.route("", methods=["POST"])
def create():
    data = json_body()
    customer = customer_service.create_customer(
        name=data.get("name"),
        address=data.get("address"),
        phone=data.get("phone"),
        subscription_start_date=data.get("subscription_start_date"),
        status=data.get("status", "active"),
    )
    return jsonify(customer.to_dict()), 201


@customers_bp.route("/<int:customer_id>", methods=["GET"])
def detail(customer_id):
    return jsonify(customer_service.get_customer(customer_id).to_dict())


@customers_bp.route("/<int:customer_id>", methods=["PATCH"])
def edit(customer_id):
    data = json_body()
    fields = {k: data[k] for k in ("name", "address", "phone", "status") if k in data}
    customer = customer_service.update_customer(customer_id, **fields)
    return jsonify(customer.to_dict())
