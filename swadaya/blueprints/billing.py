from flask import Blueprint, jsonify, request

from swadaya.services.billing import generate_monthly_bills, get_monthly_bills
from swadaya.services.payments import get_payments, record_payment
from swadaya.utils.helpers import current_period, json_body, optional_int

billing_bp = Blueprint("billing", __name__, url_prefix="/api")


# ── Bills ─────────────────────────────────────────────────────────────────────

@billing_bp.route("/bills/generate", methods=["POST"])
def generate_bills():
    data = json_body()
    period = data.get("period") or data.get("month") or current_period()
    bills = generate_monthly_bills(period, amount=data.get("amount"))
    return jsonify(period=period, created=len(bills), bills=[b.to_dict() for b in bills]), 201


@billing_bp.route("/bills", methods=["GET"])
def list_bills():
    bills = get_monthly_bills(
        customer_id=optional_int(request.args.get("customer_id"), "customer_id"),
        period=request.args.get("period") or None,
    )
    return jsonify([b.to_dict() for b in bills])


# ── Payments ──────────────────────────────────────────────────────────────────

@billing_bp.route("/payments", methods=["POST"])
def create_payment():
    data = json_body()
    payment = record_payment(
        customer_id=optional_int(data.get("customer_id"), "customer_id"),
        bill_id=optional_int(data.get("bill_id"), "bill_id"),
        amount=data.get("amount"),
        payment_date=data.get("payment_date"),
        notes=data.get("notes"),
    )
    return jsonify(payment.to_dict()), 201


@billing_bp.route("/payments", methods=["GET"])
def list_payments():
    payments = get_payments(
        customer_id=optional_int(request.args.get("customer_id"), "customer_id"),
    )
    return jsonify([p.to_dict() for p in payments])
