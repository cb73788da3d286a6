from flask import Blueprint, jsonify, request

from swadaya.services.arrears import get_arrears
from swadaya.services.reports import get_installation_report, get_monthly_report
from swadaya.utils.helpers import optional_int

reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.route("/monthly")
def monthly():
    report = get_monthly_report(
        period=request.args.get("period") or request.args.get("month") or None,
        start_date=request.args.get("start_date") or None,
        end_date=request.args.get("end_date") or None,
    )
    return jsonify(report)


@reports_bp.route("/arrears")
def arrears():
    rows = get_arrears(customer_id=optional_int(request.args.get("customer_id"), "customer_id"))
    return jsonify(rows)


@reports_bp.route("/installations")
def installations():
    rows = get_installation_report(
        start_date=request.args.get("start_date") or None,
        end_date=request.args.get("end_date") or None,
    )
    return jsonify(rows)
