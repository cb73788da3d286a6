"""
Monthly Financial Reporter and the per-installation profit report.

All sums are taken over Decimal values in Python so that aggregation never
goes through binary floating point.
"""
import logging
from datetime import date

from swadaya.errors import ValidationError
from swadaya.extensions import db
from swadaya.models.bill import MonthlyBill
from swadaya.models.customer import Customer
from swadaya.models.installation import Installation, InstallationMaterial
from swadaya.models.payment import Payment
from swadaya.utils.helpers import ZERO, current_period, money, month_bounds, to_date

logger = logging.getLogger(__name__)


def _total(values):
    return money(sum((money(v) for v in values), ZERO))


def subscription_income(period: str, start: date, end: date):
    """Payments for ``period`` bills that were also received inside the window."""
    amounts = (
        db.session.query(Payment.amount)
        .join(MonthlyBill, Payment.bill_id == MonthlyBill.id)
        .filter(
            MonthlyBill.bill_month == period,
            Payment.payment_date >= start,
            Payment.payment_date <= end,
        )
    )
    return _total(a for (a,) in amounts)


def installation_income(start: date, end: date):
    fees = (
        db.session.query(Installation.installation_fee)
        .filter(
            Installation.fee_paid.is_(True),
            Installation.completed_date >= start,
            Installation.completed_date <= end,
        )
    )
    return _total(f for (f,) in fees)


def material_expenses(start: date, end: date):
    costs = (
        db.session.query(InstallationMaterial.total_cost)
        .join(Installation, InstallationMaterial.installation_id == Installation.id)
        .filter(
            Installation.completed_date.isnot(None),
            Installation.completed_date >= start,
            Installation.completed_date <= end,
        )
    )
    return _total(c for (c,) in costs)


def get_monthly_report(period: str = None, start_date=None, end_date=None, today: date = None) -> dict:
    """
    Balance sheet for one calendar month.

    ``start_date``/``end_date`` replace the month's first/last day in the
    date conditions; the bill-month condition always uses ``period``.
    """
    period = period or current_period(today)
    first_day, last_day = month_bounds(period)
    start = to_date(start_date, "start_date", required=False) or first_day
    end = to_date(end_date, "end_date", required=False) or last_day
    if start > end:
        raise ValidationError("start_date must not be after end_date.", field="start_date")

    subs = subscription_income(period, start, end)
    install = installation_income(start, end)
    expenses = material_expenses(start, end)
    total_income = subs + install

    report = {
        "period": period,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "subscription_income": subs,
        "installation_income": install,
        "total_income": total_income,
        "material_expenses": expenses,
        "net_balance": total_income - expenses,
        "total_customers": Customer.query.filter_by(status="active").count(),
        "new_installations": (
            Installation.query
            .filter(
                Installation.status == "completed",
                Installation.completed_date >= start,
                Installation.completed_date <= end,
            )
            .count()
        ),
    }
    logger.debug("Monthly report %s: net %s", period, report["net_balance"])
    return report


def get_installation_report(start_date=None, end_date=None) -> list:
    """Fee, cost and profit per installation, filtered by completed date."""
    start = to_date(start_date, "start_date", required=False)
    end = to_date(end_date, "end_date", required=False)

    query = (
        db.session.query(Installation, Customer.name)
        .join(Customer, Installation.customer_id == Customer.id)
    )
    if start is not None:
        query = query.filter(Installation.completed_date >= start)
    if end is not None:
        query = query.filter(Installation.completed_date <= end)

    return [
        {
            "installation_id": inst.id,
            "customer_name": customer_name,
            "installation_fee": money(inst.installation_fee),
            "material_cost": money(inst.total_material_cost),
            "profit_loss": money(inst.profit_loss),
            "status": inst.status,
            "fee_paid": inst.fee_paid,
            "completed_date": inst.completed_date.isoformat() if inst.completed_date else None,
        }
        for inst, customer_name in query.order_by(Installation.id)
    ]
