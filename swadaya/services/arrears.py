"""
Arrears Aggregator.

One row per customer that has at least one unpaid bill. ``periods_overdue``
is the calendar-month distance from the oldest unpaid period to the current
month, never negative.
"""
from datetime import date

from swadaya.extensions import db
from swadaya.models.bill import MonthlyBill
from swadaya.models.customer import Customer
from swadaya.utils.helpers import ZERO, current_period, money, month_index


def periods_overdue(oldest_period: str, today: date = None) -> int:
    return max(0, month_index(current_period(today)) - month_index(oldest_period))


def get_arrears(customer_id: int = None, today: date = None) -> list:
    """
    Outstanding totals per customer, largest debt first.

    With ``customer_id`` the result holds at most that customer's row.
    """
    query = (
        db.session.query(Customer.id, Customer.name, MonthlyBill.bill_month, MonthlyBill.amount)
        .join(MonthlyBill, MonthlyBill.customer_id == Customer.id)
        .filter(MonthlyBill.status == "unpaid")
    )
    if customer_id is not None:
        query = query.filter(Customer.id == customer_id)

    rows: dict = {}
    for cid, name, bill_month, amount in query.order_by(Customer.id, MonthlyBill.bill_month):
        row = rows.setdefault(cid, {
            "customer_id": cid,
            "customer_name": name,
            "total_outstanding": ZERO,
            "oldest_unpaid_period": bill_month,
            "unpaid_bills": 0,
        })
        row["total_outstanding"] += money(amount)
        row["unpaid_bills"] += 1
        if bill_month < row["oldest_unpaid_period"]:
            row["oldest_unpaid_period"] = bill_month

    result = []
    for row in rows.values():
        row["total_outstanding"] = money(row["total_outstanding"])
        row["periods_overdue"] = periods_overdue(row["oldest_unpaid_period"], today)
        result.append(row)
    result.sort(key=lambda r: (-r["total_outstanding"], r["customer_id"]))
    return result
