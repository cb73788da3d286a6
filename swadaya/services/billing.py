"""
Bill Generator.

Creates one unpaid bill per eligible customer for a period. Running it again
for the same period only bills customers that were missed before.
"""
import calendar
import logging
from datetime import date

from swadaya.errors import ValidationError
from swadaya.models.bill import MonthlyBill
from swadaya.models.customer import Customer
from swadaya.utils.helpers import atomic, money, month_bounds, parse_period, to_decimal
from swadaya.utils.settings import BillingSettings

logger = logging.getLogger(__name__)


def due_date_for(period: str, due_day: int) -> date:
    """The single due date shared by every bill of a period."""
    year, month = parse_period(period)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(max(due_day, 1), last_day))


def eligible_customers(period: str) -> list:
    """Active customers whose subscription started before the period's first day."""
    period_start, _ = month_bounds(period)
    return (
        Customer.query
        .filter(
            Customer.status == "active",
            Customer.subscription_start_date < period_start,
        )
        .order_by(Customer.id)
        .all()
    )


def billed_customer_ids(period: str) -> set:
    rows = MonthlyBill.query.with_entities(MonthlyBill.customer_id).filter(
        MonthlyBill.bill_month == period
    )
    return {row.customer_id for row in rows}


def generate_monthly_bills(period: str, amount=None, settings: BillingSettings = None) -> list:
    """
    Bill every eligible customer not yet billed for ``period``.

    Returns only the bills created by this call. The batch is inserted in a
    single transaction.
    """
    settings = settings or BillingSettings()
    parse_period(period)
    if amount is None:
        amount = settings.monthly_fee
    amount = money(to_decimal(amount, "amount"))
    if amount <= 0:
        raise ValidationError("amount must be at least 0.01.", field="amount")

    customers = eligible_customers(period)
    already_billed = billed_customer_ids(period)
    pending = [c for c in customers if c.id not in already_billed]
    if not pending:
        logger.debug("No unbilled customers for %s", period)
        return []

    due_date = due_date_for(period, settings.due_day)
    bills = [
        MonthlyBill(
            customer_id=customer.id,
            bill_month=period,
            amount=amount,
            status="unpaid",
            due_date=due_date,
        )
        for customer in pending
    ]
    with atomic() as session:
        session.add_all(bills)

    logger.info(
        "Generated %d bill(s) for %s at %s (skipped %d already billed)",
        len(bills), period, amount, len(customers) - len(bills),
    )
    return bills


def get_monthly_bills(customer_id: int = None, period: str = None) -> list:
    query = MonthlyBill.query
    if customer_id is not None:
        query = query.filter(MonthlyBill.customer_id == customer_id)
    if period is not None:
        parse_period(period)
        query = query.filter(MonthlyBill.bill_month == period)
    return query.order_by(MonthlyBill.bill_month.desc(), MonthlyBill.customer_id).all()
