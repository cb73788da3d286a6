"""
Payment Processor.

Settlement is binary: a bill flips to ``paid`` when a single payment covers
its face amount. Payments are never summed per bill, so two partial
installments leave the bill unpaid.
"""
import logging

from swadaya.errors import NotFoundError, ValidationError
from swadaya.models.bill import MonthlyBill
from swadaya.models.payment import Payment
from swadaya.services.customers import get_customer
from swadaya.utils.helpers import atomic, money, to_date, to_decimal

logger = logging.getLogger(__name__)


def settles(payment_amount, bill: MonthlyBill) -> bool:
    return money(payment_amount) >= money(bill.amount)


def record_payment(customer_id: int, amount, payment_date, bill_id: int = None, notes: str = None) -> Payment:
    """
    Persist a payment and, when it references a bill, settle that bill.

    ``bill_id=None`` records an arrears payment with no bill side effect.
    The payment row and the bill status change commit together.
    """
    amount = money(to_decimal(amount, "amount"))
    if amount <= 0:
        raise ValidationError("amount must be at least 0.01.", field="amount")
    payment_date = to_date(payment_date, "payment_date")

    with atomic() as session:
        get_customer(customer_id)
        bill = None
        if bill_id is not None:
            bill = session.get(MonthlyBill, bill_id, with_for_update=True)
            if bill is None:
                raise NotFoundError(f"Bill {bill_id} not found.", bill_id=bill_id)
            if bill.customer_id != customer_id:
                raise ValidationError(
                    f"Bill {bill_id} does not belong to customer {customer_id}.",
                    bill_id=bill_id,
                    customer_id=customer_id,
                )

        payment = Payment(
            customer_id=customer_id,
            bill_id=bill_id,
            amount=amount,
            payment_date=payment_date,
            notes=(notes or "").strip() or None,
        )
        session.add(payment)

        if bill is not None and not bill.is_paid and settles(amount, bill):
            bill.status = "paid"
            logger.info("Bill %s (%s) settled", bill.id, bill.bill_month)

    logger.info(
        "Recorded payment %s of %s for customer %s (bill=%s)",
        payment.id, amount, customer_id, bill_id,
    )
    return payment


def get_payments(customer_id: int = None) -> list:
    query = Payment.query
    if customer_id is not None:
        query = query.filter(Payment.customer_id == customer_id)
    return query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()

