"""Customer records and the activation hook fired by installation completion."""
import logging

from swadaya.errors import NotFoundError, ValidationError
from swadaya.extensions import db
from swadaya.models.customer import Customer, CUSTOMER_STATUSES
from swadaya.utils.helpers import atomic, to_date

logger = logging.getLogger(__name__)


def get_customer(customer_id: int) -> Customer:
    if customer_id is None:
        raise ValidationError("customer_id is required.", field="customer_id")
    customer = db.session.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError(f"Customer {customer_id} not found.", customer_id=customer_id)
    return customer


def get_customers(status: str = None) -> list:
    query = Customer.query
    if status is not None:
        _check_status(status)
        query = query.filter_by(status=status)
    return query.order_by(Customer.name, Customer.id).all()


def create_customer(
    name: str,
    address: str,
    subscription_start_date,
    phone: str = None,
    status: str = "active",
) -> Customer:
    name = (name or "").strip()
    if not name:
        raise ValidationError("name is required.", field="name")
    _check_status(status)

    customer = Customer(
        name=name,
        address=(address or "").strip(),
        phone=(phone or "").strip() or None,
        status=status,
        subscription_start_date=to_date(subscription_start_date, "subscription_start_date"),
    )
    with atomic() as session:
        session.add(customer)
    logger.info("Created customer %s (%s)", customer.id, customer.name)
    return customer


_UNSET = object()


def update_customer(customer_id: int, name=None, address=None, phone=_UNSET, status=None) -> Customer:
    """Apply only the fields given. ``phone=None`` clears the phone number."""
    with atomic():
        customer = get_customer(customer_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("name cannot be empty.", field="name")
            customer.name = name
        if address is not None:
            customer.address = address.strip()
        if phone is not _UNSET:
            customer.phone = (phone or "").strip() or None
        if status is not None:
            _check_status(status)
            customer.status = status
    logger.info("Updated customer %s", customer_id)
    return customer


def activate_customer(customer_id: int) -> Customer:
    """
    Mark a customer as an active, billable subscriber.

    Runs inside the caller's transaction; no commit here.
    """
    customer = get_customer(customer_id)
    if not customer.is_active:
        logger.info("Activating customer %s", customer_id)
        customer.status = "active"
    return customer


def _check_status(status: str) -> None:
    if status not in CUSTOMER_STATUSES:
        raise ValidationError(
            f"status must be one of {', '.join(CUSTOMER_STATUSES)}.", field="status"
        )
