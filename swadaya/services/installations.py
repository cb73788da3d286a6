"""
Installation Cost Tracker.

Keeps each installation's ``total_material_cost`` and ``profit_loss`` in step
with its material rows. Adding a material updates the totals incrementally;
``update_installation`` recomputes them from the full material list, which
repairs any drift left by concurrent writers.
"""
import logging

from swadaya.errors import NotFoundError, ValidationError
from swadaya.extensions import db
from swadaya.models.installation import (
    Installation, InstallationMaterial, INSTALLATION_STATUSES,
)
from swadaya.services.customers import activate_customer, get_customer
from swadaya.utils.helpers import ZERO, atomic, money, round_quantity, to_date, to_decimal
from swadaya.utils.settings import BillingSettings

logger = logging.getLogger(__name__)

_UNSET = object()


def material_cost(quantity, unit_price):
    """Line total rounded half-up to cents: 12.5 x 3.75 -> 46.88."""
    return money(quantity * unit_price)


def get_installation(installation_id: int, *, for_update: bool = False) -> Installation:
    if installation_id is None:
        raise ValidationError("installation_id is required.", field="installation_id")
    installation = db.session.get(Installation, installation_id, with_for_update=for_update)
    if installation is None:
        raise NotFoundError(
            f"Installation {installation_id} not found.", installation_id=installation_id
        )
    return installation


def get_installations(customer_id: int = None) -> list:
    query = Installation.query
    if customer_id is not None:
        query = query.filter(Installation.customer_id == customer_id)
    return query.order_by(Installation.id).all()


def get_installation_materials(installation_id: int) -> list:
    get_installation(installation_id)
    return (
        InstallationMaterial.query
        .filter_by(installation_id=installation_id)
        .order_by(InstallationMaterial.created_at, InstallationMaterial.id)
        .all()
    )


def create_installation(
    customer_id: int,
    installation_fee=None,
    scheduled_date=None,
    settings: BillingSettings = None,
) -> Installation:
    settings = settings or BillingSettings()
    if installation_fee is None:
        installation_fee = settings.installation_fee
    fee = money(to_decimal(installation_fee, "installation_fee", positive=False))
    if fee < 0:
        raise ValidationError("installation_fee cannot be negative.", field="installation_fee")

    with atomic() as session:
        get_customer(customer_id)
        installation = Installation(
            customer_id=customer_id,
            installation_fee=fee,
            fee_paid=False,
            status="pending",
            scheduled_date=to_date(scheduled_date, "scheduled_date", required=False),
            completed_date=None,
            total_material_cost=ZERO,
            profit_loss=ZERO,
        )
        session.add(installation)

    logger.info("Created installation %s for customer %s (fee %s)", installation.id, customer_id, fee)
    return installation


def add_installation_material(installation_id: int, material_name: str, quantity, unit_price) -> InstallationMaterial:
    """
    Record a material line item and roll its cost into the installation totals.

    The material row and the updated totals commit in one transaction.
    """
    material_name = (material_name or "").strip()
    if not material_name:
        raise ValidationError("material_name is required.", field="material_name")
    quantity = round_quantity(to_decimal(quantity, "quantity"))
    if quantity <= 0:
        raise ValidationError("quantity must be at least 0.001.", field="quantity")
    unit_price = money(to_decimal(unit_price, "unit_price"))
    if unit_price <= 0:
        raise ValidationError("unit_price must be at least 0.01.", field="unit_price")
    total_cost = material_cost(quantity, unit_price)

    with atomic() as session:
        installation = get_installation(installation_id, for_update=True)
        material = InstallationMaterial(
            installation_id=installation.id,
            material_name=material_name,
            quantity=quantity,
            unit_price=unit_price,
            total_cost=total_cost,
        )
        session.add(material)

        new_total = money(money(installation.total_material_cost) + total_cost)
        installation.total_material_cost = new_total
        installation.profit_loss = money(installation.installation_fee) - new_total

    logger.info(
        "Added %s (%s x %s = %s) to installation %s",
        material_name, quantity, unit_price, total_cost, installation_id,
    )
    return material


def recompute_totals(installation: Installation) -> None:
    """Sum material costs from scratch and refresh the running totals."""
    costs = (
        db.session.query(InstallationMaterial.total_cost)
        .filter(InstallationMaterial.installation_id == installation.id)
        .all()
    )
    total = money(sum((money(row.total_cost) for row in costs), ZERO))
    installation.total_material_cost = total
    installation.profit_loss = money(installation.installation_fee) - total


def update_installation(
    installation_id: int,
    status: str = None,
    fee_paid: bool = None,
    completed_date=_UNSET,
    on_completed=activate_customer,
) -> Installation:
    """
    Change status / fee_paid / completed_date after recomputing totals.

    When ``status`` is set to ``completed`` the ``on_completed`` collaborator
    is called with the owning customer's id inside the same transaction; by
    default it activates the customer's subscription.
    """
    if status is not None and status not in INSTALLATION_STATUSES:
        raise ValidationError(
            f"status must be one of {', '.join(INSTALLATION_STATUSES)}.", field="status"
        )
    if fee_paid is not None and not isinstance(fee_paid, bool):
        raise ValidationError("fee_paid must be true or false.", field="fee_paid")

    with atomic():
        installation = get_installation(installation_id, for_update=True)
        recompute_totals(installation)

        if status is not None:
            installation.status = status
        if fee_paid is not None:
            installation.fee_paid = fee_paid
        if completed_date is not _UNSET:
            installation.completed_date = to_date(completed_date, "completed_date", required=False)

        if status is not None and installation.is_completed and on_completed is not None:
            on_completed(installation.customer_id)

    logger.info("Updated installation %s (status=%s)", installation_id, installation.status)
    return installation
