from datetime import date
from decimal import Decimal

import pytest

from swadaya import create_app
from swadaya.extensions import db
from swadaya.models.bill import MonthlyBill
from swadaya.models.customer import Customer
from swadaya.models.installation import Installation


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_customer(app):
    def _make(name="Budi", start=date(2024, 1, 1), status="active", **kwargs):
        customer = Customer(
            name=name,
            address=kwargs.pop("address", "Jl. Merdeka 1"),
            phone=kwargs.pop("phone", None),
            status=status,
            subscription_start_date=start,
        )
        db.session.add(customer)
        db.session.commit()
        return customer
    return _make


@pytest.fixture
def make_bill(app):
    def _make(customer, period, amount="30000.00", status="unpaid"):
        year, month = (int(p) for p in period.split("-"))
        bill = MonthlyBill(
            customer_id=customer.id,
            bill_month=period,
            amount=Decimal(amount),
            status=status,
            due_date=date(year, month, 15),
        )
        db.session.add(bill)
        db.session.commit()
        return bill
    return _make


@pytest.fixture
def make_installation(app):
    def _make(customer, fee="500.00", status="pending", fee_paid=False, completed_date=None):
        installation = Installation(
            customer_id=customer.id,
            installation_fee=Decimal(fee),
            fee_paid=fee_paid,
            status=status,
            completed_date=completed_date,
            total_material_cost=Decimal("0.00"),
            profit_loss=Decimal("0.00"),
        )
        db.session.add(installation)
        db.session.commit()
        return installation
    return _make
