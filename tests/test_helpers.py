from datetime import date, datetime
from decimal import Decimal

import pytest

from swadaya.errors import ReferentialIntegrityError, ValidationError
from swadaya.models.bill import MonthlyBill
from swadaya.utils.helpers import (
    atomic, current_period, money, month_bounds, month_index, parse_period, to_date, to_decimal,
)


@pytest.mark.parametrize("value, expected", [
    ("46.875", "46.88"),
    ("0.005", "0.01"),
    ("-0.005", "-0.01"),
    (10, "10.00"),
    (None, "0.00"),
])
def test_money(value, expected):
    assert money(value) == Decimal(expected)


def test_to_decimal():
    assert to_decimal("12.5", "quantity") == Decimal("12.5")
    assert to_decimal(0, "fee", positive=False) == Decimal("0")
    for junk in (None, "", True, "NaN", "Infinity", "1,5"):
        with pytest.raises(ValidationError):
            to_decimal(junk, "amount")


def test_periods():
    assert parse_period("2024-02") == (2024, 2)
    assert month_bounds("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds("2023-12") == (date(2023, 12, 1), date(2023, 12, 31))
    assert month_index("2024-01") - month_index("2023-11") == 2
    assert current_period(date(2024, 7, 31)) == "2024-07"


def test_to_date():
    assert to_date("2024-03-05", "d") == date(2024, 3, 5)
    assert to_date(datetime(2024, 3, 5, 23, 59), "d") == date(2024, 3, 5)
    assert to_date("2024-03-05T10:30:00", "d") == date(2024, 3, 5)
    assert to_date("2024-03-05 10:30:00", "d") == date(2024, 3, 5)
    assert to_date(None, "d", required=False) is None
    with pytest.raises(ValidationError):
        to_date(None, "d")
    with pytest.raises(ValidationError):
        to_date("2024-02-30", "d")
    with pytest.raises(ValidationError):
        to_date("2024-03-05garbage", "d")


def test_atomic_maps_foreign_key_violation(app):
    with pytest.raises(ReferentialIntegrityError):
        with atomic() as session:
            session.add(MonthlyBill(
                customer_id=404,
                bill_month="2024-01",
                amount=Decimal("1.00"),
                due_date=date(2024, 1, 15),
            ))
    assert MonthlyBill.query.count() == 0
