from datetime import date
from decimal import Decimal

import pytest

from swadaya.services.arrears import get_arrears, periods_overdue

TODAY = date(2024, 4, 10)


def test_sums_unpaid_bills_per_customer(make_customer, make_bill):
    customer = make_customer("Ani")
    make_bill(customer, "2024-02", amount="150.00")
    make_bill(customer, "2024-01", amount="100.00")

    rows = get_arrears(today=TODAY)

    assert rows == [{
        "customer_id": customer.id,
        "customer_name": "Ani",
        "total_outstanding": Decimal("250.00"),
        "oldest_unpaid_period": "2024-01",
        "unpaid_bills": 2,
        "periods_overdue": 3,
    }]


def test_paid_bills_are_ignored(make_customer, make_bill):
    settled = make_customer("Lunas")
    make_bill(settled, "2024-01", status="paid")
    debtor = make_customer("Nunggak")
    make_bill(debtor, "2024-01", status="paid")
    make_bill(debtor, "2024-02", amount="30000.00")

    rows = get_arrears(today=TODAY)

    assert [r["customer_id"] for r in rows] == [debtor.id]
    assert rows[0]["oldest_unpaid_period"] == "2024-02"
    assert rows[0]["total_outstanding"] == Decimal("30000.00")


def test_largest_debt_first(make_customer, make_bill):
    small = make_customer("Small")
    big = make_customer("Big")
    make_bill(small, "2024-01", amount="100.00")
    make_bill(big, "2024-01", amount="100.00")
    make_bill(big, "2024-02", amount="100.00")

    assert [r["customer_id"] for r in get_arrears(today=TODAY)] == [big.id, small.id]


def test_customer_filter(make_customer, make_bill):
    ani = make_customer("Ani")
    budi = make_customer("Budi")
    make_bill(ani, "2024-01")
    make_bill(budi, "2024-01")

    rows = get_arrears(customer_id=budi.id, today=TODAY)

    assert [r["customer_name"] for r in rows] == ["Budi"]


def test_customer_without_arrears_gives_empty_list(make_customer):
    customer = make_customer()
    assert get_arrears(customer_id=customer.id) == []


@pytest.mark.parametrize("oldest, today, expected", [
    ("2024-01", date(2024, 4, 10), 3),
    ("2024-04", date(2024, 4, 1), 0),
    ("2023-11", date(2024, 2, 29), 3),
    ("2024-06", date(2024, 4, 10), 0),
])
def test_periods_overdue(oldest, today, expected):
    assert periods_overdue(oldest, today) == expected
