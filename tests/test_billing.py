from datetime import date
from decimal import Decimal

import pytest

from swadaya.errors import DuplicateError, ValidationError
from swadaya.models.bill import MonthlyBill
from swadaya.services import billing
from swadaya.services.billing import due_date_for, generate_monthly_bills, get_monthly_bills
from swadaya.utils.helpers import atomic
from swadaya.utils.settings import BillingSettings, set_setting


def test_generates_one_unpaid_bill_per_eligible_customer(make_customer):
    first = make_customer("Ani", start=date(2023, 12, 1))
    second = make_customer("Budi", start=date(2024, 1, 10))

    bills = generate_monthly_bills("2024-02")

    assert sorted(b.customer_id for b in bills) == [first.id, second.id]
    for bill in bills:
        assert bill.bill_month == "2024-02"
        assert bill.amount == Decimal("30000.00")
        assert bill.status == "unpaid"
        assert bill.due_date == date(2024, 2, 15)


def test_second_run_creates_nothing(make_customer):
    make_customer("Ani")
    make_customer("Budi")

    assert len(generate_monthly_bills("2024-02")) == 2
    assert generate_monthly_bills("2024-02") == []
    assert MonthlyBill.query.filter_by(bill_month="2024-02").count() == 2


def test_rerun_only_bills_customers_added_since(make_customer):
    make_customer("Ani")
    generate_monthly_bills("2024-02")
    late = make_customer("Citra", start=date(2024, 1, 20))

    bills = generate_monthly_bills("2024-02")

    assert [b.customer_id for b in bills] == [late.id]


def test_subscription_starting_on_first_day_is_excluded(make_customer):
    make_customer("Boundary", start=date(2024, 3, 1))
    assert generate_monthly_bills("2024-03") == []


def test_subscription_starting_day_before_is_included(make_customer):
    customer = make_customer("Leap", start=date(2024, 2, 29))
    bills = generate_monthly_bills("2024-03")
    assert [b.customer_id for b in bills] == [customer.id]


def test_inactive_customers_are_not_billed(make_customer):
    make_customer("Dormant", status="inactive")
    assert generate_monthly_bills("2024-02") == []


def test_explicit_amount_overrides_default(make_customer):
    make_customer()
    bills = generate_monthly_bills("2024-02", amount="45000")
    assert bills[0].amount == Decimal("45000.00")


def test_default_amount_follows_settings_table(make_customer):
    make_customer()
    with atomic():
        set_setting("monthly_fee", "27500")

    bills = generate_monthly_bills("2024-02")

    assert bills[0].amount == Decimal("27500.00")


def test_injected_settings_win(make_customer):
    make_customer()
    settings = BillingSettings(monthly_fee=Decimal("12000"), due_day=5)

    bills = generate_monthly_bills("2024-02", settings=settings)

    assert bills[0].amount == Decimal("12000.00")
    assert bills[0].due_date == date(2024, 2, 5)


def test_due_day_is_clamped_to_month_end():
    assert due_date_for("2024-02", 31) == date(2024, 2, 29)
    assert due_date_for("2023-02", 30) == date(2023, 2, 28)
    assert due_date_for("2024-04", 15) == date(2024, 4, 15)


@pytest.mark.parametrize("period", ["2024-13", "2024-1", "24-01", "", "2024/01", None])
def test_malformed_period_is_rejected(make_customer, period):
    make_customer()
    with pytest.raises(ValidationError):
        generate_monthly_bills(period)
    assert MonthlyBill.query.count() == 0


@pytest.mark.parametrize("amount", ["0", "-100", "abc", "0.001"])
def test_non_positive_amount_is_rejected(make_customer, amount):
    make_customer()
    with pytest.raises(ValidationError):
        generate_monthly_bills("2024-02", amount=amount)


def test_store_rejects_duplicate_customer_period(make_customer, make_bill):
    customer = make_customer()
    make_bill(customer, "2024-02")

    with pytest.raises(DuplicateError):
        with atomic() as session:
            session.add(MonthlyBill(
                customer_id=customer.id,
                bill_month="2024-02",
                amount=Decimal("30000"),
                due_date=date(2024, 2, 15),
            ))

    assert MonthlyBill.query.count() == 1


def test_batch_is_all_or_nothing(monkeypatch, make_customer, make_bill):
    fresh = make_customer("Ani")
    billed = make_customer("Budi")
    make_bill(billed, "2024-02")
    # forget the existing bill so the batch collides with it at commit
    monkeypatch.setattr(billing, "billed_customer_ids", lambda period: set())

    with pytest.raises(DuplicateError):
        generate_monthly_bills("2024-02")

    assert MonthlyBill.query.count() == 1
    assert MonthlyBill.query.filter_by(customer_id=fresh.id).count() == 0


def test_get_monthly_bills_filters(make_customer, make_bill):
    ani = make_customer("Ani")
    budi = make_customer("Budi")
    make_bill(ani, "2024-01")
    make_bill(ani, "2024-02")
    make_bill(budi, "2024-02")

    assert len(get_monthly_bills()) == 3
    assert {b.bill_month for b in get_monthly_bills(customer_id=ani.id)} == {"2024-01", "2024-02"}
    assert {b.customer_id for b in get_monthly_bills(period="2024-02")} == {ani.id, budi.id}
    assert len(get_monthly_bills(customer_id=budi.id, period="2024-01")) == 0
