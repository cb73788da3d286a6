"""
Miscellaneous helpers used across services and blueprints.
"""
import calendar
import logging
import re
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from flask import request
from sqlalchemy.exc import IntegrityError

from swadaya.errors import DuplicateError, ReferentialIntegrityError, ValidationError
from swadaya.extensions import db

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
QUANTITY_STEP = Decimal("0.001")
ZERO = Decimal("0.00")

_PERIOD_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


# ── Money ────────────────────────────────────────────────────────────────────

def money(value) -> Decimal:
    """Round to currency precision (two decimals, half-up)."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_quantity(value: Decimal) -> Decimal:
    """Round a material quantity to the stored precision (three decimals, half-up)."""
    return value.quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP)


def to_decimal(value, field: str, *, positive: bool = True) -> Decimal:
    """Parse user input into a Decimal, raising ValidationError on junk."""
    if value is None or isinstance(value, bool) or value == "":
        raise ValidationError(f"{field} is required.", field=field)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number.", field=field) from None
    if not result.is_finite():
        raise ValidationError(f"{field} must be a number.", field=field)
    if positive and result <= 0:
        raise ValidationError(f"{field} must be greater than zero.", field=field)
    return result


# ── Periods & dates ──────────────────────────────────────────────────────────

def parse_period(period: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` token into (year, month)."""
    match = _PERIOD_RE.match(period or "") if isinstance(period, str) else None
    if match is None:
        raise ValidationError(f"Invalid period {period!r}; expected YYYY-MM.", field="period")
    return int(match.group(1)), int(match.group(2))


def format_period(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def current_period(today: date = None) -> str:
    today = today or date.today()
    return format_period(today.year, today.month)


def month_bounds(period: str) -> tuple[date, date]:
    """First and last calendar day of the period, both inclusive."""
    year, month = parse_period(period)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_index(period: str) -> int:
    year, month = parse_period(period)
    return year * 12 + month


def to_date(value, field: str, *, required: bool = True):
    """Accept a date, datetime or ISO ``YYYY-MM-DD`` string."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required.", field=field)
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        # full timestamps keep only their date part
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD).", field=field) from None


# ── Transactions ─────────────────────────────────────────────────────────────

@contextmanager
def atomic():
    """
    Run a block of writes as one transaction.

    Commits on success; on any error the session is rolled back and the
    error re-raised. Store integrity errors become ledger errors with the
    driver message kept as-is.
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        message = str(exc.orig)
        logger.warning("Transaction rolled back: %s", message)
        if "unique" in message.lower():
            raise DuplicateError(message) from exc
        raise ReferentialIntegrityError(message) from exc
    except Exception as exc:
        db.session.rollback()
        logger.warning("Transaction rolled back: %s", exc)
        raise


# ── Request parsing ──────────────────────────────────────────────────────────

def json_body() -> dict:
    """The request's JSON object, or ValidationError when it is not one."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def optional_int(value, field: str):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer.", field=field)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer.", field=field) from None
