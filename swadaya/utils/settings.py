"""
Helpers for reading/writing the settings table, plus the billing defaults
object the services take as an injectable collaborator.
"""
from decimal import Decimal

from flask import current_app

from swadaya.errors import ValidationError
from swadaya.extensions import db
from swadaya.models.setting import Setting
from swadaya.utils.helpers import money, to_decimal

# (key, type, description, config fallback)
BILLING_SETTINGS = {
    "monthly_fee":      ("money",  "Standard monthly subscription fee", "DEFAULT_MONTHLY_FEE"),
    "installation_fee": ("money",  "Standard installation fee",         "DEFAULT_INSTALLATION_FEE"),
    "bill_due_day":     ("number", "Day of the month bills fall due",   "BILL_DUE_DAY"),
}


def get_setting(key: str, default=None):
    """Return the typed value of a setting by key, or `default` if not found."""
    setting = Setting.query.filter_by(key=key).first()
    if setting is None:
        return default
    value = setting.get_typed_value()
    return default if value is None else value


def set_setting(key: str, value) -> Setting:
    """Upsert a setting value. Caller is responsible for db.session.commit()."""
    value = _validate(key, value)
    setting = Setting.query.filter_by(key=key).first()
    if setting:
        setting.value = value
    else:
        stype, desc = "text", None
        if key in BILLING_SETTINGS:
            stype, desc, _ = BILLING_SETTINGS[key]
        setting = Setting(key=key, value=value, type=stype, description=desc)
        db.session.add(setting)
    return setting


def get_all_settings() -> list:
    """Stored settings, with unstored billing keys filled in from config."""
    stored = {s.key: s.to_dict() for s in Setting.query.order_by(Setting.key).all()}
    for key, (stype, desc, config_key) in BILLING_SETTINGS.items():
        if key not in stored:
            stored[key] = {
                "id": None,
                "key": key,
                "value": str(current_app.config[config_key]),
                "type": stype,
                "description": desc,
                "updated_at": None,
            }
    return [stored[k] for k in sorted(stored)]


def default_setting_rows() -> list:
    return [
        Setting(key=key, value=str(current_app.config[config_key]), type=stype, description=desc)
        for key, (stype, desc, config_key) in BILLING_SETTINGS.items()
    ]


def _validate(key: str, value) -> str:
    if value is None:
        raise ValidationError("value is required.", field="value")
    if key not in BILLING_SETTINGS:
        return str(value)

    stype = BILLING_SETTINGS[key][0]
    if stype == "money":
        return str(money(to_decimal(value, key)))
    try:
        day = int(str(value))
    except ValueError:
        raise ValidationError(f"{key} must be a whole number.", field=key) from None
    if not 1 <= day <= 31:
        raise ValidationError(f"{key} must be between 1 and 31.", field=key)
    return str(day)


class BillingSettings:
    """
    Operator-tunable billing defaults.

    Values are looked up in the settings table each time they are read, so a
    change made through ``updateSetting`` applies to the next operation.
    Explicit constructor arguments win over both the table and app config.
    """

    def __init__(self, monthly_fee=None, installation_fee=None, due_day: int = None):
        self._monthly_fee = monthly_fee
        self._installation_fee = installation_fee
        self._due_day = due_day

    @property
    def monthly_fee(self) -> Decimal:
        if self._monthly_fee is not None:
            return Decimal(str(self._monthly_fee))
        return get_setting("monthly_fee", current_app.config["DEFAULT_MONTHLY_FEE"])

    @property
    def installation_fee(self) -> Decimal:
        if self._installation_fee is not None:
            return Decimal(str(self._installation_fee))
        return get_setting("installation_fee", current_app.config["DEFAULT_INSTALLATION_FEE"])

    @property
    def due_day(self) -> int:
        if self._due_day is not None:
            return int(self._due_day)
        return int(get_setting("bill_due_day", current_app.config["BILL_DUE_DAY"]))
