from swadaya.utils.helpers import atomic, money, parse_period, month_bounds, to_date, to_decimal
from swadaya.utils.settings import BillingSettings, get_setting, set_setting

__all__ = [
    "atomic", "money", "parse_period", "month_bounds", "to_date", "to_decimal",
    "BillingSettings", "get_setting", "set_setting",
]
