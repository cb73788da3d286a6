from swadaya.services.billing import generate_monthly_bills, get_monthly_bills
from swadaya.services.payments import record_payment, get_payments
from swadaya.services.installations import (
    create_installation, add_installation_material, update_installation,
    get_installations, get_installation_materials,
)
from swadaya.services.arrears import get_arrears
from swadaya.services.reports import get_monthly_report, get_installation_report
from swadaya.services.customers import create_customer, update_customer, get_customers
from swadaya.services.materials import create_material_preset, get_material_presets

__all__ = [
    "generate_monthly_bills", "get_monthly_bills",
    "record_payment", "get_payments",
    "create_installation", "add_installation_material", "update_installation",
    "get_installations", "get_installation_materials",
    "get_arrears",
    "get_monthly_report", "get_installation_report",
    "create_customer", "update_customer", "get_customers",
    "create_material_preset", "get_material_presets",
]
