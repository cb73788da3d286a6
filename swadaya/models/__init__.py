# Import all models so SQLAlchemy can discover them for db.create_all()
from swadaya.models.setting import Setting
from swadaya.models.customer import Customer
from swadaya.models.bill import MonthlyBill
from swadaya.models.payment import Payment
from swadaya.models.installation import Installation, InstallationMaterial
from swadaya.models.material_preset import MaterialPreset

__all__ = [
    "Setting", "Customer", "MonthlyBill", "Payment",
    "Installation", "InstallationMaterial", "MaterialPreset",
]
