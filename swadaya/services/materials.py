"""Material presets: a named catalogue of common parts with default prices."""
import logging

from swadaya.errors import DuplicateError, ValidationError
from swadaya.models.material_preset import MaterialPreset
from swadaya.utils.helpers import atomic, money, to_decimal

logger = logging.getLogger(__name__)


def get_material_presets() -> list:
    return MaterialPreset.query.order_by(MaterialPreset.name).all()


def create_material_preset(name: str, default_unit_price, unit: str) -> MaterialPreset:
    name = (name or "").strip()
    unit = (unit or "").strip()
    if not name:
        raise ValidationError("name is required.", field="name")
    if not unit:
        raise ValidationError("unit is required.", field="unit")
    price = money(to_decimal(default_unit_price, "default_unit_price"))

    if MaterialPreset.query.filter_by(name=name).first():
        raise DuplicateError(f"Material preset '{name}' already exists.", name=name)

    preset = MaterialPreset(name=name, default_unit_price=price, unit=unit)
    with atomic() as session:
        session.add(preset)
    logger.info("Created material preset %s at %s/%s", name, price, unit)
    return preset
