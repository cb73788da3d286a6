from datetime import datetime, timezone
from swadaya.extensions import db


class MaterialPreset(db.Model):
    __tablename__ = "material_presets"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False)
    default_unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    unit = db.Column(db.String(32), nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<MaterialPreset {self.name}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "default_unit_price": self.default_unit_price,
            "unit": self.unit,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
