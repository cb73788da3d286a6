from datetime import datetime, timezone
from decimal import Decimal

from swadaya.extensions import db

INSTALLATION_STATUSES = ("pending", "completed")


class Installation(db.Model):
    __tablename__ = "installations"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False, index=True)
    installation_fee = db.Column(db.Numeric(10, 2), nullable=False)
    fee_paid = db.Column(db.Boolean, default=False, nullable=False)
    status = db.Column(db.String(16), nullable=False, default="pending", index=True)
    scheduled_date = db.Column(db.Date, nullable=True)
    completed_date = db.Column(db.Date, nullable=True, index=True)
    # Running totals, maintained by the cost tracker
    total_material_cost = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    profit_loss = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    materials = db.relationship(
        "InstallationMaterial",
        back_populates="installation",
        order_by="InstallationMaterial.id",
    )

    def __repr__(self):
        return f"<Installation {self.id} customer={self.customer_id} {self.status}>"

    @property
    def is_completed(self):
        return self.status == "completed"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "installation_fee": self.installation_fee,
            "fee_paid": self.fee_paid,
            "status": self.status,
            "scheduled_date": self.scheduled_date.isoformat() if self.scheduled_date else None,
            "completed_date": self.completed_date.isoformat() if self.completed_date else None,
            "total_material_cost": self.total_material_cost,
            "profit_loss": self.profit_loss,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class InstallationMaterial(db.Model):
    __tablename__ = "installation_materials"

    id = db.Column(db.Integer, primary_key=True)
    installation_id = db.Column(
        db.Integer, db.ForeignKey("installations.id"), nullable=False, index=True
    )
    material_name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.Numeric(10, 3), nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total_cost = db.Column(db.Numeric(10, 2), nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    installation = db.relationship("Installation", back_populates="materials")

    def __repr__(self):
        return f"<InstallationMaterial {self.material_name} x{self.quantity}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "installation_id": self.installation_id,
            "material_name": self.material_name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_cost": self.total_cost,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
