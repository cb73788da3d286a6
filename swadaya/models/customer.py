from datetime import datetime, timezone
from swadaya.extensions import db

CUSTOMER_STATUSES = ("active", "inactive")


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    address = db.Column(db.String(300), nullable=False, default="")
    phone = db.Column(db.String(50), nullable=True)
    status = db.Column(db.String(16), nullable=False, default="active", index=True)
    subscription_start_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Customer {self.name}>"

    @property
    def is_active(self):
        return self.status == "active"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "status": self.status,
            "subscription_start_date": self.subscription_start_date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
