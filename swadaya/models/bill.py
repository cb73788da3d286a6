from datetime import datetime, timezone
from swadaya.extensions import db

BILL_STATUSES = ("unpaid", "paid")


class MonthlyBill(db.Model):
    __tablename__ = "monthly_bills"
    __table_args__ = (
        db.UniqueConstraint("customer_id", "bill_month", name="uq_monthly_bills_customer_month"),
    )

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False, index=True)
    bill_month = db.Column(db.String(7), nullable=False, index=True)   # YYYY-MM
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(16), nullable=False, default="unpaid", index=True)
    due_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<MonthlyBill {self.customer_id} {self.bill_month} {self.status}>"

    @property
    def is_paid(self):
        return self.status == "paid"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "bill_month": self.bill_month,
            "amount": self.amount,
            "status": self.status,
            "due_date": self.due_date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
