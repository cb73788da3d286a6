from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from swadaya.extensions import db


class Setting(db.Model):
    __tablename__ = "settings"

    id          = db.Column(db.Integer, primary_key=True)
    key         = db.Column(db.String(128), unique=True, nullable=False, index=True)
    value       = db.Column(db.Text, nullable=False)
    # text | number | money
    type        = db.Column(db.String(32), default="text", nullable=False)
    description = db.Column(db.String(255))
    updated_at  = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def get_typed_value(self):
        """Return value cast to its declared type."""
        if self.type == "money":
            try:
                return Decimal(str(self.value))
            except (InvalidOperation, TypeError):
                return None
        if self.type == "number":
            try:
                return int(self.value)
            except (ValueError, TypeError):
                return None
        return self.value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "key": self.key,
            "value": self.value,
            "type": self.type,
            "description": self.description,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Setting {self.key}={self.value!r}>"
