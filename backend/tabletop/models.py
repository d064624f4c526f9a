from tabletop import db
from datetime import datetime, timezone


def _utcnow():
    return datetime.now(timezone.utc)


class StoredValue(db.Model):
    """One key of the flat key-value store. Values are opaque strings."""
    __tablename__ = 'stored_value'
    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def to_dict(self):
        return {
            'key': self.key,
            'value': self.value,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
