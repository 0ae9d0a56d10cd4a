from datetime import datetime, timezone
import uuid
from handbook.extensions import db


def utc_now():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """uuid string primary key plus created/updated timestamps."""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    created_at = db.Column(db.DateTime, default=utc_now, index=True)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now, index=True)

    def __repr__(self):
        return f"<{type(self).__name__} {self.id}>"
