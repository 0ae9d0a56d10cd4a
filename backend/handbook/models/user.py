from werkzeug.security import generate_password_hash, check_password_hash
from handbook.extensions import db
from .base import BaseModel

ROLES = ("user", "editor", "admin")

class User(BaseModel):
    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False, default='')
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(50), nullable=False, default='user')

    content_items = db.relationship("ContentItem", back_populates="author")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_editor(self):
        return self.role in ("editor", "admin")
