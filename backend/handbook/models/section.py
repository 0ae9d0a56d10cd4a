from handbook.extensions import db
from handbook.utils.slug import slugify
from .base import BaseModel

class Section(BaseModel):
    __tablename__ = "sections"

    name = db.Column(db.String(200), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    emoji = db.Column(db.String(16), nullable=True)
    order_index = db.Column(db.Integer, nullable=False, default=0, index=True)

    # Deleting a section removes its content, and through it the containers
    content_items = db.relationship(
        "ContentItem",
        back_populates="section",
        order_by="ContentItem.order_index",
        cascade="all, delete-orphan",
    )

    @property
    def slug(self):
        return slugify(self.name)
