from handbook.extensions import db
from .base import BaseModel

class ContentItem(BaseModel):
    __tablename__ = "content_items"

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    emoji = db.Column(db.String(16), nullable=True)

    section_id = db.Column(db.String(36), db.ForeignKey("sections.id"), nullable=False, index=True)
    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True, index=True)

    container_type = db.Column(db.String(50), nullable=False, default="text")
    content = db.Column(db.JSON, default=dict)  # shape depends on container_type

    published = db.Column(db.Boolean, nullable=False, default=True, index=True)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    section = db.relationship("Section", back_populates="content_items")
    author = db.relationship("User", back_populates="content_items")

    containers = db.relationship(
        "ContainerInstance",
        back_populates="content_item",
        order_by="ContainerInstance.order_index",
        cascade="all, delete-orphan",
    )
