from handbook.extensions import db
from .base import BaseModel

class ContainerInstance(BaseModel):
    __tablename__ = "container_instances"

    content_item_id = db.Column(
        db.String(36), db.ForeignKey("content_items.id"), nullable=False, index=True
    )
    container_type = db.Column(db.String(50), nullable=False)
    content = db.Column(db.JSON, default=dict)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    content_item = db.relationship("ContentItem", back_populates="containers")

    __table_args__ = (
        db.Index("idx_container_item_order", "content_item_id", "order_index"),
    )
