from typing import Any, Dict
from handbook.extensions import db
from handbook.models.content_item import ContentItem
from handbook.models.section import Section
from handbook.domain.invariants.content import assert_container_type, assert_content_item
from handbook.utils.order import next_order_index
from handbook.utils.transaction import transactional


def create_content(*, author_id: str, data: Dict[str, Any]) -> ContentItem:
    """
    Create a content item in a section.

    Edge cases handled:
    - Missing title, section_id or container_type
    - Unknown container_type
    - Section that does not exist (400, not 404: it is a bad field value)
    """
    title = data.get("title")
    section_id = data.get("section_id")
    container_type = data.get("container_type")

    if not title or not section_id or not container_type:
        raise ValueError("Title, section_id, and container_type are required")

    assert_container_type(container_type)

    if not Section.query.filter_by(id=section_id).first():
        raise ValueError(f"Section with id {section_id} does not exist")

    item = ContentItem()
    item.title = title
    item.description = data.get("description")
    item.emoji = data.get("emoji")
    item.section_id = section_id
    item.container_type = container_type
    item.content = data.get("content") if data.get("content") is not None else {}
    item.author_id = author_id
    item.published = bool(data.get("published", True))

    with transactional():
        order_index = data.get("order_index")
        item.order_index = (
            int(order_index) if order_index is not None
            else next_order_index(ContentItem.order_index, ContentItem.section_id == section_id)
        )

        assert_content_item(item)
        db.session.add(item)

    return item
