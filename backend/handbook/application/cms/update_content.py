from typing import Any, Dict
from handbook.models.content_item import ContentItem
from handbook.models.section import Section
from handbook.domain.invariants.content import assert_content_item
from handbook.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = (
    "title",
    "description",
    "emoji",
    "section_id",
    "container_type",
    "content",
    "published",
    "order_index",
)


def update_content(*, item_id: str, data: Dict[str, Any]) -> ContentItem:
    """
    Update mutable fields on a content item.

    Design rules:
    - Only whitelisted fields are mutable
    - No silent no-op updates
    - Invariants always revalidated
    """
    item = ContentItem.query.filter_by(id=item_id).first_or_404(
        description="Content not found"
    )

    changes = {field: data[field] for field in ALLOWED_UPDATE_FIELDS if field in data}
    if not changes:
        raise ValueError("No valid fields provided for update")

    if "section_id" in changes and not Section.query.filter_by(id=changes["section_id"]).first():
        raise ValueError(f"Section with id {changes['section_id']} does not exist")

    if "published" in changes:
        changes["published"] = bool(changes["published"])
    if changes.get("order_index") is not None:
        changes["order_index"] = int(changes["order_index"])
    if "content" in changes and changes["content"] is None:
        changes["content"] = {}

    with transactional():
        for field, value in changes.items():
            setattr(item, field, value)

        assert_content_item(item)

    return item
