from handbook.extensions import db
from handbook.models.content_item import ContentItem
from handbook.utils.transaction import transactional


def delete_content(*, item_id: str) -> None:
    """Hard-delete a content item together with its container instances."""
    item = ContentItem.query.filter_by(id=item_id).first_or_404(
        description="Content not found"
    )

    with transactional():
        db.session.delete(item)
