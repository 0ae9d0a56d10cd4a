from werkzeug.exceptions import Forbidden
from handbook.models.content_item import ContentItem


def editable_content_item(*, item_id: str, actor_id: str, actor_role: str) -> ContentItem:
    """
    Fetch a content item the actor may change the containers of.

    404 when the item is missing, 403 unless the actor wrote it or is an admin.
    """
    item = ContentItem.query.filter_by(id=item_id).first_or_404(
        description="Content item not found"
    )

    if item.author_id != actor_id and actor_role != "admin":
        raise Forbidden("Only the author or an admin can change this content")

    return item
