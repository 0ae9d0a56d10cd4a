from handbook.extensions import db
from handbook.models.container_instance import ContainerInstance
from handbook.utils.transaction import transactional
from .permissions import editable_content_item


def delete_container(
    *,
    item_id: str,
    container_id: str,
    actor_id: str,
    actor_role: str,
) -> None:
    item = editable_content_item(item_id=item_id, actor_id=actor_id, actor_role=actor_role)

    container = ContainerInstance.query.filter_by(
        id=container_id,
        content_item_id=item.id,
    ).first_or_404(description="Container not found")

    with transactional():
        db.session.delete(container)
