from typing import Any, Dict
from handbook.models.container_instance import ContainerInstance
from handbook.domain.invariants.content import assert_container
from handbook.utils.transaction import transactional
from .permissions import editable_content_item


ALLOWED_UPDATE_FIELDS = ("container_type", "content", "order_index")


def update_container(
    *,
    item_id: str,
    container_id: str,
    actor_id: str,
    actor_role: str,
    data: Dict[str, Any],
) -> ContainerInstance:
    """
    Partial update: fields left out keep their stored value.
    """
    item = editable_content_item(item_id=item_id, actor_id=actor_id, actor_role=actor_role)

    container = ContainerInstance.query.filter_by(
        id=container_id,
        content_item_id=item.id,
    ).first_or_404(description="Container not found")

    changes = {field: data[field] for field in ALLOWED_UPDATE_FIELDS if field in data}
    if changes.get("order_index") is not None:
        changes["order_index"] = int(changes["order_index"])
    if "content" in changes and changes["content"] is None:
        changes["content"] = {}

    with transactional():
        for field, value in changes.items():
            setattr(container, field, value)

        assert_container(container)

    return container
