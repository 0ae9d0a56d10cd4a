from typing import Any, Dict
from handbook.extensions import db
from handbook.containers.schema import default_content
from handbook.models.container_instance import ContainerInstance
from handbook.domain.invariants.content import assert_container, assert_container_type
from handbook.utils.order import next_order_index
from handbook.utils.transaction import transactional
from .permissions import editable_content_item


def create_container(
    *,
    item_id: str,
    actor_id: str,
    actor_role: str,
    data: Dict[str, Any],
) -> ContainerInstance:
    """
    Add a container instance to a content item.

    Responsibilities:
    - only the item's author or an admin may write
    - container_type validated; content defaults to the type's starter template
    - appended after the last instance unless order_index is given
    """
    item = editable_content_item(item_id=item_id, actor_id=actor_id, actor_role=actor_role)

    container_type = data.get("container_type")
    if not container_type:
        raise ValueError("Missing required fields")
    assert_container_type(container_type)

    container = ContainerInstance()
    container.content_item_id = item.id
    container.container_type = container_type
    container.content = (
        data["content"] if data.get("content") is not None else default_content(container_type)
    )

    with transactional():
        order_index = data.get("order_index")
        container.order_index = (
            int(order_index) if order_index is not None
            else next_order_index(
                ContainerInstance.order_index,
                ContainerInstance.content_item_id == item.id,
            )
        )

        assert_container(container)
        db.session.add(container)

    return container
