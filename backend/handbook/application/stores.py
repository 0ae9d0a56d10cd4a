# handbook/application/stores.py
from __future__ import annotations

from typing import Any, Dict, List

from handbook.models.container_instance import ContainerInstance
from handbook.normalizers.container import normalize_container
from handbook.normalizers.content_item import normalize_content_item
from .cms.create_container import create_container
from .cms.create_content import create_content
from .cms.delete_container import delete_container
from .cms.delete_content import delete_content
from .cms.update_container import update_container
from .cms.update_content import update_content


class ServiceContentStore:
    """ContentStore backed by the content use cases. Needs an app context."""

    def __init__(self, *, actor_id: str):
        self.actor_id = actor_id

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return normalize_content_item(create_content(author_id=self.actor_id, data=data))

    def update(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return normalize_content_item(update_content(item_id=item_id, data=data))

    def delete(self, item_id: str) -> None:
        delete_content(item_id=item_id)


class ServiceContainerStore:
    """ContainerStore backed by the container use cases, acting as one user."""

    def __init__(self, *, actor_id: str, actor_role: str):
        self.actor_id = actor_id
        self.actor_role = actor_role

    def list(self, item_id: str) -> List[Dict[str, Any]]:
        containers = (
            ContainerInstance.query.filter_by(content_item_id=item_id)
            .order_by(ContainerInstance.order_index.asc())
            .all()
        )
        return [normalize_container(c) for c in containers]

    def create(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return normalize_container(create_container(
            item_id=item_id, actor_id=self.actor_id, actor_role=self.actor_role, data=data,
        ))

    def update(self, item_id: str, container_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return normalize_container(update_container(
            item_id=item_id, container_id=container_id,
            actor_id=self.actor_id, actor_role=self.actor_role, data=data,
        ))

    def delete(self, item_id: str, container_id: str) -> None:
        delete_container(
            item_id=item_id, container_id=container_id,
            actor_id=self.actor_id, actor_role=self.actor_role,
        )
