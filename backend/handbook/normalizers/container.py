# handbook/normalizers/container.py
from __future__ import annotations

from typing import Any, Dict

from handbook.models.container_instance import ContainerInstance


def normalize_container(container: ContainerInstance) -> Dict[str, Any]:
    """
    Normalizes a ContainerInstance into API-safe JSON.

    Content is returned as stored; repair happens in the editor and renderer.
    """
    return {
        "id": container.id,
        "content_item_id": container.content_item_id,
        "container_type": container.container_type,
        "content": container.content if container.content is not None else {},
        "order_index": container.order_index,
        "created_at": container.created_at.isoformat() if container.created_at else None,
        "updated_at": container.updated_at.isoformat() if container.updated_at else None,
    }
