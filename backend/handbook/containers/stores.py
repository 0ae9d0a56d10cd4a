# handbook/containers/stores.py
"""
Persistence seams for the editors.

``ContentDraft`` and ``ContainerBoard`` never talk to the database or HTTP
directly; they call one of these. ``handbook.application.stores`` provides
in-process implementations over the application services, and tests use
in-memory fakes.
"""
from __future__ import annotations

from typing import Any, Dict, List, Protocol


class ContentStore(Protocol):
    def create(self, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def update(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def delete(self, item_id: str) -> None: ...


class ContainerStore(Protocol):
    def list(self, item_id: str) -> List[Dict[str, Any]]: ...

    def create(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def update(self, item_id: str, container_id: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def delete(self, item_id: str, container_id: str) -> None: ...
