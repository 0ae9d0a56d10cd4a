# handbook/containers/board.py
"""
Multi-container editing for one content item.

Each entry is a local draft of one container instance. Edits stay local
until ``save``; ``cancel`` goes back to the last saved state. Moving two
entries persists both through two separate store calls, so a failure in
the second call leaves the first one applied.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .schema import default_content, is_container_type
from .stores import ContainerStore

logger = logging.getLogger(__name__)


@dataclass
class BoardEntry:
    container_type: str
    content: Dict[str, Any]
    order_index: int
    id: Optional[str] = None
    dirty: bool = False
    editing: bool = False
    saved: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def is_saved(self) -> bool:
        return self.id is not None

    def snapshot(self) -> None:
        self.saved = {
            "container_type": self.container_type,
            "content": copy.deepcopy(self.content),
            "order_index": self.order_index,
        }

    @classmethod
    def from_instance(cls, instance: Dict[str, Any]) -> "BoardEntry":
        entry = cls(
            container_type=instance.get("container_type") or "text",
            content=copy.deepcopy(instance.get("content") or {}),
            order_index=instance.get("order_index") or 0,
            id=instance.get("id"),
        )
        entry.snapshot()
        return entry


class ContainerBoard:
    def __init__(self, store: ContainerStore, item_id: str):
        self.store = store
        self.item_id = item_id
        self.entries: List[BoardEntry] = []

    def _entry(self, index: int) -> BoardEntry:
        if not 0 <= index < len(self.entries):
            raise ValueError(f"No container at position {index}")
        return self.entries[index]

    @property
    def has_unsaved_changes(self) -> bool:
        return any(e.dirty for e in self.entries)

    def load(self) -> List[BoardEntry]:
        instances = self.store.list(self.item_id)
        self.entries = [
            BoardEntry.from_instance(i)
            for i in sorted(instances, key=lambda i: i.get("order_index") or 0)
        ]
        return self.entries

    def add(self, container_type: str = "text") -> BoardEntry:
        """Append an unsaved entry with the type's starter template, open for editing."""
        if not is_container_type(container_type):
            raise ValueError(f"Unknown container type: {container_type}")

        entry = BoardEntry(
            container_type=container_type,
            content=default_content(container_type),
            order_index=max((e.order_index for e in self.entries), default=-1) + 1,
            dirty=True,
            editing=True,
        )
        self.entries.append(entry)
        return entry

    def begin_edit(self, index: int) -> BoardEntry:
        entry = self._entry(index)
        entry.editing = True
        return entry

    def update(self, index: int, content: Dict[str, Any]) -> BoardEntry:
        entry = self._entry(index)
        entry.content = copy.deepcopy(content)
        entry.dirty = True
        return entry

    def switch_type(self, index: int, container_type: str) -> BoardEntry:
        """Change an entry's type; its content is replaced by the new starter template."""
        if not is_container_type(container_type):
            raise ValueError(f"Unknown container type: {container_type}")

        entry = self._entry(index)
        entry.container_type = container_type
        entry.content = default_content(container_type)
        entry.dirty = True
        return entry

    def cancel(self, index: int) -> Optional[BoardEntry]:
        """
        Drop local edits. A never-saved entry is removed entirely (returns None).
        """
        entry = self._entry(index)

        if not entry.is_saved:
            self.entries.pop(index)
            return None

        entry.container_type = entry.saved["container_type"]
        entry.content = copy.deepcopy(entry.saved["content"])
        entry.order_index = entry.saved["order_index"]
        entry.dirty = False
        entry.editing = False
        return entry

    def save(self, index: int) -> BoardEntry:
        """Create or update one entry."""
        entry = self._entry(index)
        data = {
            "container_type": entry.container_type,
            "content": copy.deepcopy(entry.content),
            "order_index": entry.order_index,
        }

        if entry.is_saved:
            saved = self.store.update(self.item_id, entry.id, data)
        else:
            saved = self.store.create(self.item_id, data)
            entry.id = saved.get("id")

        entry.dirty = False
        entry.editing = False
        entry.snapshot()
        return entry

    def delete(self, index: int) -> None:
        """Remove an entry; only entries that were saved touch the store."""
        entry = self._entry(index)
        if entry.is_saved:
            self.store.delete(self.item_id, entry.id)
        self.entries.pop(index)

    def move(self, index: int, direction: int) -> bool:
        """
        Swap an entry with its neighbour (``direction`` -1 for up, 1 for down).

        The pair exchanges its stored order_index values, so gaps left by
        deletes are kept. When the pair shares a value the whole board is
        renumbered from 0. Each changed saved entry is persisted with its own
        update; there is no rollback if a later one fails.
        Returns False when the move would leave the board.
        """
        target = index + (1 if direction > 0 else -1)
        if not 0 <= index < len(self.entries) or not 0 <= target < len(self.entries):
            return False

        first, second = self.entries[index], self.entries[target]
        self.entries[index], self.entries[target] = second, first

        if first.order_index != second.order_index:
            first.order_index, second.order_index = second.order_index, first.order_index
            changed = [first, second]
        else:
            changed = []
            for position, entry in enumerate(self.entries):
                if entry.order_index != position:
                    entry.order_index = position
                    changed.append(entry)

        for entry in changed:
            if not entry.is_saved:
                continue
            try:
                self.store.update(self.item_id, entry.id, {"order_index": entry.order_index})
            except Exception:
                logger.warning("Reorder of container %s failed; order may be inconsistent", entry.id)
                raise
            if entry.saved is not None:
                entry.saved["order_index"] = entry.order_index

        return True
