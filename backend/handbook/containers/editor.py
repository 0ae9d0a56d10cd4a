# handbook/containers/editor.py
"""
Single-container editing.

``ContentDraft`` holds the in-progress ``(container_type, content)`` of one
content item. Loading repairs legacy content through the normalizer, every
mutation works on a private copy, and nothing reaches the server until
``save`` is called explicitly.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .normalizer import detect_container_type, normalize_content, split_grid_row, split_headers
from .schema import ALERT_TYPES, AUXILIARY_FIELDS, DEFAULT_ALERT_TYPE, empty_content, is_container_type
from .stores import ContentStore

Path = Union[str, Sequence[Union[str, int]]]

# Collections a type can grow or shrink, on top of the cross-cutting ones.
COLLECTIONS: Dict[str, Tuple[str, ...]] = {
    "text": ("sections",),
    "list": ("items",),
    "procedure": ("steps",),
    "grid": ("rows",),
    "tabs": ("tabs",),
    "danger": ("contacts",),
    "quiz": ("questions",),
}

ITEM_FIELDS = ("title", "description", "section_id", "emoji", "published", "order_index")


@dataclass
class FormField:
    path: Tuple[Union[str, int], ...]
    widget: str
    label: str
    value: Any = None
    choices: Optional[List[Any]] = None

    @property
    def name(self) -> str:
        return ".".join(str(part) for part in self.path)


def _parse_path(path: Path) -> Tuple[Union[str, int], ...]:
    parts = path.split(".") if isinstance(path, str) else list(path)
    if not parts or parts == [""]:
        raise ValueError("Empty field path")
    return tuple(int(p) if isinstance(p, str) and p.isdigit() else p for p in parts)


def rows_to_text(rows: Any) -> str:
    """Grid rows as the textarea shows them: one row per line, cells joined by ", "."""
    if not isinstance(rows, list):
        return ""
    return "\n".join(", ".join(split_grid_row(row)) for row in rows)


class ContentDraft:
    def __init__(
        self,
        container_type: str = "text",
        content: Optional[Dict[str, Any]] = None,
        item_id: Optional[str] = None,
        **item_fields: Any,
    ):
        self.item_id = item_id
        self.container_type = container_type if is_container_type(container_type) else "text"
        self.content: Dict[str, Any] = copy.deepcopy(content) if content else empty_content(self.container_type)
        self.item: Dict[str, Any] = {k: v for k, v in item_fields.items() if k in ITEM_FIELDS}
        self.dirty = False

    # -------------------------------------------------
    # Loading
    # -------------------------------------------------

    @classmethod
    def load(cls, item: Dict[str, Any]) -> "ContentDraft":
        """Build a draft from a content item, repairing its content on the way in."""
        content, container_type = normalize_content(item.get("content"), item.get("container_type"))
        return cls(
            container_type,
            content,
            item_id=item.get("id"),
            **{k: item[k] for k in ITEM_FIELDS if k in item},
        )

    def set_item_field(self, name: str, value: Any) -> None:
        if name not in ITEM_FIELDS:
            raise ValueError(f"Unknown item field: {name}")
        self.item[name] = value
        self.dirty = True

    # -------------------------------------------------
    # Form controls
    # -------------------------------------------------

    def form_fields(self) -> List[FormField]:
        """Controls for the current type, followed by the cross-cutting blocks."""
        c = self.content
        t = self.container_type
        fields: List[FormField] = []

        if t == "text":
            fields.append(FormField(("text",), "rich_text", "Content", c.get("text", "")))
            fields.append(FormField(("note",), "textarea", "Note", c.get("note", "")))
            for i, section in enumerate(c.get("sections") or []):
                for key in ("title", "progression", "advanced", "alternate"):
                    fields.append(FormField(("sections", i, key), "text",
                                            f"Section {i + 1} {key}", section.get(key, "")))

        elif t == "list":
            for i, item in enumerate(c.get("items") or []):
                fields.append(FormField(("items", i), "text", f"Item {i + 1}", item))

        elif t == "procedure":
            for i, step in enumerate(c.get("steps") or []):
                fields.append(FormField(("steps", i, "icon"), "text", f"Step {i + 1} icon", step.get("icon", "")))
                fields.append(FormField(("steps", i, "title"), "text", f"Step {i + 1} title", step.get("title", "")))
                fields.append(FormField(("steps", i, "description"), "textarea",
                                        f"Step {i + 1} description", step.get("description", "")))
                fields.append(FormField(("steps", i, "price"), "text", f"Step {i + 1} price", step.get("price", "")))

        elif t == "grid":
            fields.append(FormField(("headers",), "csv", "Headers (comma separated)",
                                    ", ".join(split_headers(c.get("headers")))))
            fields.append(FormField(("rows",), "rows", "Rows (one per line, cells separated by commas)",
                                    rows_to_text(c.get("rows"))))

        elif t == "tabs":
            for i, tab in enumerate(c.get("tabs") or []):
                fields.append(FormField(("tabs", i, "title"), "text", f"Tab {i + 1} title", tab.get("title", "")))
                fields.append(FormField(("tabs", i, "content"), "rich_text",
                                        f"Tab {i + 1} content", tab.get("content", "")))

        elif t in ("warning", "success", "danger"):
            fields.append(FormField(("title",), "text", "Title", c.get("title", "")))
            fields.append(FormField(("message",), "textarea", "Message", c.get("message", "")))
            if t == "danger":
                fields.append(FormField(("warning",), "textarea", "Warning", c.get("warning", "")))
                for i, contact in enumerate(c.get("contacts") or []):
                    fields.append(FormField(("contacts", i, "icon"), "text",
                                            f"Contact {i + 1} icon", contact.get("icon", "")))
                    fields.append(FormField(("contacts", i, "title"), "text",
                                            f"Contact {i + 1}", contact.get("title", "")))

        elif t == "quiz":
            fields.append(FormField(("title",), "text", "Quiz title", c.get("title", "")))
            for i, question in enumerate(c.get("questions") or []):
                options = question.get("options") or []
                fields.append(FormField(("questions", i, "question"), "text",
                                        f"Question {i + 1}", question.get("question", "")))
                for j, option in enumerate(options):
                    fields.append(FormField(("questions", i, "options", j), "text",
                                            f"Question {i + 1} option {j + 1}", option))
                fields.append(FormField(("questions", i, "correct"), "select", f"Question {i + 1} answer",
                                        question.get("correct", 0), choices=list(range(len(options)))))

        fields.extend(self._auxiliary_fields())
        return fields

    def _auxiliary_fields(self) -> List[FormField]:
        c = self.content
        fields = []
        for i, alert in enumerate(c.get("alerts") or []):
            fields.append(FormField(("alerts", i, "type"), "select", f"Alert {i + 1} type",
                                    alert.get("type", DEFAULT_ALERT_TYPE), choices=list(ALERT_TYPES)))
            fields.append(FormField(("alerts", i, "title"), "text", f"Alert {i + 1} title", alert.get("title", "")))
            fields.append(FormField(("alerts", i, "message"), "textarea",
                                    f"Alert {i + 1} message", alert.get("message", "")))
        for i, note in enumerate(c.get("notes") or []):
            fields.append(FormField(("notes", i), "textarea", f"Note {i + 1}", note))
        for key, label in (("infoBoxes", "Info box"), ("tips", "Tip")):
            for i, box in enumerate(c.get(key) or []):
                fields.append(FormField((key, i, "title"), "text", f"{label} {i + 1} title", box.get("title", "")))
                fields.append(FormField((key, i, "content"), "textarea",
                                        f"{label} {i + 1} content", box.get("content", "")))
        return fields

    # -------------------------------------------------
    # Mutations
    # -------------------------------------------------

    def set_value(self, path: Path, value: Any) -> None:
        """Write a control value back into the content at ``path``."""
        parts = _parse_path(path)

        if parts == ("headers",) and isinstance(value, str):
            return self.set_headers_text(value)
        if parts == ("rows",) and isinstance(value, str):
            return self.set_rows_text(value)

        target: Any = self.content
        for part in parts[:-1]:
            try:
                target = target[part]
            except (KeyError, IndexError, TypeError) as exc:
                raise ValueError(f"Invalid field path: {'.'.join(map(str, parts))}") from exc

        last = parts[-1]
        if isinstance(target, list):
            if not isinstance(last, int) or not 0 <= last < len(target):
                raise ValueError(f"Invalid field path: {'.'.join(map(str, parts))}")
        elif not isinstance(target, dict):
            raise ValueError(f"Invalid field path: {'.'.join(map(str, parts))}")

        target[last] = value
        self.dirty = True

    def _collection(self, name: str) -> List[Any]:
        allowed = COLLECTIONS.get(self.container_type, ()) + AUXILIARY_FIELDS
        if name not in allowed:
            raise ValueError(f"{self.container_type} content has no '{name}' collection")

        collection = self.content.get(name)
        if not isinstance(collection, list):
            collection = []
            self.content[name] = collection
        return collection

    def _template(self, name: str, size: int) -> Any:
        if name in ("items", "notes"):
            return ""
        if name == "steps":
            return {"icon": "📝", "title": "", "description": ""}
        if name == "tabs":
            return {"title": f"Tab {size + 1}", "content": ""}
        if name == "questions":
            return {"question": "", "options": ["", ""], "correct": 0}
        if name == "rows":
            return [""] * max(len(self.content.get("headers") or []), 1)
        if name == "contacts":
            return {"icon": "📞", "title": ""}
        if name == "alerts":
            return {"type": DEFAULT_ALERT_TYPE, "title": "", "message": ""}
        if name == "sections":
            return {"title": "", "progression": ""}
        return {"title": "", "content": ""}

    def add_element(self, collection: str, value: Any = None) -> int:
        """Append an element (a blank template unless given); returns its index."""
        items = self._collection(collection)
        items.append(self._template(collection, len(items)) if value is None else copy.deepcopy(value))
        self.dirty = True
        return len(items) - 1

    def remove_element(self, collection: str, index: int) -> Any:
        items = self._collection(collection)
        if not 0 <= index < len(items):
            raise ValueError(f"No element {index} in {collection}")
        self.dirty = True
        return items.pop(index)

    def move_element(self, collection: str, index: int, direction: int) -> bool:
        """Swap an element with its neighbour. Returns False at either end."""
        items = self._collection(collection)
        target = index + (1 if direction > 0 else -1)
        if not 0 <= index < len(items) or not 0 <= target < len(items):
            return False
        items[index], items[target] = items[target], items[index]
        self.dirty = True
        return True

    # Quiz

    def _question(self, index: int) -> Dict[str, Any]:
        if self.container_type != "quiz":
            raise ValueError("Only quiz content has questions")
        questions = self.content.get("questions") or []
        if not 0 <= index < len(questions):
            raise ValueError(f"No question {index}")
        question = questions[index]
        if not isinstance(question.get("options"), list):
            question["options"] = []
        return question

    def add_option(self, question_index: int, text: str = "") -> int:
        question = self._question(question_index)
        question["options"].append(text)
        self.dirty = True
        return len(question["options"]) - 1

    def remove_option(self, question_index: int, option_index: int) -> None:
        question = self._question(question_index)
        options = question["options"]
        if not 0 <= option_index < len(options):
            raise ValueError(f"No option {option_index}")
        options.pop(option_index)

        correct = question.get("correct", 0)
        if option_index < correct:
            question["correct"] = correct - 1
        elif correct >= len(options):
            question["correct"] = max(len(options) - 1, 0)
        self.dirty = True

    def set_correct(self, question_index: int, option_index: int) -> None:
        question = self._question(question_index)
        if not 0 <= option_index < len(question["options"]):
            raise ValueError(f"No option {option_index}")
        question["correct"] = option_index
        self.dirty = True

    # Grid

    def set_headers_text(self, text: str) -> None:
        text = text or ""
        self.content["headers"] = [h.strip() for h in text.split(",")] if text.strip() else []
        self.dirty = True

    def set_rows_text(self, text: str) -> None:
        self.content["rows"] = [split_grid_row(line) for line in (text or "").splitlines() if line.strip()]
        self.dirty = True

    # -------------------------------------------------
    # Type switching
    # -------------------------------------------------

    def switch_type(self, container_type: str) -> None:
        """Change type. The current content is discarded for the new type's empty shape."""
        if not is_container_type(container_type):
            raise ValueError(f"Unknown container type: {container_type}")
        self.container_type = container_type
        self.content = empty_content(container_type)
        self.dirty = True

    def suggested_type(self) -> Optional[str]:
        """A better-fitting type for the current content, if one stands out."""
        detected = detect_container_type(self.content)
        if detected and detected != self.container_type:
            return detected
        return None

    def accept_suggestion(self) -> bool:
        """Adopt the suggested type, reshaping the content for it."""
        suggestion = self.suggested_type()
        if suggestion is None:
            return False
        self.content, self.container_type = normalize_content(self.content, suggestion)
        self.dirty = True
        return True

    # -------------------------------------------------
    # Persistence
    # -------------------------------------------------

    def payload(self) -> Dict[str, Any]:
        return {
            **self.item,
            "container_type": self.container_type,
            "content": copy.deepcopy(self.content),
        }

    def save(self, store: ContentStore) -> Dict[str, Any]:
        """Create the item if it was never saved, otherwise update it."""
        if self.item_id is None:
            saved = store.create(self.payload())
            self.item_id = saved.get("id")
        else:
            saved = store.update(self.item_id, self.payload())
        self.dirty = False
        return saved

    def delete(self, store: ContentStore) -> None:
        if self.item_id is None:
            raise ValueError("Content item was never saved")
        store.delete(self.item_id)
        self.item_id = None
