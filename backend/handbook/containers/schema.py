# handbook/containers/schema.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, TypedDict


class ContainerType(str, Enum):
    TEXT = "text"
    LIST = "list"
    PROCEDURE = "procedure"
    WARNING = "warning"
    SUCCESS = "success"
    DANGER = "danger"
    QUIZ = "quiz"
    GRID = "grid"
    TABS = "tabs"


CONTAINER_TYPES = tuple(t.value for t in ContainerType)

# title/message boxes
ALERT_CONTAINER_TYPES = {"warning", "success", "danger"}

# Types accepted in a legacy ``content.type`` tag; ``info`` maps to warning.
LEGACY_ALERT_TAGS = {"warning", "success", "danger", "info"}

# Alert styles for the cross-cutting ``alerts`` block.
ALERT_TYPES = ("warning", "danger", "success")
DEFAULT_ALERT_TYPE = "warning"

# Cross-cutting fields any content object may carry regardless of type.
AUXILIARY_FIELDS = ("alerts", "notes", "infoBoxes", "tips")

CANONICAL_FIELDS: Dict[str, tuple] = {
    "text": ("text",),
    "list": ("items",),
    "procedure": ("steps",),
    "grid": ("headers", "rows"),
    "tabs": ("tabs",),
    "warning": ("title", "message"),
    "success": ("title", "message"),
    "danger": ("title", "message"),
    "quiz": ("title", "questions"),
}

# Optional fields kept by the shaper when present.
OPTIONAL_FIELDS: Dict[str, tuple] = {
    "text": ("note", "sections"),
    "danger": ("warning", "contacts"),
}

CONTAINER_LABELS: Dict[str, Dict[str, str]] = {
    "text": {"name": "Text Block", "description": "Simple text content with formatting"},
    "list": {"name": "Ordered List", "description": "Numbered or bulleted list items"},
    "procedure": {"name": "Procedure Steps", "description": "Step-by-step procedures with icons"},
    "warning": {"name": "Warning Box", "description": "Important warnings and notices"},
    "success": {"name": "Success Box", "description": "Success messages and confirmations"},
    "danger": {"name": "Danger Box", "description": "Critical alerts and errors"},
    "quiz": {"name": "Quiz Container", "description": "Interactive quiz with questions and answers"},
    "grid": {"name": "Data Grid", "description": "Tabular data display"},
    "tabs": {"name": "Tab Container", "description": "Tabbed content organization"},
}


# -------------------------------------------------
# Canonical shapes
# -------------------------------------------------

class TextSection(TypedDict, total=False):
    title: str
    progression: str
    advanced: str
    alternate: str


class TextContent(TypedDict, total=False):
    text: str
    note: str
    sections: List[TextSection]


class ListContent(TypedDict):
    items: List[str]


class ProcedureStep(TypedDict, total=False):
    icon: str
    title: str
    description: str
    price: str


class ProcedureContent(TypedDict):
    steps: List[ProcedureStep]


class GridContent(TypedDict):
    headers: List[str]
    rows: List[List[str]]


class Tab(TypedDict):
    title: str
    content: str


class TabsContent(TypedDict):
    tabs: List[Tab]


class Contact(TypedDict):
    icon: str
    title: str


class AlertContent(TypedDict, total=False):
    title: str
    message: str
    warning: str
    contacts: List[Contact]


class QuizQuestion(TypedDict):
    question: str
    options: List[str]
    correct: int


class QuizContent(TypedDict):
    title: str
    questions: List[QuizQuestion]


def is_container_type(value: Any) -> bool:
    return isinstance(value, str) and value in CONTAINER_TYPES


def empty_content(container_type: str) -> Dict[str, Any]:
    """
    Empty canonical shape for a container type.

    Used when an editor switches type: whatever was there is discarded.
    """
    if container_type == "list":
        return {"items": []}
    if container_type == "procedure":
        return {"steps": []}
    if container_type == "grid":
        return {"headers": [], "rows": []}
    if container_type == "tabs":
        return {"tabs": []}
    if container_type in ALERT_CONTAINER_TYPES:
        return {"title": "", "message": ""}
    if container_type == "quiz":
        return {"title": "", "questions": []}
    return {"text": ""}


def default_content(container_type: str) -> Dict[str, Any]:
    """Starter template for a freshly added container instance."""
    if container_type == "list":
        return {"items": [""]}
    if container_type == "procedure":
        return {"steps": [{"icon": "📝", "title": "", "description": ""}]}
    if container_type in ALERT_CONTAINER_TYPES:
        return {"title": "", "message": ""}
    if container_type == "quiz":
        return {
            "title": "",
            "questions": [{"question": "", "options": ["", ""], "correct": 0}],
        }
    if container_type == "grid":
        return {"headers": ["Column 1", "Column 2"], "rows": [["", ""]]}
    if container_type == "tabs":
        return {"tabs": [{"title": "Tab 1", "content": ""}]}
    return {"text": ""}
