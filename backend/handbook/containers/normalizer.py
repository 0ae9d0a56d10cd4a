# handbook/containers/normalizer.py
"""
Content normalization.

Stored content is free-form JSON that drifts away from the canonical shape of
its container type (legacy imports, hand edits). ``normalize_content`` repairs
it into the canonical shape and reports which container type it belongs to.

Precedence is fixed and first match wins:

    tabs -> steps -> items -> headers/rows/table -> typed alert
         -> questions/quiz -> complex (flatten to text) -> as is
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .schema import (
    ALERT_TYPES,
    AUXILIARY_FIELDS,
    CANONICAL_FIELDS,
    DEFAULT_ALERT_TYPE,
    LEGACY_ALERT_TAGS,
    OPTIONAL_FIELDS,
    is_container_type,
)

logger = logging.getLogger(__name__)

# Lookup order when reducing an object to a single display string.
_TEXT_KEYS = ("text", "content", "message", "description", "title")


# -------------------------------------------------
# Flattening
# -------------------------------------------------

def flatten_text(value: Any) -> str:
    """
    Reduce any JSON value to a display string.

    Objects prefer ``text``, then ``content`` (recursively), then ``message``,
    ``description`` and ``title``. Arrays join their elements with newlines.
    Other objects join every non-empty extracted value with newlines.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(flatten_text(item) for item in value)
    if not isinstance(value, dict):
        return str(value)

    for key in _TEXT_KEYS:
        picked = value.get(key)
        if picked:
            return flatten_text(picked)

    extracted = (flatten_text(v) for v in value.values())
    return "\n".join(text for text in extracted if text and text.strip())


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return flatten_text(value)
    return "" if value is None else str(value)


def split_grid_row(row: Any) -> List[str]:
    """
    Normalize one grid row to a list of cells.

    ``"a, b, c"``, ``["a, b, c"]`` and ``["a", "b", "c"]`` all give
    ``["a", "b", "c"]``.
    """
    if isinstance(row, str):
        return [cell.strip() for cell in row.split(",")]

    if isinstance(row, (list, tuple)):
        cells = [_cell(cell) for cell in row]
    else:
        cells = [_cell(row)]

    # a lone cell may still hold the comma-joined form once flattened
    if len(cells) == 1 and "," in cells[0]:
        return [cell.strip() for cell in cells[0].split(",")]
    return cells


def split_grid_rows(rows: Any) -> List[List[str]]:
    if rows is None:
        return []
    if isinstance(rows, str):
        return [split_grid_row(line) for line in rows.splitlines() if line.strip()]
    return [split_grid_row(row) for row in _as_list(rows)]


def split_headers(headers: Any) -> List[str]:
    if headers is None:
        return []
    if isinstance(headers, str):
        return [h.strip() for h in headers.split(",") if h.strip()]
    return [_cell(h) for h in _as_list(headers)]


# -------------------------------------------------
# Helpers
# -------------------------------------------------

def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _main_part(content: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in content.items() if k not in AUXILIARY_FIELDS}


def has_complex_structure(content: Any) -> bool:
    """True when a (non cross-cutting) value holds nested objects."""
    if not isinstance(content, dict):
        return False

    for value in _main_part(content).values():
        if isinstance(value, list):
            if any(isinstance(item, (dict, list)) for item in value):
                return True
        elif isinstance(value, dict) and value:
            return True
    return False


def _fits(container_type: Optional[str], content: Dict[str, Any]) -> bool:
    if not is_container_type(container_type):
        return False
    keys = CANONICAL_FIELDS[container_type] + OPTIONAL_FIELDS.get(container_type, ())
    return any(key in content for key in keys)


def _coerce_object(content: Any) -> Dict[str, Any]:
    if content is None:
        return {}
    if isinstance(content, dict):
        return content
    if isinstance(content, str):
        stripped = content.strip()
        if not stripped:
            return {}
        if stripped.startswith("{"):
            try:
                parsed = json.loads(stripped)
            except ValueError:
                parsed = None
            if isinstance(parsed, dict):
                return parsed
        return {"text": content}
    if isinstance(content, list):
        return {"text": flatten_text(content)}
    return {"text": str(content)}


# -------------------------------------------------
# Shapers: raw object -> canonical fields of one type
# -------------------------------------------------

def _shape_text_section(section: Any) -> Dict[str, str]:
    if not isinstance(section, dict):
        return {"title": flatten_text(section), "progression": ""}

    shaped = {
        "title": flatten_text(section.get("title")),
        "progression": flatten_text(section.get("progression")),
    }
    for key in ("advanced", "alternate"):
        if section.get(key):
            shaped[key] = flatten_text(section[key])
    return shaped


def _shape_text(content: Dict[str, Any]) -> Dict[str, Any]:
    if "text" in content:
        text = flatten_text(content["text"])
    elif "sections" in content or "note" in content:
        text = ""
    else:
        text = flatten_text(_main_part(content))

    shaped: Dict[str, Any] = {"text": text}
    if content.get("note") is not None:
        shaped["note"] = flatten_text(content["note"])
    if content.get("sections") is not None:
        shaped["sections"] = [_shape_text_section(s) for s in _as_list(content["sections"])]
    return shaped


def _shape_list(content: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "items": [
            item if isinstance(item, str) else flatten_text(item)
            for item in _as_list(content.get("items"))
        ]
    }


def _shape_step(step: Any) -> Dict[str, str]:
    if not isinstance(step, dict):
        return {"icon": "", "title": flatten_text(step), "description": ""}

    if "description" in step:
        description = flatten_text(step["description"])
    else:
        rest = {k: v for k, v in step.items() if k not in ("icon", "title", "price")}
        description = flatten_text(rest)

    shaped = {
        "icon": flatten_text(step.get("icon")),
        "title": flatten_text(step.get("title")),
        "description": description,
    }
    if step.get("price") not in (None, ""):
        shaped["price"] = _cell(step["price"])
    return shaped


def _shape_procedure(content: Dict[str, Any]) -> Dict[str, Any]:
    return {"steps": [_shape_step(step) for step in _as_list(content.get("steps"))]}


def _shape_grid(content: Dict[str, Any]) -> Dict[str, Any]:
    table = content.get("table")
    if isinstance(table, list):
        table = {"rows": table}
    if not isinstance(table, dict):
        table = {}

    headers = content["headers"] if content.get("headers") is not None else table.get("headers")
    rows = content["rows"] if content.get("rows") is not None else table.get("rows")

    return {"headers": split_headers(headers), "rows": split_grid_rows(rows)}


def _shape_tab(tab: Any) -> Dict[str, str]:
    if not isinstance(tab, dict):
        return {"title": "", "content": flatten_text(tab)}

    if "content" in tab:
        body = flatten_text(tab["content"])
    else:
        body = flatten_text({k: v for k, v in tab.items() if k != "title"})
    return {"title": flatten_text(tab.get("title")), "content": body}


def _shape_tabs(content: Dict[str, Any]) -> Dict[str, Any]:
    return {"tabs": [_shape_tab(tab) for tab in _as_list(content.get("tabs"))]}


def _alert_message(content: Dict[str, Any]) -> str:
    if "message" in content:
        return flatten_text(content["message"])
    # Legacy alerts carried their body under text/content/description.
    rest = {
        k: v
        for k, v in _main_part(content).items()
        if k not in ("type", "title", "warning", "contacts")
    }
    return flatten_text(rest)


def _shape_alert_box(content: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": flatten_text(content.get("title")),
        "message": _alert_message(content),
    }


def _shape_danger(content: Dict[str, Any]) -> Dict[str, Any]:
    shaped = _shape_alert_box(content)
    if content.get("warning") is not None:
        shaped["warning"] = flatten_text(content["warning"])
    if content.get("contacts") is not None:
        shaped["contacts"] = [
            {"icon": flatten_text(c.get("icon")), "title": flatten_text(c.get("title"))}
            if isinstance(c, dict)
            else {"icon": "", "title": flatten_text(c)}
            for c in _as_list(content["contacts"])
        ]
    return shaped


def _shape_question(question: Any) -> Dict[str, Any]:
    if not isinstance(question, dict):
        return {"question": flatten_text(question), "options": ["", ""], "correct": 0}

    options = question.get("options") or question.get("answers") or ["", ""]
    correct = question.get("correct")
    if correct is None:
        correct = question.get("correctAnswer")

    return {
        "question": flatten_text(question.get("question") or question.get("text")),
        "options": [_cell(option) for option in _as_list(options)],
        "correct": _as_int(correct),
    }


def _shape_quiz(content: Dict[str, Any]) -> Dict[str, Any]:
    quiz = content.get("quiz")
    if isinstance(quiz, list):
        quiz = {"questions": quiz}
    if not isinstance(quiz, dict):
        quiz = {}

    questions = content.get("questions") or quiz.get("questions") or []
    return {
        "title": flatten_text(content.get("title") or quiz.get("title")),
        "questions": [_shape_question(q) for q in _as_list(questions)],
    }


_SHAPERS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "text": _shape_text,
    "list": _shape_list,
    "procedure": _shape_procedure,
    "grid": _shape_grid,
    "tabs": _shape_tabs,
    "warning": _shape_alert_box,
    "success": _shape_alert_box,
    "danger": _shape_danger,
    "quiz": _shape_quiz,
}


def _shape_alert(alert: Any) -> Dict[str, str]:
    if not isinstance(alert, dict):
        return {"type": DEFAULT_ALERT_TYPE, "title": "", "message": flatten_text(alert)}

    alert_type = alert.get("type")
    return {
        "type": alert_type if alert_type in ALERT_TYPES else DEFAULT_ALERT_TYPE,
        "title": flatten_text(alert.get("title")),
        "message": flatten_text(alert.get("message")),
    }


def _shape_box(box: Any) -> Dict[str, str]:
    if not isinstance(box, dict):
        return {"title": "", "content": flatten_text(box)}
    return {"title": flatten_text(box.get("title")), "content": flatten_text(box.get("content"))}


def _shape_auxiliary(content: Dict[str, Any]) -> Dict[str, Any]:
    extra: Dict[str, Any] = {}
    if content.get("alerts") is not None:
        extra["alerts"] = [_shape_alert(a) for a in _as_list(content["alerts"])]
    if content.get("notes") is not None:
        extra["notes"] = [flatten_text(n) for n in _as_list(content["notes"])]
    for key in ("infoBoxes", "tips"):
        if content.get(key) is not None:
            extra[key] = [_shape_box(b) for b in _as_list(content[key])]
    return extra


# -------------------------------------------------
# Classification
# -------------------------------------------------

def _classify(content: Dict[str, Any], hint: Optional[str]) -> str:
    if isinstance(content.get("tabs"), list):
        return "tabs"

    if content.get("steps") is not None:
        return "procedure"

    if content.get("items") is not None:
        return "list"

    if any(content.get(key) is not None for key in ("headers", "rows", "table")):
        return "grid"

    tag = content.get("type")
    if isinstance(tag, str) and tag in LEGACY_ALERT_TAGS:
        return "warning" if tag == "info" else tag

    if content.get("questions") is not None or content.get("quiz") is not None:
        return "quiz"

    # Content that already carries the hinted type's fields is never flattened.
    if not _fits(hint, content) and has_complex_structure(content):
        return "text"

    if not is_container_type(hint):
        return "text"

    # A hint whose fields are all missing would project the content away.
    if _main_part(content) and not _fits(hint, content):
        return "text"
    return hint


def normalize_content(
    content: Any,
    container_type: Optional[str] = None,
) -> Tuple[Dict[str, Any], str]:
    """
    Repair ``content`` into a canonical shape.

    Returns ``(content, container_type)``. ``container_type`` is a hint: it
    decides the shape only when nothing in the content points elsewhere.
    Never raises; on failure the content degrades to ``{"text": ...}``.
    """
    hint = container_type if is_container_type(container_type) else None

    try:
        raw = _coerce_object(content)
        if hint is None:
            hint = detect_container_type(raw)

        detected = _classify(raw, hint)
        shaped = _SHAPERS[detected](raw)
        shaped.update(_shape_auxiliary(raw))
        return shaped, detected

    except (TypeError, ValueError, AttributeError, RecursionError) as exc:
        logger.warning("Falling back to plain text while normalizing content: %s", exc)
        try:
            fallback = flatten_text(content)
        except RecursionError:
            fallback = ""
        return {"text": fallback}, "text"


def detect_container_type(content: Any) -> Optional[str]:
    """
    Suggest a container type from the shape of ``content``.

    Lighter than ``normalize_content``: only looks at top-level keys and never
    touches the data. Returns ``None`` when nothing stands out.
    """
    if not isinstance(content, dict) or not content:
        return None

    if isinstance(content.get("tabs"), list):
        return "tabs"
    if isinstance(content.get("steps"), list):
        return "procedure"
    if isinstance(content.get("items"), list):
        return "list"
    if content.get("headers") is not None and content.get("rows") is not None:
        return "grid"

    tag = content.get("type")
    if isinstance(tag, str) and tag in ("warning", "success", "danger"):
        return tag

    if isinstance(content.get("questions"), list):
        return "quiz"
    if content.get("title") and content.get("message"):
        return "warning"
    return None


def content_is_minimal(content: Any) -> bool:
    """
    True when an item's own content is too thin to render, meaning its body
    lives in container instances instead.
    """
    if not content:
        return True
    if not isinstance(content, dict):
        return False
    return content.get("text") == "" and not content.get("headers") and not content.get("items")


def searchable_text(container_type: str, content: Any) -> str:
    """Plain text the search index matches against."""
    if not isinstance(content, dict):
        return flatten_text(content) if container_type == "text" else ""

    if container_type == "text":
        return flatten_text(content.get("text"))

    if container_type == "list":
        return ", ".join(_cell(item) for item in _as_list(content.get("items")))

    if container_type == "tabs":
        return ", ".join(
            flatten_text(tab.get("content")) if isinstance(tab, dict) else _cell(tab)
            for tab in _as_list(content.get("tabs"))
        )

    return ""
