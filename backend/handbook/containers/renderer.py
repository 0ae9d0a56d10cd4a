# handbook/containers/renderer.py
"""
Container rendering.

Pure functions from ``(container_type, content)`` to a display tree of plain
dict nodes::

    {"kind": "paragraph", "text": "...", "class": "...", "children": [...]}

``to_html`` serializes a tree. Nothing here mutates its input or raises on
malformed content: missing fields are omitted, and a body with nothing to show
becomes a visible placeholder.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from markupsafe import Markup, escape

from .formatting import format_rich_text
from .normalizer import content_is_minimal, flatten_text, split_grid_rows, split_headers
from .schema import ALERT_TYPES, DEFAULT_ALERT_TYPE, is_container_type

logger = logging.getLogger(__name__)

NO_CONTENT = "No content available"
NO_TABS = "No tabs data available."
NO_CONTAINERS = "No containers found."

Node = Dict[str, Any]


def _node(kind: str, text: Optional[str] = None, children: Optional[List[Node]] = None,
          css: Optional[str] = None, **attrs: Any) -> Node:
    node: Node = {"kind": kind}
    if text is not None:
        node["text"] = text
    if css:
        node["class"] = css
    if attrs:
        node["attrs"] = attrs
    node["children"] = children or []
    return node


def _placeholder(text: str = NO_CONTENT) -> Node:
    return _node("placeholder", text, css="placeholder")


def _str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return flatten_text(value)
    return "" if value is None else str(value)


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_mapping(content: Any) -> Dict[str, Any]:
    if isinstance(content, dict):
        return content
    if isinstance(content, str) and content:
        return {"text": content}
    return {}


# -------------------------------------------------
# Per-type bodies
# -------------------------------------------------

def _render_procedure(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
    steps = _list(content.get("steps")) or _list(content.get("items"))

    children = []
    for step in steps:
        if isinstance(step, str):
            children.append(_node("step", children=[_node("heading", step)]))
            continue
        if not isinstance(step, dict):
            continue

        parts = []
        if step.get("icon"):
            parts.append(_node("icon", _str(step["icon"])))
        if step.get("title"):
            parts.append(_node("heading", _str(step["title"])))
        if step.get("description"):
            parts.append(_node("paragraph", _str(step["description"])))
        if step.get("price"):
            parts.append(_node("paragraph", _str(step["price"]), css="price"))
        children.append(_node("step", children=parts))

    if not children:
        return _placeholder()
    return _node("steps", children=children, css="procedure")


def _render_list(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
    items = [_node("list_item", _str(item)) for item in _list(content.get("items"))]
    if not items:
        return _placeholder()
    return _node("list", children=items)


def _render_grid(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
    headers = split_headers(content.get("headers"))
    rows = split_grid_rows(content.get("rows"))
    if not headers and not rows:
        return _placeholder()

    children = []
    if headers:
        head_row = _node("row", children=[_node("header_cell", h) for h in headers])
        children.append(_node("table_head", children=[head_row]))

    body = [
        _node(
            "row",
            children=[_node("cell", cell) for cell in cells],
            css="even" if index % 2 == 0 else "odd",
        )
        for index, cells in enumerate(rows)
    ]
    children.append(_node("table_body", children=body))
    return _node("table", children=children, css="grid")


def _render_tabs(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
    tabs = _list(content.get("tabs"))
    if not tabs:
        return _placeholder(NO_TABS)

    active = active_tab_index(state, len(tabs))

    buttons = []
    for index, tab in enumerate(tabs):
        title = _str(tab.get("title")) if isinstance(tab, dict) else ""
        buttons.append(
            _node(
                "tab",
                title or f"Tab {index + 1}",
                css="tab active" if index == active else "tab",
                index=index,
                active=index == active,
            )
        )

    current = tabs[active]
    body_text = _str(current.get("content")) if isinstance(current, dict) else _str(current)

    return _node(
        "tabs",
        children=[
            _node("tab_bar", children=buttons),
            _node("rich_text", body_text or NO_CONTENT, css="tab-panel"),
        ],
        active_tab=active,
    )


def _alert_box(variant: str, content: Dict[str, Any]) -> List[Node]:
    parts = []
    if content.get("title"):
        parts.append(_node("heading", _str(content["title"])))
    if content.get("message"):
        parts.append(_node("paragraph", _str(content["message"])))
    return parts


def _render_alert(variant: str) -> Callable[[Dict[str, Any], Dict[str, Any]], Node]:
    def render(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
        parts = _alert_box(variant, content)
        if not parts:
            return _placeholder()
        return _node("block", children=parts, css=f"alert alert-{variant}")
    return render


def _render_danger(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
    parts = _alert_box("danger", content)

    if content.get("warning"):
        parts.append(_node("paragraph", _str(content["warning"]), css="warning"))

    contacts = [
        _node("list_item", children=[
            _node("icon", _str(contact.get("icon"))),
            _node("paragraph", _str(contact.get("title"))),
        ])
        for contact in _list(content.get("contacts"))
        if isinstance(contact, dict)
    ]
    if contacts:
        parts.append(_node("list", children=contacts, css="contacts"))

    if not parts:
        return _placeholder()
    return _node("block", children=parts, css="alert alert-danger")


def _render_quiz(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
    questions = [q for q in _list(content.get("questions")) if isinstance(q, dict)]
    if not questions:
        return _placeholder()

    children = []
    if content.get("title"):
        children.append(_node("heading", _str(content["title"])))

    for index, question in enumerate(questions):
        options = [
            _node("option", _str(option), question=index, value=option_index)
            for option_index, option in enumerate(_list(question.get("options")))
        ]
        children.append(
            _node("block", css="question", children=[
                _node("paragraph", _str(question.get("question"))),
                _node("options", children=options),
            ])
        )
    return _node("block", children=children, css="quiz")


def _render_text(content: Dict[str, Any], state: Dict[str, Any]) -> Node:
    children = []
    sections = [s for s in _list(content.get("sections")) if isinstance(s, dict)]

    if content.get("text"):
        children.append(_node("rich_text", _str(content["text"])))
    elif sections:
        for section in sections:
            parts = [
                _node("heading", _str(section.get("title"))),
                _node("paragraph", _str(section.get("progression"))),
            ]
            if section.get("advanced"):
                parts.append(_node("paragraph", f"Advanced: {_str(section['advanced'])}"))
            if section.get("alternate"):
                parts.append(_node("paragraph", f"Alternate: {_str(section['alternate'])}"))
            children.append(_node("block", children=parts, css="text-section"))
    else:
        children.append(_placeholder())

    if content.get("note"):
        children.append(_node("block", css="callout note", children=[
            _node("paragraph", _str(content["note"])),
        ]))

    return _node("block", children=children, css="text")


_RENDERERS: Dict[str, Callable[[Dict[str, Any], Dict[str, Any]], Node]] = {
    "procedure": _render_procedure,
    "list": _render_list,
    "grid": _render_grid,
    "tabs": _render_tabs,
    "danger": _render_danger,
    "warning": _render_alert("warning"),
    "success": _render_alert("success"),
    "quiz": _render_quiz,
    "text": _render_text,
}


# -------------------------------------------------
# Cross-cutting blocks
# -------------------------------------------------

def _render_alerts(content: Dict[str, Any]) -> List[Node]:
    nodes = []
    for alert in _list(content.get("alerts")):
        if not isinstance(alert, dict):
            continue
        variant = alert.get("type")
        if variant not in ALERT_TYPES:
            variant = DEFAULT_ALERT_TYPE
        nodes.append(_node("block", children=_alert_box(variant, alert), css=f"alert alert-{variant}"))
    return nodes


def _render_additional(content: Dict[str, Any]) -> List[Node]:
    nodes = []

    for note in _list(content.get("notes")):
        note = _str(note)
        if note.strip():
            nodes.append(_node("block", css="callout note", children=[
                _node("paragraph", f"Note: {note}"),
            ]))

    for css, prefix, key in (("info-box", "", "infoBoxes"), ("tip", "💡 ", "tips")):
        for box in _list(content.get(key)):
            if not isinstance(box, dict) or not (box.get("title") or box.get("content")):
                continue
            parts = []
            if box.get("title"):
                parts.append(_node("heading", f"{prefix}{_str(box['title'])}"))
            if box.get("content"):
                parts.append(_node("paragraph", _str(box["content"])))
            nodes.append(_node("block", children=parts, css=css))

    return nodes


# -------------------------------------------------
# Public API
# -------------------------------------------------

def active_tab_index(state: Optional[Dict[str, Any]], tab_count: int) -> int:
    """The selected tab, clamped into range. Defaults to the first tab."""
    try:
        index = int((state or {}).get("active_tab", 0))
    except (TypeError, ValueError):
        index = 0
    if tab_count <= 0:
        return 0
    return min(max(index, 0), tab_count - 1)


def select_tab(state: Optional[Dict[str, Any]], index: int) -> Dict[str, Any]:
    """Switch the active tab. Pure: returns a new state, refetches nothing."""
    return {**(state or {}), "active_tab": index}


def render_content(
    container_type: Optional[str],
    content: Any,
    state: Optional[Dict[str, Any]] = None,
) -> Node:
    """
    Render one container.

    Unknown types render with the text rules. Alerts go before the body;
    notes, info boxes and tips after it.
    """
    container_type = container_type if is_container_type(container_type) else "text"
    data = _as_mapping(content)

    try:
        body = _RENDERERS[container_type](data, state or {})
        children = _render_alerts(data) + [body] + _render_additional(data)
    except (TypeError, ValueError, AttributeError, KeyError, IndexError) as exc:
        logger.warning("Rendering %s container failed: %s", container_type, exc)
        children = [_placeholder()]

    return _node("container", children=children, css=f"container container-{container_type}",
                 type=container_type)


def render_instances(
    instances: Iterable[Dict[str, Any]],
    states: Optional[Dict[Any, Dict[str, Any]]] = None,
) -> Node:
    """Render stacked container instances in ``order_index`` order."""
    ordered = sorted(
        (i for i in instances if isinstance(i, dict)),
        key=lambda i: i.get("order_index") or 0,
    )
    if not ordered:
        return _node("stack", children=[_placeholder(NO_CONTAINERS)], css="containers")

    states = states or {}
    children = []
    for instance in ordered:
        container_type = instance.get("container_type")
        if not is_container_type(container_type):
            try:
                dump = json.dumps(instance.get("content"), indent=2, default=str)
            except (TypeError, ValueError):
                dump = ""
            children.append(_node("block", css="unknown", children=[
                _placeholder(f"Unknown container type: {container_type}"),
                _node("pre", dump),
            ]))
            continue
        children.append(
            render_content(container_type, instance.get("content"), states.get(instance.get("id")))
        )

    return _node("stack", children=children, css="containers")


def render_item(
    item: Dict[str, Any],
    fetch_containers: Optional[Callable[[Any], Iterable[Dict[str, Any]]]] = None,
    state: Optional[Dict[str, Any]] = None,
) -> Node:
    """
    Render a content item.

    Items whose own content is empty or minimal keep their body in container
    instances; those are fetched through ``fetch_containers(item_id)``.
    """
    content = item.get("content")

    if content_is_minimal(content):
        instances = fetch_containers(item.get("id")) if fetch_containers else []
        return render_instances(instances or [])

    return render_content(item.get("container_type"), content, state)


# -------------------------------------------------
# HTML
# -------------------------------------------------

_TAGS = {
    "container": "div",
    "stack": "div",
    "block": "div",
    "heading": "h4",
    "paragraph": "p",
    "rich_text": "div",
    "placeholder": "p",
    "list": "ul",
    "list_item": "li",
    "steps": "ol",
    "step": "li",
    "icon": "span",
    "table": "table",
    "table_head": "thead",
    "table_body": "tbody",
    "row": "tr",
    "header_cell": "th",
    "cell": "td",
    "tabs": "div",
    "tab_bar": "nav",
    "tab": "button",
    "options": "ul",
    "option": "li",
    "pre": "pre",
}


def to_html(node: Node) -> Markup:
    kind = node.get("kind", "block")
    tag = _TAGS.get(kind, "div")

    attrs = ""
    if node.get("class"):
        attrs += f' class="{escape(node["class"])}"'
    for key, value in (node.get("attrs") or {}).items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        attrs += f' data-{escape(key.replace("_", "-"))}="{escape(value)}"'

    text = node.get("text") or ""
    inner = format_rich_text(text) if kind == "rich_text" else escape(text)
    inner += Markup("").join(to_html(child) for child in node.get("children", []))

    return Markup(f"<{tag}{attrs}>{inner}</{tag}>")
