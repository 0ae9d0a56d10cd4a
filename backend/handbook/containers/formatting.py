# handbook/containers/formatting.py
import re

from markupsafe import Markup, escape

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_H2_RE = re.compile(r"^## (.*)$", re.MULTILINE)
_H3_RE = re.compile(r"^### (.*)$", re.MULTILINE)
_BULLET_RE = re.compile(r"^• (.*)$", re.MULTILINE)
_NUMBERED_RE = re.compile(r"^(\d+)\. (.*)$", re.MULTILINE)
_RULE_RE = re.compile(r"^---$", re.MULTILINE)


def format_rich_text(text) -> Markup:
    """
    Convert the editor's markdown-like markup to HTML.

    Supports **bold**, *italic*, ``##``/``###`` headings, ``•`` and ``1.``
    list lines, ``---`` rules and line breaks. Input is escaped first.
    """
    if not text:
        return Markup("")

    html = str(escape(text))
    html = _BOLD_RE.sub(r"<strong>\1</strong>", html)
    html = _ITALIC_RE.sub(r"<em>\1</em>", html)
    html = _H2_RE.sub(r"<h2>\1</h2>", html)
    html = _H3_RE.sub(r"<h3>\1</h3>", html)
    html = _BULLET_RE.sub(r"<li>\1</li>", html)
    html = _NUMBERED_RE.sub(r"<li>\2</li>", html)
    html = _RULE_RE.sub("<hr>", html)
    html = html.replace("\n", "<br>")
    return Markup(html)
