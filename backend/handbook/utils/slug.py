import re

_WHITESPACE_RE = re.compile(r"\s+")


def slugify(name):
    """Section name as it appears in a URL path: "Tips & Tricks" -> "tips-and-tricks"."""
    return _WHITESPACE_RE.sub("-", (name or "").lower()).replace("&", "and")
