from typing import Any, Dict, List
from sqlalchemy import func, or_
from handbook.containers.normalizer import searchable_text
from handbook.models.content_item import ContentItem
from handbook.models.section import Section
from handbook.utils.slug import slugify


MIN_QUERY_LENGTH = 2
SNIPPET_LENGTH = 200
# Types whose body is not indexed still get a snippet
OPAQUE_SNIPPET = "Content available"


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def snippet(text) -> str:
    text = text or ""
    if len(text) > SNIPPET_LENGTH:
        return text[:SNIPPET_LENGTH] + "..."
    return text


def search_handbook(*, query: str) -> List[Dict[str, Any]]:
    """
    Case-insensitive substring search.

    Sections match on name or description. Published content matches on title
    or on its searchable body (text, list items, tab contents). Sections come
    first, then content in order_index order.
    """
    term = (query or "").strip().lower()
    if len(term) < MIN_QUERY_LENGTH:
        return []

    pattern = _like_pattern(term)
    results: List[Dict[str, Any]] = []

    sections = Section.query.filter(
        or_(
            func.lower(Section.name).like(pattern, escape="\\"),
            func.lower(func.coalesce(Section.description, "")).like(pattern, escape="\\"),
        )
    ).order_by(Section.order_index.asc(), Section.name.asc()).all()

    for section in sections:
        results.append({
            "type": "section",
            "id": section.id,
            "title": section.name,
            "content": snippet(section.description),
            "section_name": section.name,
            "emoji": section.emoji,
            "url": f"/{slugify(section.name)}",
        })

    # Bodies live in JSON; match them in Python on the same text the snippet shows
    items = (
        ContentItem.query.join(Section)
        .filter(ContentItem.published.is_(True))
        .order_by(ContentItem.order_index.asc(), ContentItem.created_at.asc())
        .all()
    )

    for item in items:
        body = searchable_text(item.container_type, item.content)
        if term not in (item.title or "").lower() and term not in body.lower():
            continue

        results.append({
            "type": "content",
            "id": item.id,
            "title": item.title,
            "content": snippet(body) if item.container_type in ("text", "list", "tabs") else OPAQUE_SNIPPET,
            "section_name": item.section.name,
            "section_id": item.section_id,
            "emoji": item.section.emoji,
            "url": f"/{slugify(item.section.name)}#content-{item.id}",
        })

    return results
