from .container import normalize_container

def normalize_content_item(item, include_containers=False):
    data = {
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "emoji": item.emoji,
        "section_id": item.section_id,
        "section_name": item.section.name if item.section else None,
        "author_id": item.author_id,
        "container_type": item.container_type,
        "content": item.content if item.content is not None else {},
        "published": item.published,
        "order_index": item.order_index,
        "created_at": item.created_at.isoformat() if item.created_at else None,
        "updated_at": item.updated_at.isoformat() if item.updated_at else None,
    }

    if include_containers:
        data["containers"] = [normalize_container(c) for c in item.containers]

    return data
