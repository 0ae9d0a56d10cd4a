def normalize_section(section, content_count=None):
    data = {
        "id": section.id,
        "name": section.name,
        "slug": section.slug,
        "description": section.description,
        "emoji": section.emoji,
        "order_index": section.order_index,
        "created_at": section.created_at.isoformat() if section.created_at else None,
        "updated_at": section.updated_at.isoformat() if section.updated_at else None,
    }

    if content_count is not None:
        data["content_count"] = content_count

    return data
