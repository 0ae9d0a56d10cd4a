def normalize_user(user, content_count=None):
    data = {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }

    if content_count is not None:
        data["content_count"] = content_count

    return data
