from typing import Optional
from flask import current_app
from handbook.models.user import User
from .register_user import normalize_email


def authenticate(*, email: str, password: str) -> Optional[User]:
    """The user owning these credentials, or None. Password is trimmed first."""
    user = User.query.filter_by(email=normalize_email(email)).first()

    if not user or not user.check_password((password or "").strip()):
        current_app.logger.info("Failed login for %s", normalize_email(email))
        return None

    return user
