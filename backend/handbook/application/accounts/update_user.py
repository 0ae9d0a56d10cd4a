from typing import Any, Dict
from werkzeug.exceptions import Conflict
from handbook.models.user import User
from handbook.domain.invariants.user import assert_email, assert_password, assert_role
from handbook.utils.transaction import transactional
from .register_user import normalize_email


def update_user(*, user_id: str, data: Dict[str, Any]) -> User:
    """
    Admin edit of an account. Only email, name, role and password change;
    an empty password keeps the current one.
    """
    user = User.query.filter_by(id=user_id).first_or_404(description="User not found")

    with transactional():
        if "email" in data:
            email = normalize_email(data["email"])
            assert_email(email)
            if User.query.filter(User.email == email, User.id != user.id).first():
                raise Conflict("User with this email already exists")
            user.email = email

        if "name" in data:
            user.name = (data["name"] or "").strip()

        if "role" in data:
            assert_role(data["role"])
            user.role = data["role"]

        password = (data.get("password") or "").strip()
        if password:
            assert_password(password)
            user.set_password(password)

    return user
