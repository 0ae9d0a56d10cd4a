from typing import Optional
from werkzeug.exceptions import Conflict
from handbook.extensions import db
from handbook.models.user import User
from handbook.domain.invariants.user import assert_email, assert_password, assert_role
from handbook.utils.transaction import transactional


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def create_user(
    *,
    email: str,
    password: str,
    name: Optional[str] = None,
    role: str = "user",
) -> User:
    """
    Create an account.

    Edge cases handled:
    - Email trimmed and lower-cased before the uniqueness check
    - Password trimmed, at least 6 characters
    - Unknown role rejected
    """
    email = normalize_email(email)
    password = (password or "").strip()

    assert_email(email)
    assert_password(password)
    assert_role(role)

    if User.query.filter_by(email=email).first():
        raise Conflict("User with this email already exists")

    user = User()
    user.email = email
    user.name = (name or "").strip() or email.split("@")[0]
    user.role = role
    user.set_password(password)

    with transactional():
        db.session.add(user)

    return user


def register_user(*, email: str, password: str, name: Optional[str] = None) -> User:
    """Self-service sign-up. The role is always ``user``; promotion is an admin action."""
    return create_user(email=email, password=password, name=name, role="user")
