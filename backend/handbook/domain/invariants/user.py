from handbook.models.user import ROLES
from .exceptions import InvariantViolation

MIN_PASSWORD_LENGTH = 6

def assert_role(role):
    if role not in ROLES:
        raise InvariantViolation(
            f"Invalid role '{role}'. Expected one of: {', '.join(ROLES)}"
        )

def assert_password(password):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvariantViolation(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

def assert_email(email):
    if not email or "@" not in email:
        raise InvariantViolation("A valid email is required")
