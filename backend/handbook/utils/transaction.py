from contextlib import contextmanager
from flask import current_app
from handbook.extensions import db

@contextmanager
def transactional():
    """
    Commit on success, roll back and re-raise on any error.

    Validation failures raised inside the block (InvariantViolation,
    ValueError, Conflict) leave the session clean for the error handler.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug("Rolled back transaction: %s", exc)
        raise
