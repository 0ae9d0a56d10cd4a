class InvariantViolation(Exception):
    """Raised when a domain rule is broken by the data being written."""
