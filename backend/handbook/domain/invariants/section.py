from .exceptions import InvariantViolation

def assert_section(section):
    if not section.name or not section.name.strip():
        raise InvariantViolation("Section name is required")

    if section.order_index is not None and section.order_index < 0:
        raise InvariantViolation(
            f"Section order_index must not be negative: {section.order_index}"
        )
