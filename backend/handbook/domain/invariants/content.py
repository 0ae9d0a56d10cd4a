from handbook.containers.schema import CONTAINER_TYPES, is_container_type
from .exceptions import InvariantViolation

def assert_container_type(container_type):
    if not is_container_type(container_type):
        raise InvariantViolation(
            f"Invalid container_type '{container_type}'. "
            f"Expected one of: {', '.join(CONTAINER_TYPES)}"
        )

def assert_content_payload(content):
    # Field-level shape is repaired on read; only the JSON kind is checked on write.
    if content is not None and not isinstance(content, dict):
        raise InvariantViolation("content must be a JSON object")

def assert_content_item(item):
    if not item.title or not item.title.strip():
        raise InvariantViolation("Content title is required")

    if not item.section_id:
        raise InvariantViolation("Content must belong to a section")

    assert_container_type(item.container_type)
    assert_content_payload(item.content)

def assert_container(container):
    assert_container_type(container.container_type)
    assert_content_payload(container.content)
