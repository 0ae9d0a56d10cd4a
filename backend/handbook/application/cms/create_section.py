from typing import Any, Dict
from werkzeug.exceptions import Conflict
from handbook.extensions import db
from handbook.models.section import Section
from handbook.domain.invariants.section import assert_section
from handbook.utils.order import next_order_index
from handbook.utils.transaction import transactional


def create_section(*, data: Dict[str, Any]) -> Section:
    """
    Create a section.

    Edge cases handled:
    - Missing name
    - Duplicate name (the name doubles as the URL slug)
    - No order_index given: appended after the last section
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ValueError("Section name is required")

    if Section.query.filter_by(name=name).first():
        raise Conflict(f"A section named '{name}' already exists")

    section = Section()
    section.name = name
    section.description = data.get("description")
    section.emoji = data.get("emoji")

    with transactional():
        order_index = data.get("order_index")
        section.order_index = (
            int(order_index) if order_index is not None
            else next_order_index(Section.order_index)
        )

        assert_section(section)
        db.session.add(section)

    return section
