from typing import Any, Dict
from werkzeug.exceptions import Conflict
from handbook.models.section import Section
from handbook.domain.invariants.section import assert_section
from handbook.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = ("name", "description", "emoji", "order_index")


def update_section(*, section_id: str, data: Dict[str, Any]) -> Section:
    """
    Update mutable fields on a section. Fields left out keep their value.
    """
    section = Section.query.filter_by(id=section_id).first_or_404(
        description="Section not found"
    )

    if "name" in data:
        name = (data.get("name") or "").strip()
        clash = Section.query.filter(Section.name == name, Section.id != section.id).first()
        if clash:
            raise Conflict(f"A section named '{name}' already exists")
        data = {**data, "name": name}

    if "order_index" in data and data["order_index"] is not None:
        data = {**data, "order_index": int(data["order_index"])}

    with transactional():
        for field in ALLOWED_UPDATE_FIELDS:
            if field in data:
                setattr(section, field, data[field])

        assert_section(section)

    return section
