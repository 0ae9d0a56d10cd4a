from typing import List
from handbook.models.section import Section
from handbook.utils.order import compact_order, swap_order
from handbook.utils.transaction import transactional


DIRECTIONS = {"up": -1, "down": 1}


def move_section(*, section_id: str, direction: str) -> List[Section]:
    """
    Swap a section with its neighbour in display order.

    Responsibilities:
    - one transaction for both rows (the pair never ends up half-swapped)
    - duplicate order values are compacted first so the swap is visible
    - moving past either end is a no-op

    Returns all sections in their new order.
    """
    if direction not in DIRECTIONS:
        raise ValueError("direction must be 'up' or 'down'")

    ordered = Section.query.order_by(Section.order_index.asc(), Section.name.asc()).all()
    position = next((i for i, s in enumerate(ordered) if s.id == section_id), None)
    if position is None:
        Section.query.filter_by(id=section_id).first_or_404(description="Section not found")

    target = position + DIRECTIONS[direction]

    with transactional():
        if 0 <= target < len(ordered):
            if len({s.order_index for s in ordered}) != len(ordered):
                compact_order(ordered)
            swap_order(ordered[position], ordered[target])

    return Section.query.order_by(Section.order_index.asc(), Section.name.asc()).all()
