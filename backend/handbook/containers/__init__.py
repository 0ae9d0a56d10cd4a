"""
Typed content containers: schema, repair, rendering and editing.

This package has no Flask or database imports; persistence goes through the
store protocols in ``stores``.
"""
from .schema import (
    CONTAINER_LABELS,
    CONTAINER_TYPES,
    ContainerType,
    default_content,
    empty_content,
    is_container_type,
)
from .normalizer import (
    content_is_minimal,
    detect_container_type,
    flatten_text,
    normalize_content,
    searchable_text,
    split_grid_row,
)
from .renderer import render_content, render_instances, render_item, select_tab, to_html
from .editor import ContentDraft, FormField
from .board import BoardEntry, ContainerBoard
