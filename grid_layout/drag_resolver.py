"""Turns a drag gesture into a new layout and a drag proxy rectangle."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from grid_layout.coordinate_transform import resolve_row_height, screen_x_to_grid_x, screen_y_to_grid_y
from grid_layout.grid_definitions import (
    CompactType,
    DraggingData,
    GridConfig,
    GridGestureResult,
    ItemRect,
    find_layout_item,
)
from grid_layout.layout_engine import DefaultLayoutEngine, LayoutEngine

_LOGGER_NAME = "ModernGrid.Layout"
_DRAG_LOGGER = logging.getLogger(_LOGGER_NAME)


def grid_item_dragging(
    item_id: str,
    config: GridConfig,
    compact_type: CompactType,
    dragging_data: DraggingData,
    *,
    engine: Optional[LayoutEngine] = None,
) -> GridGestureResult:
    """Resolve one pointer move of a drag gesture.

    The returned layout is cell aligned; ``dragged_item_pos`` follows the
    pointer continuously so the proxy does not jump between cells.
    """

    engine = engine or DefaultLayoutEngine()
    pointer_down = dragging_data.pointer_down
    pointer = dragging_data.pointer_drag
    grid_rect = dragging_data.grid_rect
    elem_rect = dragging_data.drag_elem_rect
    scroll = dragging_data.scroll_difference

    previous = find_layout_item(config.layout, item_id)

    offset_x = pointer_down.x - elem_rect.left
    offset_y = pointer_down.y - elem_rect.top

    # Grid origin shifted by whatever the page scrolled since the gesture began.
    grid_left = grid_rect.left + scroll.left
    grid_top = grid_rect.top + scroll.top
    grid_rel_x = pointer.x - grid_left - offset_x
    grid_rel_y = pointer.y - grid_top - offset_y

    row_height = resolve_row_height(config, grid_rect)

    x = max(0, screen_x_to_grid_x(grid_rel_x, config.cols, grid_rect.width, config.gap))
    y = max(0, screen_y_to_grid_y(grid_rel_y, row_height, config.gap))
    if x + previous.w > config.cols:
        # move_element does not correct overflow itself.
        x = max(0, config.cols - previous.w)
    candidate = replace(previous, x=x, y=y)
    _DRAG_LOGGER.debug(
        "Drag %s: rel=(%.1f,%.1f) row_height=%.2f -> cell=[%d,%d]",
        item_id,
        grid_rel_x,
        grid_rel_y,
        row_height,
        candidate.x,
        candidate.y,
    )

    layout = engine.move_element(
        config.layout,
        previous,
        candidate.x,
        candidate.y,
        True,
        config.prevent_collision,
        compact_type,
        config.cols,
        config.enable_swap,
    )
    layout = engine.compact(layout, compact_type, config.cols)

    return GridGestureResult(
        layout=layout,
        dragged_item_pos=ItemRect(
            top=grid_rel_y,
            left=grid_rel_x,
            width=elem_rect.width,
            height=elem_rect.height,
        ),
    )
