"""Turns a resize gesture into a new layout and a resize proxy rectangle."""
from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Optional

from grid_layout.coordinate_transform import (
    resolve_row_height,
    screen_height_to_grid_height,
    screen_width_to_grid_width,
)
from grid_layout.grid_definitions import (
    CompactType,
    DraggingData,
    GridConfig,
    GridGestureResult,
    ItemRect,
    Layout,
    LayoutItem,
    find_layout_item,
)
from grid_layout.layout_engine import DefaultLayoutEngine, LayoutEngine
from grid_layout.resize_limits import get_resize_limits, limit_number_within_range

_LOGGER_NAME = "ModernGrid.Layout"
_RESIZE_LOGGER = logging.getLogger(_LOGGER_NAME)


class ShrinkDimension(str, Enum):
    W = "w"
    H = "h"


def next_shrink_dimension(item: LayoutItem, last_shrunk: Optional[ShrinkDimension]) -> ShrinkDimension:
    """Pick the dimension to shrink next; a dimension at 1 leaves the rotation."""

    if item.h <= 1:
        return ShrinkDimension.W
    if item.w <= 1:
        return ShrinkDimension.H
    return ShrinkDimension.H if last_shrunk is ShrinkDimension.W else ShrinkDimension.W


def shrink_to_avoid_collisions(layout: Layout, item: LayoutItem, engine: LayoutEngine) -> LayoutItem:
    """Shrink ``item`` until it no longer overlaps any other item of ``layout``.

    Dimensions shrink alternately one cell at a time. Once free, the
    dimension that was not shrunk last is restored to its requested size and
    shrunk alone, so a collision on one axis does not cost the other axis.
    """

    max_w = item.w
    max_h = item.h
    last_shrunk: Optional[ShrinkDimension] = None
    steps = 0

    colliding = engine.collision_probe(layout, item)
    while colliding:
        if item.w <= 1 and item.h <= 1:
            _RESIZE_LOGGER.debug("Grid item %s still collides at 1x1, leaving it to compaction", item.id)
            break
        last_shrunk = next_shrink_dimension(item, last_shrunk)
        if last_shrunk is ShrinkDimension.W:
            item = replace(item, w=item.w - 1)
        else:
            item = replace(item, h=item.h - 1)
        steps += 1
        colliding = engine.collision_probe(layout, item)

    if last_shrunk is ShrinkDimension.W:
        item = replace(item, h=max_h)
        while item.h > 1 and engine.collision_probe(layout, item):
            item = replace(item, h=item.h - 1)
            steps += 1
    elif last_shrunk is ShrinkDimension.H:
        item = replace(item, w=max_w)
        while item.w > 1 and engine.collision_probe(layout, item):
            item = replace(item, w=item.w - 1)
            steps += 1

    if steps:
        _RESIZE_LOGGER.debug(
            "Collision shrink %s: %dx%d -> %dx%d in %d steps",
            item.id,
            max_w,
            max_h,
            item.w,
            item.h,
            steps,
        )
    return item


def grid_item_resizing(
    item_id: str,
    config: GridConfig,
    compact_type: CompactType,
    dragging_data: DraggingData,
    *,
    min_w: Optional[int] = None,
    max_w: Optional[float] = None,
    min_h: Optional[int] = None,
    max_h: Optional[float] = None,
    engine: Optional[LayoutEngine] = None,
) -> GridGestureResult:
    """Resolve one pointer move of a resize gesture.

    ``min_w``/``max_w``/``min_h``/``max_h`` are the live bounds of the item
    being resized; when omitted the layout item's own bounds apply.
    """

    engine = engine or DefaultLayoutEngine()
    pointer_down = dragging_data.pointer_down
    pointer = dragging_data.pointer_drag
    grid_rect = dragging_data.grid_rect
    elem_rect = dragging_data.drag_elem_rect
    scroll = dragging_data.scroll_difference

    # Distance from the pointer-down point to the element's bottom-right edge.
    resize_offset_x = elem_rect.width - (pointer_down.x - elem_rect.left)
    resize_offset_y = elem_rect.height - (pointer_down.y - elem_rect.top)

    previous = find_layout_item(config.layout, item_id)

    width = pointer.x + resize_offset_x - (elem_rect.left + scroll.left)
    height = pointer.y + resize_offset_y - (elem_rect.top + scroll.top)

    row_height = resolve_row_height(config, grid_rect)
    limits = get_resize_limits(previous, grid_rect, row_height, config.cols, config.gap)
    height = limit_number_within_range(height, limits.min_height, limits.max_height)
    width = limit_number_within_range(width, limits.min_width, limits.max_width)

    w = screen_width_to_grid_width(width, config.cols, grid_rect.width, config.gap)
    h = screen_height_to_grid_height(height, row_height, config.gap)
    w = int(limit_number_within_range(
        w,
        previous.min_w if min_w is None else min_w,
        previous.max_w if max_w is None else max_w,
    ))
    h = int(limit_number_within_range(
        h,
        previous.min_h if min_h is None else min_h,
        previous.max_h if max_h is None else max_h,
    ))
    if previous.x + w > config.cols:
        # Width yields to position while resizing.
        w = max(1, config.cols - previous.x)
    candidate = replace(previous, w=w, h=h)
    _RESIZE_LOGGER.debug(
        "Resize %s: size=(%.1f,%.1f) row_height=%.2f -> span=%dx%d",
        item_id,
        width,
        height,
        row_height,
        candidate.w,
        candidate.h,
    )

    if config.prevent_collision:
        candidate = shrink_to_avoid_collisions(config.layout, candidate, engine)

    layout = tuple(candidate if item.id == item_id else item for item in config.layout)
    return GridGestureResult(
        layout=engine.compact(layout, compact_type, config.cols),
        dragged_item_pos=ItemRect(
            top=elem_rect.top - grid_rect.top,
            left=elem_rect.left - grid_rect.left,
            width=width,
            height=height,
        ),
    )
