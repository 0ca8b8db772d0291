"""Pixel resize ranges derived from an item's cell constraints."""
from __future__ import annotations

import math
from dataclasses import dataclass

from grid_layout.coordinate_transform import column_width
from grid_layout.grid_definitions import ClientRect, LayoutItem


@dataclass(frozen=True)
class ResizeLimits:
    min_width: float
    max_width: float
    min_height: float
    max_height: float


def limit_number_within_range(num: float, min_value: float = 1, max_value: float = math.inf) -> float:
    """Clamp ``num`` into ``[min_value, max_value]``; a minimum below 1 is treated as 1."""

    floor = 1 if min_value < 1 else min_value
    return min(max(num, floor), max_value)


def _span(unit: float, cells: float, gap: float) -> float:
    return unit * cells + gap * (cells - 1)


def get_resize_limits(
    item: LayoutItem,
    grid_rect: ClientRect,
    row_height: float,
    cols: int,
    gap: float,
) -> ResizeLimits:
    """Return the pixel range the resize proxy may cover for ``item``.

    ``max_w`` is capped at ``cols`` so the proxy never grows wider than the
    grid itself; ``max_h`` has no such cap and may be infinite.
    """

    item_width = column_width(cols, grid_rect.width, gap)
    max_cols = min(item.max_w, cols)
    return ResizeLimits(
        min_width=_span(item_width, item.min_w, gap),
        max_width=_span(item_width, max_cols, gap),
        min_height=_span(row_height, item.min_h, gap),
        max_height=_span(row_height, item.max_h, gap),
    )
