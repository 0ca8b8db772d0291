"""Pixel <-> grid cell conversion helpers (pure, no Qt types)."""
from __future__ import annotations

import math
from typing import Dict, Optional

from grid_layout.grid_definitions import ClientRect, GridConfig, GridItemRenderData, Layout


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""

    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def column_width(cols: int, grid_width: float, gap: float) -> float:
    return (grid_width - gap * (cols - 1)) / cols


def row_height_from_fit(layout: Layout, grid_height: float, gap: float) -> float:
    """Row height that makes the tallest column of ``layout`` fill ``grid_height``."""

    rows = 0
    for item in layout:
        rows = max(rows, max(item.y + item.h, 0))
    return (grid_height - gap * (rows - 1)) / rows


def resolve_row_height(config: GridConfig, grid_rect: Optional[ClientRect] = None) -> float:
    if not config.fits_rows:
        return float(config.row_height)
    grid_height = config.height
    if grid_height is None:
        if grid_rect is None:
            raise ValueError("fit row height needs either config.height or the grid rect")
        grid_height = grid_rect.height
    return row_height_from_fit(config.layout, grid_height, config.gap)


def screen_x_to_grid_x(pixel_x: float, cols: int, grid_width: float, gap: float) -> int:
    if cols == 1:
        # A single column has nowhere else to snap to.
        return 0
    item_width = column_width(cols, grid_width, gap)
    col_unit = (grid_width - item_width) / (cols - 1)
    return round_half_away(pixel_x / col_unit)


def screen_y_to_grid_y(pixel_y: float, row_height: float, gap: float) -> int:
    return round_half_away(pixel_y / (row_height + gap))


def screen_width_to_grid_width(pixel_width: float, cols: int, grid_width: float, gap: float) -> int:
    item_width = column_width(cols, grid_width, gap)
    # A single cell spans item_width, every extra cell adds item_width + gap.
    return round_half_away((pixel_width - item_width) / (item_width + gap)) + 1


def screen_height_to_grid_height(pixel_height: float, row_height: float, gap: float) -> int:
    return round_half_away((pixel_height - row_height) / (row_height + gap)) + 1


def grid_x_to_screen_x(x: int, cols: int, grid_width: float, gap: float) -> float:
    return x * (column_width(cols, grid_width, gap) + gap)


def grid_y_to_screen_y(y: int, row_height: float, gap: float) -> float:
    return y * (row_height + gap)


def grid_width_to_screen_width(w: int, cols: int, grid_width: float, gap: float) -> float:
    return column_width(cols, grid_width, gap) * w + gap * (w - 1)


def grid_height_to_screen_height(h: int, row_height: float, gap: float) -> float:
    return row_height * h + gap * (h - 1)


def grid_render_height(layout: Layout, row_height: float, gap: float) -> float:
    """Pixel height the grid needs to show every row of ``layout``."""

    rows = 0
    for item in layout:
        rows = max(rows, item.y + item.h)
    if rows <= 0:
        return 0.0
    return grid_height_to_screen_height(rows, row_height, gap)


def grid_item_render_data(
    layout: Layout,
    cols: int,
    grid_width: float,
    row_height: float,
    gap: float,
) -> Dict[str, GridItemRenderData]:
    render_data: Dict[str, GridItemRenderData] = {}
    for item in layout:
        render_data[item.id] = GridItemRenderData(
            id=item.id,
            top=grid_y_to_screen_y(item.y, row_height, gap),
            left=grid_x_to_screen_x(item.x, cols, grid_width, gap),
            width=grid_width_to_screen_width(item.w, cols, grid_width, gap),
            height=grid_height_to_screen_height(item.h, row_height, gap),
        )
    return render_data
