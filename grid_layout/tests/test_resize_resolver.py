from __future__ import annotations

import itertools
import math
import random

import pytest

from grid_layout.coordinate_transform import (
    grid_height_to_screen_height,
    grid_width_to_screen_width,
    grid_x_to_screen_x,
    grid_y_to_screen_y,
)
from grid_layout.grid_definitions import (
    ClientRect,
    CompactType,
    DraggingData,
    GridConfig,
    GridItemNotFoundError,
    LayoutItem,
    PointerPosition,
    ScrollDifference,
)
from grid_layout.layout_engine import DefaultLayoutEngine, collides
from grid_layout.resize_resolver import (
    ShrinkDimension,
    grid_item_resizing,
    next_shrink_dimension,
    shrink_to_avoid_collisions,
)

COLS = 12
GRID_WIDTH = 1200.0
GAP = 10.0
ROW_HEIGHT = 50.0
GRID_RECT = ClientRect(left=0.0, top=0.0, width=GRID_WIDTH, height=800.0)


def _elem_rect(item, grid_rect=GRID_RECT, cols=COLS, gap=GAP, row_height=ROW_HEIGHT):
    return ClientRect(
        left=grid_rect.left + grid_x_to_screen_x(item.x, cols, grid_rect.width, gap),
        top=grid_rect.top + grid_y_to_screen_y(item.y, row_height, gap),
        width=grid_width_to_screen_width(item.w, cols, grid_rect.width, gap),
        height=grid_height_to_screen_height(item.h, row_height, gap),
    )


def _resize_to(item, width_px, height_px, *, grid_rect=GRID_RECT, scroll=ScrollDifference(), **geometry):
    """Grab the bottom-right corner of ``item`` and drag it to the given pixel size."""
    elem = _elem_rect(item, grid_rect, **geometry)
    return DraggingData(
        pointer_down=PointerPosition(elem.left + elem.width, elem.top + elem.height),
        pointer_drag=PointerPosition(elem.left + width_px + scroll.left, elem.top + height_px + scroll.top),
        grid_rect=grid_rect,
        drag_elem_rect=elem,
        scroll_difference=scroll,
    )


def _config(layout, **overrides):
    values = {"cols": COLS, "row_height": ROW_HEIGHT, "gap": GAP, "layout": tuple(layout)}
    values.update(overrides)
    return GridConfig(**values)


def _item(layout, item_id):
    return next(item for item in layout if item.id == item_id)


def _three_cells():
    return grid_width_to_screen_width(3, COLS, GRID_WIDTH, GAP)


def test_prevent_collision_shrinks_width_back(recording_engine):
    a = LayoutItem("a", 0, 0, 2, 2)
    b = LayoutItem("b", 2, 0, 2, 2)
    config = _config([a, b], prevent_collision=True)

    result = grid_item_resizing(
        "a", config, CompactType.VERTICAL, _resize_to(a, _three_cells(), 110.0), engine=recording_engine
    )

    assert (_item(result.layout, "a").w, _item(result.layout, "a").h) == (2, 2)
    assert _item(result.layout, "b") == b
    assert recording_engine.calls.collision_probe == [(3, 2, True), (2, 2, False), (2, 2, False)]


def test_without_prevent_collision_compaction_pushes_neighbour():
    a = LayoutItem("a", 0, 0, 2, 2)
    b = LayoutItem("b", 2, 0, 2, 2)
    config = _config([a, b])

    result = grid_item_resizing("a", config, CompactType.VERTICAL, _resize_to(a, _three_cells(), 110.0))

    assert (_item(result.layout, "a").w, _item(result.layout, "a").h) == (3, 2)
    assert (_item(result.layout, "b").x, _item(result.layout, "b").y) == (2, 2)


def test_proxy_keeps_element_origin_and_clamped_size():
    grid_rect = ClientRect(left=20.0, top=30.0, width=GRID_WIDTH, height=800.0)
    a = LayoutItem("a", 1, 1, 2, 2, max_h=3)
    config = _config([a])
    elem = _elem_rect(a, grid_rect)

    shrunk = grid_item_resizing("a", config, CompactType.NONE, _resize_to(a, -500.0, -500.0, grid_rect=grid_rect))
    grown = grid_item_resizing("a", config, CompactType.NONE, _resize_to(a, 5000.0, 5000.0, grid_rect=grid_rect))

    column = (GRID_WIDTH - GAP * (COLS - 1)) / COLS
    assert shrunk.dragged_item_pos.left == pytest.approx(elem.left - grid_rect.left)
    assert shrunk.dragged_item_pos.top == pytest.approx(elem.top - grid_rect.top)
    assert shrunk.dragged_item_pos.width == pytest.approx(column)
    assert shrunk.dragged_item_pos.height == pytest.approx(ROW_HEIGHT)
    assert grown.dragged_item_pos.width == pytest.approx(GRID_WIDTH)
    assert grown.dragged_item_pos.height == pytest.approx(3 * ROW_HEIGHT + 2 * GAP)
    assert (_item(shrunk.layout, "a").w, _item(shrunk.layout, "a").h) == (1, 1)


def test_scroll_difference_is_subtracted_from_size():
    a = LayoutItem("a", 0, 0, 1, 1)
    config = _config([a])
    scroll = ScrollDifference(top=120.0, left=-80.0)

    result = grid_item_resizing("a", config, CompactType.VERTICAL, _resize_to(a, _three_cells(), 110.0, scroll=scroll))

    assert (_item(result.layout, "a").w, _item(result.layout, "a").h) == (3, 2)


def test_width_yields_to_position_at_right_edge():
    a = LayoutItem("a", 10, 0, 1, 1)
    config = _config([a])

    result = grid_item_resizing("a", config, CompactType.VERTICAL, _resize_to(a, 5000.0, 50.0))

    assert (_item(result.layout, "a").x, _item(result.layout, "a").w) == (10, 2)


def test_live_bounds_override_item_bounds():
    a = LayoutItem("a", 0, 0, 2, 2, min_h=1, max_w=6)
    config = _config([a])

    result = grid_item_resizing(
        "a",
        config,
        CompactType.VERTICAL,
        _resize_to(a, _three_cells(), 50.0),
        max_w=2,
        min_h=3,
    )

    assert (_item(result.layout, "a").w, _item(result.layout, "a").h) == (2, 3)


def test_resize_unknown_item_fails_fast():
    config = _config([LayoutItem("a", 0, 0, 1, 1)])
    data = _resize_to(LayoutItem("ghost", 0, 0, 1, 1), 100.0, 100.0)

    with pytest.raises(GridItemNotFoundError):
        grid_item_resizing("ghost", config, CompactType.VERTICAL, data)


@pytest.mark.parametrize(
    ("w", "h", "last", "expected"),
    [
        (3, 1, None, ShrinkDimension.W),
        (3, 1, ShrinkDimension.W, ShrinkDimension.W),
        (1, 3, None, ShrinkDimension.H),
        (1, 3, ShrinkDimension.H, ShrinkDimension.H),
        (3, 3, None, ShrinkDimension.W),
        (3, 3, ShrinkDimension.W, ShrinkDimension.H),
        (3, 3, ShrinkDimension.H, ShrinkDimension.W),
    ],
)
def test_next_shrink_dimension(w, h, last, expected):
    assert next_shrink_dimension(LayoutItem("a", 0, 0, w, h), last) is expected


def test_shrink_restores_width_after_height_resolved_collision():
    engine = DefaultLayoutEngine()
    layout = (LayoutItem("c", 0, 0, 1, 1), LayoutItem("e", 1, 2, 2, 1))

    shrunk = shrink_to_avoid_collisions(layout, LayoutItem("c", 0, 0, 3, 3), engine)

    assert (shrunk.w, shrunk.h) == (3, 2)


def test_shrink_switches_to_height_once_width_is_at_floor():
    engine = DefaultLayoutEngine()
    layout = (LayoutItem("c", 0, 0, 1, 1), LayoutItem("d", 0, 2, 2, 1))

    shrunk = shrink_to_avoid_collisions(layout, LayoutItem("c", 0, 0, 2, 3), engine)

    assert (shrunk.w, shrunk.h) == (2, 2)


def test_shrink_stops_at_single_cell():
    engine = DefaultLayoutEngine()
    layout = (LayoutItem("c", 0, 0, 1, 1), LayoutItem("z", 0, 0, 1, 1))

    shrunk = shrink_to_avoid_collisions(layout, LayoutItem("c", 0, 0, 2, 2), engine)

    assert (shrunk.w, shrunk.h) == (1, 1)


def _random_bound(rng, low, high):
    return math.inf if rng.random() < 0.3 else rng.randint(low, high)


def test_resized_span_stays_within_item_bounds():
    rng = random.Random(42)
    for _ in range(200):
        cols = rng.randint(2, 12)
        gap = float(rng.randint(0, 15))
        row_height = float(rng.randint(20, 80))
        grid_rect = ClientRect(left=0.0, top=0.0, width=float(rng.randint(300, 1500)), height=900.0)
        min_w = rng.randint(1, min(3, cols))
        max_w = _random_bound(rng, min_w, cols + 2)
        min_h = rng.randint(1, 2)
        max_h = _random_bound(rng, min_h, 6)
        x = rng.randint(0, cols - min_w)
        w = rng.randint(min_w, int(min(max_w, cols - x)))
        h = rng.randint(min_h, int(min(max_h, 6)))
        item = LayoutItem("a", x, rng.randint(0, 3), w, h, min_w=min_w, min_h=min_h, max_w=max_w, max_h=max_h)
        config = GridConfig(cols=cols, row_height=row_height, gap=gap, layout=(item,))
        data = _resize_to(
            item,
            rng.uniform(-200.0, 2000.0),
            rng.uniform(-200.0, 1000.0),
            grid_rect=grid_rect,
            cols=cols,
            gap=gap,
            row_height=row_height,
        )

        resized = grid_item_resizing("a", config, CompactType.VERTICAL, data).layout[0]

        assert min_w <= resized.w <= min(max_w, cols - x)
        assert min_h <= resized.h <= max_h


@pytest.mark.parametrize("compact_type", list(CompactType))
def test_prevent_collision_never_leaves_overlaps(compact_type):
    rng = random.Random(7)
    engine = DefaultLayoutEngine()
    for _ in range(60):
        items = []
        for index in range(rng.randint(2, 7)):
            w = rng.randint(1, 4)
            items.append(LayoutItem(f"i{index}", rng.randint(0, COLS - w), rng.randint(0, 6), w, rng.randint(1, 3)))
        layout = engine.compact(tuple(items), CompactType.VERTICAL, COLS)
        target = rng.choice(layout)
        config = _config(layout, prevent_collision=True)
        data = _resize_to(target, rng.uniform(0.0, 900.0), rng.uniform(0.0, 400.0))

        result = grid_item_resizing(target.id, config, compact_type, data, engine=engine)

        for first, second in itertools.combinations(result.layout, 2):
            assert not collides(first, second), (first, second)
