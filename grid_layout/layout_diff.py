from __future__ import annotations

from typing import Dict, Optional, Sequence

from grid_layout.grid_definitions import LayoutChange, LayoutItem


def items_equal(item_a: LayoutItem, item_b: LayoutItem) -> bool:
    """Placement equality; min/max bounds are configuration and are ignored."""

    return (
        item_a.id == item_b.id
        and item_a.x == item_b.x
        and item_a.y == item_b.y
        and item_a.w == item_b.w
        and item_a.h == item_b.h
    )


def layouts_equal(layout_a: Sequence[LayoutItem], layout_b: Sequence[LayoutItem]) -> bool:
    if len(layout_a) != len(layout_b):
        return False
    return all(items_equal(a, b) for a, b in zip(layout_a, layout_b))


def _classify(item_a: LayoutItem, item_b: LayoutItem) -> Optional[LayoutChange]:
    pos_changed = item_a.x != item_b.x or item_a.y != item_b.y
    size_changed = item_a.w != item_b.w or item_a.h != item_b.h
    if pos_changed and size_changed:
        return LayoutChange.MOVERESIZE
    if pos_changed:
        return LayoutChange.MOVE
    if size_changed:
        return LayoutChange.RESIZE
    return None


def get_layout_diff(layout_a: Sequence[LayoutItem], layout_b: Sequence[LayoutItem]) -> Dict[str, LayoutChange]:
    """Map item id to the change between two layouts.

    Unchanged items get no entry. Items present in only one layout are not
    reported: this summarises a gesture, not a set difference.
    """

    by_id = {item.id: item for item in layout_b}
    diff: Dict[str, LayoutChange] = {}
    for item_a in layout_a:
        item_b = by_id.get(item_a.id)
        if item_b is None:
            continue
        change = _classify(item_a, item_b)
        if change is not None:
            diff[item_b.id] = change
    return diff
