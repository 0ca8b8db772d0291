"""Compaction, displacement and collision probing for grid layouts.

The resolvers talk to these algorithms through the ``LayoutEngine``
protocol so hosts (and tests) can inject their own implementation.
``DefaultLayoutEngine`` follows the react-grid-layout algorithms: items are
compacted one by one against the already placed ones, and a moved item
pushes whatever it lands on further along the compaction axis.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Protocol, Sequence

from grid_layout.grid_definitions import CompactType, GridItemNotFoundError, Layout, LayoutItem

_LOGGER_NAME = "ModernGrid.Layout"
_ENGINE_LOGGER = logging.getLogger(_LOGGER_NAME)


class LayoutEngine(Protocol):
    def compact(self, layout: Layout, compact_type: CompactType, cols: int) -> Layout:
        ...

    def move_element(
        self,
        layout: Layout,
        item: LayoutItem,
        x: Optional[int],
        y: Optional[int],
        is_user_action: bool,
        prevent_collision: bool,
        compact_type: CompactType,
        cols: int,
        enable_swap: bool,
    ) -> Layout:
        ...

    def collision_probe(self, layout: Layout, item: LayoutItem) -> bool:
        ...


@dataclass
class _Slot:
    """Mutable working copy of a LayoutItem used while an algorithm runs."""

    id: str
    x: int
    y: int
    w: int
    h: int
    source: LayoutItem
    moved: bool = False

    @classmethod
    def from_item(cls, item: LayoutItem) -> "_Slot":
        return cls(id=item.id, x=item.x, y=item.y, w=item.w, h=item.h, source=item)

    def freeze(self) -> LayoutItem:
        source = self.source
        if (source.x, source.y, source.w, source.h) == (self.x, self.y, self.w, self.h):
            return source
        return replace(source, x=self.x, y=self.y, w=self.w, h=self.h)


def collides(item_a: Any, item_b: Any) -> bool:
    if item_a.id == item_b.id:
        return False
    if item_a.x + item_a.w <= item_b.x:
        return False
    if item_a.x >= item_b.x + item_b.w:
        return False
    if item_a.y + item_a.h <= item_b.y:
        return False
    if item_a.y >= item_b.y + item_b.h:
        return False
    return True


def get_first_collision(layout: Sequence[Any], item: Any) -> Optional[Any]:
    for other in layout:
        if collides(other, item):
            return other
    return None


def get_all_collisions(layout: Sequence[Any], item: Any) -> List[Any]:
    return [other for other in layout if collides(other, item)]


def bottom(layout: Sequence[Any]) -> int:
    max_y = 0
    for item in layout:
        max_y = max(max_y, item.y + item.h)
    return max_y


def sort_layout_items(layout: Sequence[Any], compact_type: CompactType) -> List[Any]:
    if compact_type is CompactType.HORIZONTAL:
        return sorted(layout, key=lambda item: (item.x, item.y))
    if compact_type is CompactType.VERTICAL:
        return sorted(layout, key=lambda item: (item.y, item.x))
    return list(layout)


def _resolve_compaction_collision(layout: List[_Slot], slot: _Slot, move_to: int, axis: str) -> None:
    size_attr = "w" if axis == "x" else "h"
    setattr(slot, axis, getattr(slot, axis) + 1)
    index = next(i for i, candidate in enumerate(layout) if candidate.id == slot.id)
    for other in layout[index + 1:]:
        # Sorted layout: nothing further down can collide.
        if other.y > slot.y + slot.h:
            break
        if collides(slot, other):
            _resolve_compaction_collision(layout, other, move_to + getattr(slot, size_attr), axis)
    setattr(slot, axis, move_to)


def _slide_left(compare_with: List[_Slot], slot: _Slot) -> None:
    while slot.x > 0 and get_first_collision(compare_with, slot) is None:
        slot.x -= 1


def _compact_item(
    compare_with: List[_Slot],
    slot: _Slot,
    compact_type: CompactType,
    cols: int,
    full_layout: List[_Slot],
) -> None:
    compact_v = compact_type is CompactType.VERTICAL
    compact_h = compact_type is CompactType.HORIZONTAL
    if compact_v:
        slot.y = min(bottom(compare_with), slot.y)
        while slot.y > 0 and get_first_collision(compare_with, slot) is None:
            slot.y -= 1
    elif compact_h:
        _slide_left(compare_with, slot)

    while True:
        hit = get_first_collision(compare_with, slot)
        if hit is None:
            break
        if compact_h:
            _resolve_compaction_collision(full_layout, slot, hit.x + hit.w, "x")
            if slot.x + slot.w > cols:
                slot.x = cols - slot.w
                slot.y += 1
                # Wrapped onto the next row, which may have room further left.
                _slide_left(compare_with, slot)
        else:
            _resolve_compaction_collision(full_layout, slot, hit.y + hit.h, "y")

    slot.y = max(slot.y, 0)
    slot.x = max(slot.x, 0)


class DefaultLayoutEngine:
    """Stateless LayoutEngine; every call works on fresh working copies."""

    def compact(self, layout: Layout, compact_type: CompactType, cols: int) -> Layout:
        slots = [_Slot.from_item(item) for item in layout]
        ordered = sort_layout_items(slots, compact_type)
        compare_with: List[_Slot] = []
        for slot in ordered:
            _compact_item(compare_with, slot, compact_type, cols, ordered)
            compare_with.append(slot)
            slot.moved = False
        return tuple(slot.freeze() for slot in slots)

    def move_element(
        self,
        layout: Layout,
        item: LayoutItem,
        x: Optional[int],
        y: Optional[int],
        is_user_action: bool,
        prevent_collision: bool,
        compact_type: CompactType,
        cols: int,
        enable_swap: bool,
    ) -> Layout:
        slots = [_Slot.from_item(entry) for entry in layout]
        target = next((slot for slot in slots if slot.id == item.id), None)
        if target is None:
            raise GridItemNotFoundError(f"grid item {item.id!r} is not part of the layout")
        self._move(slots, target, x, y, is_user_action, prevent_collision, compact_type, cols, enable_swap)
        return tuple(slot.freeze() for slot in slots)

    def collision_probe(self, layout: Layout, item: LayoutItem) -> bool:
        return get_first_collision(layout, item) is not None

    def _move(
        self,
        slots: List[_Slot],
        slot: _Slot,
        x: Optional[int],
        y: Optional[int],
        is_user_action: bool,
        prevent_collision: bool,
        compact_type: CompactType,
        cols: int,
        enable_swap: bool,
    ) -> None:
        if slot.x == x and slot.y == y:
            return
        _ENGINE_LOGGER.debug(
            "Moving grid item %s to [%s,%s] from [%d,%d] (user_action=%s)",
            slot.id,
            x,
            y,
            slot.x,
            slot.y,
            is_user_action,
        )
        old_x = slot.x
        old_y = slot.y
        if x is not None:
            slot.x = x
        if y is not None:
            slot.y = y
        slot.moved = True

        ordered = sort_layout_items(slots, compact_type)
        if compact_type is CompactType.VERTICAL and y is not None:
            moving_up = old_y >= y
        elif compact_type is CompactType.HORIZONTAL and x is not None:
            moving_up = old_x >= x
        else:
            moving_up = False
        if moving_up:
            ordered.reverse()
        collisions = get_all_collisions(ordered, slot)

        if prevent_collision and collisions:
            _ENGINE_LOGGER.debug("Collision prevented on grid item %s, reverting", slot.id)
            slot.x = old_x
            slot.y = old_y
            slot.moved = False
            return

        if enable_swap and is_user_action and len(collisions) == 1:
            if self._try_swap(slots, slot, collisions[0], old_x, old_y, cols):
                return

        for collision in collisions:
            if collision.moved:
                continue
            self._move_away(slots, slot, collision, is_user_action, compact_type, cols)

    def _move_away(
        self,
        slots: List[_Slot],
        collides_with: _Slot,
        item_to_move: _Slot,
        is_user_action: bool,
        compact_type: CompactType,
        cols: int,
    ) -> None:
        compact_h = compact_type is CompactType.HORIZONTAL
        compact_v = not compact_h
        if is_user_action:
            # Try the cheap move first: hop the colliding item over the moved one.
            probe = LayoutItem(
                id="-1",
                x=max(collides_with.x - item_to_move.w, 0) if compact_h else item_to_move.x,
                y=max(collides_with.y - item_to_move.h, 0) if compact_v else item_to_move.y,
                w=item_to_move.w,
                h=item_to_move.h,
            )
            if get_first_collision(slots, probe) is None:
                _ENGINE_LOGGER.debug("Grid item %s hops to [%d,%d]", item_to_move.id, probe.x, probe.y)
                self._move(
                    slots,
                    item_to_move,
                    probe.x if compact_h else None,
                    probe.y if compact_v else None,
                    False,
                    False,
                    compact_type,
                    cols,
                    False,
                )
                return
        self._move(
            slots,
            item_to_move,
            item_to_move.x + 1 if compact_h else None,
            item_to_move.y + 1 if compact_v else None,
            False,
            False,
            compact_type,
            cols,
            False,
        )

    def _try_swap(
        self,
        slots: List[_Slot],
        slot: _Slot,
        other: _Slot,
        old_x: int,
        old_y: int,
        cols: int,
    ) -> bool:
        if old_x + other.w > cols:
            return False
        previous = (other.x, other.y)
        other.x = old_x
        other.y = old_y
        if get_first_collision(slots, other) is not None:
            other.x, other.y = previous
            return False
        other.moved = True
        _ENGINE_LOGGER.debug("Swapped grid items %s and %s", slot.id, other.id)
        return True
