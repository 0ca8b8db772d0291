from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional

from grid_layout.drag_resolver import grid_item_dragging
from grid_layout.grid_definitions import (
    ClientRect,
    DraggingData,
    GridConfig,
    GridGestureResult,
    Layout,
    LayoutChange,
    PointerPosition,
    ScrollDifference,
    find_layout_item,
)
from grid_layout.layout_diff import get_layout_diff, layouts_equal
from grid_layout.layout_engine import DefaultLayoutEngine, LayoutEngine
from grid_layout.resize_resolver import grid_item_resizing

_LOGGER_NAME = "ModernGrid.Layout"
_GESTURE_LOGGER = logging.getLogger(_LOGGER_NAME)


class GestureKind(str, Enum):
    DRAG = "drag"
    RESIZE = "resize"


@dataclass(frozen=True)
class ActiveGesture:
    kind: GestureKind
    item_id: str
    pointer_down: PointerPosition
    grid_rect: ClientRect
    drag_elem_rect: ClientRect
    start_layout: Layout
    min_w: Optional[int] = None
    max_w: Optional[float] = None
    min_h: Optional[int] = None
    max_h: Optional[float] = None


class GridGestureController:
    """Owns the grid config across one drag/resize gesture at a time.

    Each pointer move is resolved against the layout captured at ``start``,
    so items pushed aside earlier in the gesture return once the dragged
    item moves away again. The owned config always holds the latest result;
    listeners only hear about layouts that actually changed placement.
    """

    def __init__(
        self,
        config: GridConfig,
        *,
        engine: Optional[LayoutEngine] = None,
        on_layout_updated: Optional[Callable[[Layout], None]] = None,
        on_gesture_end: Optional[Callable[[Dict[str, LayoutChange]], None]] = None,
    ) -> None:
        self._config = config
        self._engine = engine or DefaultLayoutEngine()
        self._on_layout_updated = on_layout_updated
        self._on_gesture_end = on_gesture_end
        self._gesture: Optional[ActiveGesture] = None

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def gesture(self) -> Optional[ActiveGesture]:
        return self._gesture

    def set_layout(self, layout: Layout) -> None:
        self._config = replace(self._config, layout=tuple(layout))

    def start(
        self,
        kind: GestureKind,
        item_id: str,
        pointer_down: PointerPosition,
        grid_rect: ClientRect,
        drag_elem_rect: ClientRect,
        *,
        min_w: Optional[int] = None,
        max_w: Optional[float] = None,
        min_h: Optional[int] = None,
        max_h: Optional[float] = None,
    ) -> ActiveGesture:
        if self._gesture is not None:
            raise RuntimeError(f"a {self._gesture.kind.value} gesture on {self._gesture.item_id!r} is already active")
        find_layout_item(self._config.layout, item_id)
        self._gesture = ActiveGesture(
            kind=kind,
            item_id=item_id,
            pointer_down=pointer_down,
            grid_rect=grid_rect,
            drag_elem_rect=drag_elem_rect,
            start_layout=self._config.layout,
            min_w=min_w,
            max_w=max_w,
            min_h=min_h,
            max_h=max_h,
        )
        _GESTURE_LOGGER.debug("Gesture started: kind=%s item=%s", kind.value, item_id)
        return self._gesture

    def move(self, pointer: PointerPosition, scroll_difference: ScrollDifference = ScrollDifference()) -> GridGestureResult:
        gesture = self._require_gesture()
        dragging_data = DraggingData(
            pointer_down=gesture.pointer_down,
            pointer_drag=pointer,
            grid_rect=gesture.grid_rect,
            drag_elem_rect=gesture.drag_elem_rect,
            scroll_difference=scroll_difference,
        )
        # Every move starts over from the layout the gesture began with.
        config = replace(self._config, layout=gesture.start_layout)
        if gesture.kind is GestureKind.DRAG:
            result = grid_item_dragging(
                gesture.item_id,
                config,
                config.compact_type,
                dragging_data,
                engine=self._engine,
            )
        else:
            result = grid_item_resizing(
                gesture.item_id,
                config,
                config.compact_type,
                dragging_data,
                min_w=gesture.min_w,
                max_w=gesture.max_w,
                min_h=gesture.min_h,
                max_h=gesture.max_h,
                engine=self._engine,
            )
        if not layouts_equal(self._config.layout, result.layout):
            self._config = replace(self._config, layout=result.layout)
            self._notify(self._on_layout_updated, result.layout)
        return result

    def end(self) -> Dict[str, LayoutChange]:
        gesture = self._require_gesture()
        self._gesture = None
        diff = get_layout_diff(gesture.start_layout, self._config.layout)
        _GESTURE_LOGGER.debug(
            "Gesture ended: kind=%s item=%s changes=%s",
            gesture.kind.value,
            gesture.item_id,
            {key: value.value for key, value in diff.items()} or "none",
        )
        if diff:
            self._notify(self._on_gesture_end, diff)
        return diff

    def _require_gesture(self) -> ActiveGesture:
        if self._gesture is None:
            raise RuntimeError("no drag or resize gesture is active")
        return self._gesture

    @staticmethod
    def _notify(callback: Optional[Callable[[object], None]], payload: object) -> None:
        if callback is None:
            return
        try:
            callback(payload)
        except Exception:
            _GESTURE_LOGGER.exception("Grid gesture listener failed")
