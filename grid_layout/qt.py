"""PyQt6 entry point for grid widgets.

Imported separately (``from grid_layout import qt``) so the core package
stays importable without Qt. Widgets hand their mouse events and global
geometry to ``begin_gesture``/``continue_gesture``; everything else goes
through ``GridGestureController`` directly.
"""
from __future__ import annotations

from typing import Optional, Union

from PyQt6.QtCore import QPoint, QPointF, QRect, QRectF
from PyQt6.QtGui import QMouseEvent

from grid_layout.gesture_controller import ActiveGesture, GestureKind, GridGestureController
from grid_layout.grid_definitions import (
    ClientRect,
    GridGestureResult,
    GridItemRenderData,
    ItemRect,
    PointerPosition,
    ScrollDifference,
)


def client_rect_from_qrect(rect: Union[QRect, QRectF]) -> ClientRect:
    return ClientRect(
        left=float(rect.x()),
        top=float(rect.y()),
        width=float(rect.width()),
        height=float(rect.height()),
    )


def pointer_from_qpoint(point: Union[QPoint, QPointF]) -> PointerPosition:
    return PointerPosition(x=float(point.x()), y=float(point.y()))


def pointer_from_event(event: QMouseEvent) -> PointerPosition:
    """Pointer position in global coordinates, the frame the grid rects use."""
    return pointer_from_qpoint(event.globalPosition())


def qrectf_from_item_rect(rect: Union[ItemRect, GridItemRenderData]) -> QRectF:
    return QRectF(rect.left, rect.top, rect.width, rect.height)


def begin_gesture(
    controller: GridGestureController,
    kind: GestureKind,
    item_id: str,
    event: QMouseEvent,
    grid_rect: Union[QRect, QRectF],
    item_rect: Union[QRect, QRectF],
    *,
    min_w: Optional[int] = None,
    max_w: Optional[float] = None,
    min_h: Optional[int] = None,
    max_h: Optional[float] = None,
) -> ActiveGesture:
    """Start a gesture from a press event; both rects must be in global coordinates."""

    return controller.start(
        kind,
        item_id,
        pointer_from_event(event),
        client_rect_from_qrect(grid_rect),
        client_rect_from_qrect(item_rect),
        min_w=min_w,
        max_w=max_w,
        min_h=min_h,
        max_h=max_h,
    )


def continue_gesture(
    controller: GridGestureController,
    event: QMouseEvent,
    scroll_offset: Union[QPoint, QPointF, None] = None,
) -> QRectF:
    """Feed a move event to the controller and return the proxy rect to paint.

    ``scroll_offset`` is how far the grid's scroll area moved since the
    press, as (x, y) pixels.
    """

    scroll = ScrollDifference()
    if scroll_offset is not None:
        scroll = ScrollDifference(top=float(scroll_offset.y()), left=float(scroll_offset.x()))
    result: GridGestureResult = controller.move(pointer_from_event(event), scroll)
    return qrectf_from_item_rect(result.dragged_item_pos)
