"""Value types shared by the grid layout resolvers (pure, no Qt)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

ROW_HEIGHT_FIT = "fit"


class CompactType(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    NONE = "none"


class LayoutChange(str, Enum):
    MOVE = "move"
    RESIZE = "resize"
    MOVERESIZE = "moveresize"


class GridItemNotFoundError(LookupError):
    """Raised when a gesture references an id missing from the layout."""


class InvalidGridConfigError(ValueError):
    """Raised by config validation for geometry the transforms cannot handle."""


@dataclass(frozen=True)
class LayoutItem:
    id: str
    x: int
    y: int
    w: int
    h: int
    min_w: int = 1
    min_h: int = 1
    max_w: float = math.inf
    max_h: float = math.inf


Layout = Tuple[LayoutItem, ...]
RowHeight = Union[float, str]


@dataclass(frozen=True)
class GridConfig:
    cols: int
    row_height: RowHeight
    gap: float = 0.0
    layout: Layout = ()
    height: Optional[float] = None
    compact_type: CompactType = CompactType.VERTICAL
    prevent_collision: bool = False
    enable_swap: bool = False

    @property
    def fits_rows(self) -> bool:
        return self.row_height == ROW_HEIGHT_FIT


@dataclass(frozen=True)
class ClientRect:
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PointerPosition:
    x: float
    y: float


@dataclass(frozen=True)
class ScrollDifference:
    top: float = 0.0
    left: float = 0.0


@dataclass(frozen=True)
class DraggingData:
    """Everything one pointer-move computation needs about the gesture."""

    pointer_down: PointerPosition
    pointer_drag: PointerPosition
    grid_rect: ClientRect
    drag_elem_rect: ClientRect
    scroll_difference: ScrollDifference = ScrollDifference()


@dataclass(frozen=True)
class ItemRect:
    top: float
    left: float
    width: float
    height: float


@dataclass(frozen=True)
class GridGestureResult:
    layout: Layout
    dragged_item_pos: ItemRect


@dataclass(frozen=True)
class GridItemRenderData:
    id: str
    top: float
    left: float
    width: float
    height: float


def find_layout_item(layout: Layout, item_id: str) -> LayoutItem:
    for item in layout:
        if item.id == item_id:
            return item
    raise GridItemNotFoundError(f"grid item {item_id!r} is not part of the layout")
