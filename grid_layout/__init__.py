from .coordinate_transform import grid_item_render_data, grid_render_height, resolve_row_height
from .drag_resolver import grid_item_dragging
from .gesture_controller import GestureKind, GridGestureController
from .grid_definitions import (
    ROW_HEIGHT_FIT,
    ClientRect,
    CompactType,
    DraggingData,
    GridConfig,
    GridGestureResult,
    GridItemNotFoundError,
    GridItemRenderData,
    InvalidGridConfigError,
    ItemRect,
    Layout,
    LayoutChange,
    LayoutItem,
    PointerPosition,
    ScrollDifference,
)
from .grid_settings import (
    GridDebugConfig,
    GridSettings,
    build_grid_config,
    load_debug_config,
    load_grid_settings,
    validate_grid_config,
)
from .launcher import create_gesture_controller
from .layout_diff import get_layout_diff, items_equal, layouts_equal
from .layout_engine import DefaultLayoutEngine, LayoutEngine
from .logging_utils import configure_grid_logger
from .resize_resolver import grid_item_resizing

__all__ = [
    "ROW_HEIGHT_FIT",
    "ClientRect",
    "CompactType",
    "DefaultLayoutEngine",
    "DraggingData",
    "GestureKind",
    "GridConfig",
    "GridDebugConfig",
    "GridGestureController",
    "GridGestureResult",
    "GridItemNotFoundError",
    "GridItemRenderData",
    "GridSettings",
    "InvalidGridConfigError",
    "ItemRect",
    "Layout",
    "LayoutChange",
    "LayoutEngine",
    "LayoutItem",
    "PointerPosition",
    "ScrollDifference",
    "build_grid_config",
    "configure_grid_logger",
    "create_gesture_controller",
    "get_layout_diff",
    "grid_item_dragging",
    "grid_item_render_data",
    "grid_item_resizing",
    "grid_render_height",
    "items_equal",
    "layouts_equal",
    "load_debug_config",
    "load_grid_settings",
    "resolve_row_height",
    "validate_grid_config",
]
