"""Startup wiring: settings, debug config and logging for a grid host."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from grid_layout.gesture_controller import GridGestureController
from grid_layout.grid_definitions import Layout, LayoutChange, LayoutItem
from grid_layout.grid_settings import build_grid_config, load_debug_config, load_grid_settings, validate_grid_config
from grid_layout.layout_engine import LayoutEngine
from grid_layout.logging_utils import LOGGER_NAME, configure_grid_logger

SETTINGS_FILENAME = "grid_settings.json"
DEBUG_FILENAME = "debug.json"

_LAUNCHER_LOGGER = logging.getLogger(LOGGER_NAME)


def create_gesture_controller(
    config_dir: Path,
    layout: Sequence[LayoutItem],
    *,
    engine: Optional[LayoutEngine] = None,
    on_layout_updated: Optional[Callable[[Layout], None]] = None,
    on_gesture_end: Optional[Callable[[Dict[str, LayoutChange]], None]] = None,
) -> GridGestureController:
    """Build a gesture controller from the JSON files in ``config_dir``.

    ``debug.json`` configures the grid logger before anything else runs;
    ``grid_settings.json`` supplies the static grid options. The resulting
    config is validated, so a bad layout fails here rather than mid-drag.
    """

    config_dir = Path(config_dir).expanduser().resolve()
    debug_config = load_debug_config(config_dir / DEBUG_FILENAME)
    configure_grid_logger(debug_config, config_dir)

    settings = load_grid_settings(config_dir / SETTINGS_FILENAME)
    config = build_grid_config(settings, tuple(layout))
    validate_grid_config(config)
    _LAUNCHER_LOGGER.debug(
        "Grid ready: cols=%d row_height=%s gap=%.1f compact=%s items=%d",
        config.cols,
        config.row_height,
        config.gap,
        config.compact_type.value,
        len(config.layout),
    )
    return GridGestureController(
        config,
        engine=engine,
        on_layout_updated=on_layout_updated,
        on_gesture_end=on_gesture_end,
    )
