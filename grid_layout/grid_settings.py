"""Grid settings and debug configuration loaders."""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from grid_layout.grid_definitions import (
    ROW_HEIGHT_FIT,
    CompactType,
    GridConfig,
    InvalidGridConfigError,
    Layout,
    RowHeight,
)

DEBUG_ENV_VAR = "GRID_LAYOUT_DEBUG"
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20


@dataclass(frozen=True)
class GridSettings:
    cols: int = 12
    row_height: RowHeight = 50.0
    gap: float = 0.0
    height: Optional[float] = None
    compact_type: CompactType = CompactType.VERTICAL
    prevent_collision: bool = False
    enable_swap: bool = False


@dataclass(frozen=True)
class GridDebugConfig:
    debug: bool = False
    log_retention: Optional[int] = None


_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def _parse_flag(raw: object) -> Optional[bool]:
    """Bool from JSON or env text; None when the value says neither."""

    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    return None


def _coerce_flag(raw: object, fallback: bool) -> bool:
    value = _parse_flag(raw)
    return fallback if value is None else value


def _read_json_mapping(path: Path) -> Mapping[str, Any]:
    try:
        raw_text = path.read_text(encoding="utf-8")
        data = json.loads(raw_text)
    except (FileNotFoundError, OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_int(raw: object, fallback: int, *, minimum: int) -> int:
    try:
        value = int(raw)  # type: ignore[call-overload]
    except Exception:
        value = fallback
    return max(minimum, value)


def _coerce_float(raw: object, fallback: Optional[float], *, minimum: float) -> Optional[float]:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except Exception:
        return fallback
    if not math.isfinite(value):
        return fallback
    return max(minimum, value)


def _coerce_row_height(raw: object, fallback: RowHeight) -> RowHeight:
    if isinstance(raw, str) and raw.strip().lower() == ROW_HEIGHT_FIT:
        return ROW_HEIGHT_FIT
    value = _coerce_float(raw, None, minimum=1.0)
    return fallback if value is None else value


def _coerce_compact_type(raw: object, fallback: CompactType) -> CompactType:
    if raw is None:
        return CompactType.NONE
    try:
        return CompactType(str(raw).strip().lower())
    except ValueError:
        return fallback


def _coerce_log_retention(raw: object) -> Optional[int]:
    if raw is None:
        return None
    try:
        count = int(raw)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    return min(LOG_RETENTION_MAX, max(LOG_RETENTION_MIN, count))


def load_grid_settings(path: Path) -> GridSettings:
    """Read static grid options from a JSON file.

    Missing or unreadable files give the defaults; individual bad values fall
    back to their default (or are clamped to a sane minimum). A JSON ``null``
    compact type means no compaction.
    """

    data = _read_json_mapping(path)
    defaults = GridSettings()
    if not data:
        return defaults
    return GridSettings(
        cols=_coerce_int(data.get("cols"), defaults.cols, minimum=1),
        row_height=_coerce_row_height(data.get("row_height"), defaults.row_height),
        gap=_coerce_float(data.get("gap"), defaults.gap, minimum=0.0) or 0.0,
        height=_coerce_float(data.get("height"), defaults.height, minimum=0.0),
        compact_type=_coerce_compact_type(data.get("compact_type", defaults.compact_type.value), defaults.compact_type),
        prevent_collision=_coerce_flag(data.get("prevent_collision"), defaults.prevent_collision),
        enable_swap=_coerce_flag(data.get("enable_swap"), defaults.enable_swap),
    )


def load_debug_config(path: Path) -> GridDebugConfig:
    """Read logging flags from debug.json; ``GRID_LAYOUT_DEBUG`` overrides ``debug``."""

    data = _read_json_mapping(path)
    debug = _coerce_flag(data.get("debug"), False)
    env_debug = _parse_flag(os.getenv(DEBUG_ENV_VAR))
    if env_debug is not None:
        debug = env_debug
    return GridDebugConfig(debug=debug, log_retention=_coerce_log_retention(data.get("log_retention")))


def build_grid_config(settings: GridSettings, layout: Layout) -> GridConfig:
    return GridConfig(
        cols=settings.cols,
        row_height=settings.row_height,
        gap=settings.gap,
        layout=tuple(layout),
        height=settings.height,
        compact_type=settings.compact_type,
        prevent_collision=settings.prevent_collision,
        enable_swap=settings.enable_swap,
    )


def validate_grid_config(config: GridConfig) -> None:
    """Raise InvalidGridConfigError for geometry the pixel transforms would divide by."""

    if config.cols < 1:
        raise InvalidGridConfigError(f"cols must be at least 1, got {config.cols}")
    if config.gap < 0:
        raise InvalidGridConfigError(f"gap must not be negative, got {config.gap}")
    if config.fits_rows:
        if config.height is not None and config.height <= 0:
            raise InvalidGridConfigError(f"fit row height needs a positive grid height, got {config.height}")
        if not any(item.y + item.h > 0 for item in config.layout):
            raise InvalidGridConfigError("fit row height needs at least one row in the layout")
    elif isinstance(config.row_height, str) or config.row_height <= 0:
        raise InvalidGridConfigError(f"row_height must be positive or {ROW_HEIGHT_FIT!r}, got {config.row_height!r}")
    ids = [item.id for item in config.layout]
    if len(ids) != len(set(ids)):
        raise InvalidGridConfigError("layout item ids must be unique")
    for item in config.layout:
        if item.w < 1 or item.h < 1:
            raise InvalidGridConfigError(f"grid item {item.id!r} must span at least one cell")
        if item.x < 0 or item.y < 0:
            raise InvalidGridConfigError(f"grid item {item.id!r} has a negative position")
