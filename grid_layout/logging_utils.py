from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from grid_layout.grid_settings import GridDebugConfig

LOGGER_NAME = "ModernGrid.Layout"
LOG_DIR_ENV_VAR = "GRID_LAYOUT_LOG_DIR"
PROPAGATE_ENV_VAR = "GRID_LAYOUT_PROPAGATE_LOGS"
LOG_FILENAME = "grid-layout.log"
DEFAULT_LOG_RETENTION = 5
_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def resolve_logs_dir(base_path: Path, log_dir_name: str = "ModernGridLayout") -> Path:
    """
    Resolve the directory to store grid layout logs.

    Strategy:
    - Use GRID_LAYOUT_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    `base_path` is only used to resolve a relative GRID_LAYOUT_LOG_DIR.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        override = Path(env_override).expanduser()
        if not override.is_absolute():
            override = base_path / override
        candidates.append(override)

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "logs")
    candidates.append(cache_home / "logs")
    candidates.append(Path.cwd() / "logs")

    for base in candidates:
        try:
            target = base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str = LOG_FILENAME,
    *,
    retention: int = DEFAULT_LOG_RETENTION,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> RotatingFileHandler:
    """Rotating handler for the grid log; ``retention`` counts the live file too."""
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=max(1, retention) - 1,
        encoding="utf-8",
    )
    handler.setFormatter(formatter or logging.Formatter(_LOG_FORMAT))
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def _propagation_enabled() -> bool:
    value = os.environ.get(PROPAGATE_ENV_VAR, "")
    return value.strip().lower() in {"1", "true", "yes", "on"}


def configure_grid_logger(debug_config: GridDebugConfig, base_path: Path) -> logging.Logger:
    """Attach the rotating file handler to the grid logger (once) and set its level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(debug_config.debug))
    logger.propagate = _propagation_enabled()
    if any(getattr(handler, "_grid_layout_handler", False) for handler in logger.handlers):
        return logger
    retention = debug_config.log_retention or DEFAULT_LOG_RETENTION
    handler = build_rotating_file_handler(resolve_logs_dir(base_path), retention=retention)
    handler._grid_layout_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.debug(
        "Grid layout logging configured: level=%s retention=%d file=%s",
        logging.getLevelName(logger.level),
        retention,
        handler.baseFilename,
    )
    return logger
