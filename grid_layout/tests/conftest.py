import logging
import os
import types

import pytest

from grid_layout.layout_engine import DefaultLayoutEngine
from grid_layout.logging_utils import LOGGER_NAME


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


class RecordingLayoutEngine:
    """Delegates to the default engine and records every call."""

    def __init__(self):
        self._engine = DefaultLayoutEngine()
        self.calls = types.SimpleNamespace(compact=[], move_element=[], collision_probe=[])

    def compact(self, layout, compact_type, cols):
        self.calls.compact.append((layout, compact_type, cols))
        return self._engine.compact(layout, compact_type, cols)

    def move_element(self, layout, item, x, y, is_user_action, prevent_collision, compact_type, cols, enable_swap):
        self.calls.move_element.append(
            {
                "item": item.id,
                "x": x,
                "y": y,
                "is_user_action": is_user_action,
                "prevent_collision": prevent_collision,
                "compact_type": compact_type,
                "cols": cols,
                "enable_swap": enable_swap,
            }
        )
        return self._engine.move_element(
            layout, item, x, y, is_user_action, prevent_collision, compact_type, cols, enable_swap
        )

    def collision_probe(self, layout, item):
        result = self._engine.collision_probe(layout, item)
        self.calls.collision_probe.append((item.w, item.h, result))
        return result


@pytest.fixture
def recording_engine():
    return RecordingLayoutEngine()


@pytest.fixture
def grid_logger():
    """Restore the grid logger's level, propagation and handlers after a test."""
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield logger
    for handler in logger.handlers:
        if handler not in saved[2]:
            handler.close()
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    logger.handlers[:] = saved[2]
