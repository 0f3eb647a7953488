from __future__ import annotations

import logging
import sys
from typing import NoReturn


LOGGER = logging.getLogger(__name__)


class PlotDataError(ValueError):
    """Recoverable problem with the shape or content of plot input data."""


def fail_incompatible_sizes(x_size: int, y_size: int) -> NoReturn:
    """Halt the process: a single data set was given x/y of different lengths."""
    LOGGER.critical("incompatible data sizes: x=%d y=%d", x_size, y_size)
    print(f"Incompatible data sizes (x={x_size}, y={y_size})", file=sys.stderr)
    sys.stderr.flush()
    raise SystemExit(1)
