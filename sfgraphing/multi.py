from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

import numpy as np

from sfgraphing.adapters.normalize import coerce_1d_numeric, coerce_rows, is_nested, materialize
from sfgraphing.errors import PlotDataError
from sfgraphing.series import ColorLike, PlotDataSet, PlottingType, coerce_color


LOGGER = logging.getLogger(__name__)


def multi_plot_data_set(
    x_values: Any,
    y_values: Any,
    color: ColorLike,
    plotting_type: PlottingType | str,
    labels: Sequence[str] | None = (),
) -> list[PlotDataSet]:
    """Split wide tabular input into one ``PlotDataSet`` per series.

    Accepted shapes (N samples, M series):

    * flat x, flat y: a single data set.
    * flat x of length N, y as N rows of M values: M data sets sharing x.
    * x and y both as N rows of M values: M data sets with their own x.

    ``color`` and ``plotting_type`` apply to every output; ``labels`` are
    assigned by series index and missing ones become ``""``. Shape problems
    raise ``PlotDataError``. Flat x/y of different lengths halts the process,
    like the ``PlotDataSet`` constructor.
    """
    x_values = materialize(x_values, label="x")
    y_values = materialize(y_values, label="y")
    rgba = coerce_color(color)
    kind = PlottingType.parse(plotting_type)
    names = _coerce_labels(labels)

    x_nested = is_nested(x_values)
    y_nested = is_nested(y_values)

    if not x_nested and not y_nested:
        LOGGER.debug("multi_plot_data_set: single series")
        return [PlotDataSet(x_values, y_values, color=rgba, label=_label_at(names, 0), plotting_type=kind)]

    if y_nested and not x_nested:
        x_arr = coerce_1d_numeric(x_values, label="x")
        if x_arr.size == 0:
            raise PlotDataError("empty x value data for multi-series y")
        y_rows = coerce_rows(y_values, label="y")
        return _shared_axis(x_arr, y_rows, rgba, kind, names)

    if x_nested and y_nested:
        x_rows = coerce_rows(x_values, label="x")
        y_rows = coerce_rows(y_values, label="y")
        if x_rows.shape[0] != y_rows.shape[0]:
            if x_rows.shape[0] == 1 and x_rows.shape[1] == y_rows.shape[0] and y_rows.shape[0] > 0:
                return _shared_axis(x_rows[0], y_rows, rgba, kind, names)
            raise PlotDataError(
                "mismatching dataset sizes for multiplot: set dimension of X must be one, "
                f"or match set dimension of Y (x={x_rows.shape[0]}, y={y_rows.shape[0]})"
            )
        if x_rows.shape[1] != y_rows.shape[1]:
            raise PlotDataError(
                f"x and y series counts differ: x has {x_rows.shape[1]}, y has {y_rows.shape[1]}"
            )
        x_columns = transpose_samples(x_rows)
        y_columns = transpose_samples(y_rows)
        LOGGER.debug(
            "multi_plot_data_set: %d paired series x %d samples", y_columns.shape[0], y_columns.shape[1]
        )
        return [
            PlotDataSet(x_columns[s], y_columns[s], color=rgba, label=_label_at(names, s), plotting_type=kind)
            for s in range(y_columns.shape[0])
        ]

    raise PlotDataError("x values are nested but y values are flat; nest y or flatten x")


def transpose_samples(rows: np.ndarray) -> np.ndarray:
    """Turn ``(samples, series)`` data into ``(series, samples)``: ``out[s][n] == rows[n][s]``."""
    if rows.ndim != 2:
        raise PlotDataError(f"expected 2-D sample data, got {rows.ndim}-D")
    return np.ascontiguousarray(rows.T)


def _shared_axis(
    x_arr: np.ndarray,
    y_rows: np.ndarray,
    color: tuple[int, int, int, int],
    kind: PlottingType,
    names: list[str],
) -> list[PlotDataSet]:
    if y_rows.shape[0] != x_arr.size:
        raise PlotDataError(f"y has {y_rows.shape[0]} samples but x has {x_arr.size}")
    columns = transpose_samples(y_rows)
    LOGGER.debug("multi_plot_data_set: %d series sharing %d x values", columns.shape[0], x_arr.size)
    return [
        PlotDataSet(x_arr, columns[s], color=color, label=_label_at(names, s), plotting_type=kind)
        for s in range(columns.shape[0])
    ]


def _coerce_labels(labels: Sequence[str] | None) -> list[str]:
    if labels is None:
        return []
    if isinstance(labels, str):
        return [labels]
    return [str(label) for label in labels]


def _label_at(labels: list[str], index: int) -> str:
    return labels[index] if index < len(labels) else ""
