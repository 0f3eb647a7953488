from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from sfgraphing.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


# Every coordinate is narrowed to this precision on the way in.
STORAGE_DTYPE = np.float32


def materialize(value: Any, *, label: str) -> Any:
    """Return ``value`` in a form that can be indexed more than once.

    Arrays, tensors, pandas objects and sequences pass through untouched;
    one-shot iterables such as generators are drained into a list.
    """
    if value is None:
        raise PlotDataError(f"{label} input is required")
    if isinstance(value, (str, bytes, bytearray)):
        raise PlotDataError(f"{label} must be numeric, got a string")
    if _is_array_like(value) or isinstance(value, Sequence):
        return value
    if isinstance(value, Iterable):
        return list(value)
    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def is_nested(value: Any) -> bool:
    """Probe whether ``value`` holds one sequence per sample rather than one number per sample."""
    if torch is not None and isinstance(value, torch.Tensor):
        return value.ndim >= 2
    if pd is not None:
        if isinstance(value, pd.DataFrame):
            return True
        if isinstance(value, pd.Series):
            return False
    if isinstance(value, np.ndarray):
        if value.ndim >= 2:
            return True
        if value.ndim == 1 and value.dtype == object and value.size > 0:
            return _is_row_like(value[0])
        return False
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if len(value) == 0:
            return False
        return _is_row_like(value[0])
    return False


def coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    """Convert a flat numeric input to a fresh 1-D array in storage precision."""
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().astype(STORAGE_DTYPE)

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.empty(len(value), dtype=object)
        for i, raw in enumerate(value):
            arr[i] = raw
        return _coerce_ndarray(arr, label=label)

    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray)):
        return coerce_1d_numeric(list(value), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def coerce_rows(value: Any, *, label: str) -> np.ndarray:
    """Convert sample-major nested input to a fresh ``(samples, series)`` array.

    The width of the first row fixes the series count; every other row has
    to match it.
    """
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 2:
            raise PlotDataError(f"{label} must be 2-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().astype(STORAGE_DTYPE)

    if pd is not None and isinstance(value, pd.DataFrame):
        try:
            return value.to_numpy(dtype=np.float64).astype(STORAGE_DTYPE)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} DataFrame contains non-numeric columns") from exc

    if isinstance(value, np.ndarray) and value.dtype != object:
        if value.ndim != 2:
            raise PlotDataError(f"{label} must be 2-D")
        return _coerce_ndarray(value, label=label)

    if not isinstance(value, (Sequence, np.ndarray)) or isinstance(value, (str, bytes, bytearray)):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")

    rows = [coerce_1d_numeric(row, label=f"{label}[{i}]") for i, row in enumerate(value)]
    if not rows:
        return np.empty((0, 0), dtype=STORAGE_DTYPE)
    width = rows[0].size
    for i, row in enumerate(rows):
        if row.size != width:
            raise PlotDataError(f"{label} is ragged: row {i} has {row.size} values, expected {width}")
    return np.stack(rows).astype(STORAGE_DTYPE, copy=False)


def _is_array_like(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return True
    if torch is not None and isinstance(value, torch.Tensor):
        return True
    if pd is not None and isinstance(value, (pd.Series, pd.DataFrame)):
        return True
    return False


def _is_row_like(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    if isinstance(value, np.ndarray):
        return value.ndim >= 1
    if torch is not None and isinstance(value, torch.Tensor):
        return value.ndim >= 1
    if pd is not None and isinstance(value, pd.Series):
        return True
    return isinstance(value, Sequence)


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return np.array(arr, dtype=STORAGE_DTYPE)

    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be numeric")
    out = np.empty(arr.shape[0], dtype=STORAGE_DTYPE)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes, bytearray)):
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
