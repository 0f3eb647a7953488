from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Any, TypeAlias

import numpy as np

from sfgraphing.adapters.normalize import STORAGE_DTYPE, coerce_1d_numeric
from sfgraphing.errors import fail_incompatible_sizes

Color: TypeAlias = tuple[int, int, int, int]
ColorLike: TypeAlias = Color | tuple[int, int, int] | str

NAMED_COLORS: dict[str, Color] = {
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "red": (255, 0, 0, 255),
    "green": (0, 255, 0, 255),
    "blue": (0, 0, 255, 255),
    "yellow": (255, 255, 0, 255),
    "magenta": (255, 0, 255, 255),
    "cyan": (0, 255, 255, 255),
    "transparent": (0, 0, 0, 0),
}

DEFAULT_COLOR: Color = NAMED_COLORS["white"]


class PlottingType(Enum):
    POINTS = "points"
    LINE = "line"
    BARS = "bars"

    @classmethod
    def parse(cls, value: "PlottingType | str") -> "PlottingType":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in {member.value, member.name.lower()}:
                    return member
        raise ValueError(f"unknown plotting type: {value!r}")


def coerce_color(color: Any) -> Color:
    """Accept ``(r, g, b)``, ``(r, g, b, a)``, ``#RRGGBB[AA]`` or a color name."""
    if isinstance(color, str):
        text = color.strip().lower()
        if text in NAMED_COLORS:
            return NAMED_COLORS[text]
        if text.startswith("#") and len(text) in {7, 9}:
            try:
                parts = [int(text[i : i + 2], 16) for i in range(1, len(text), 2)]
            except ValueError as exc:
                raise ValueError(f"invalid hex color: {color!r}") from exc
            return _rgba(parts)
        raise ValueError(f"unknown color: {color!r}")
    if isinstance(color, np.ndarray):
        color = color.tolist()
    if isinstance(color, Sequence):
        return _rgba(list(color))
    raise ValueError(f"unsupported color value: {color!r}")


def _rgba(parts: list[Any]) -> Color:
    if len(parts) not in {3, 4}:
        raise ValueError(f"color needs 3 or 4 components, got {len(parts)}")
    out: list[int] = []
    for part in parts:
        if isinstance(part, bool) or not isinstance(part, (int, float, np.integer, np.floating)):
            raise ValueError(f"color components must be integers: {parts!r}")
        if int(part) != part:
            raise ValueError(f"color components must be integers: {parts!r}")
        value = int(part)
        if value < 0 or value > 255:
            raise ValueError(f"color components must be within 0..255: {parts!r}")
        out.append(value)
    if len(out) == 3:
        out.append(255)
    return (out[0], out[1], out[2], out[3])


class PlotDataSet:
    """One styled series of ``(x, y)`` pairs.

    x and y are stored as separate ``float32`` arrays that always have the
    same length. Constructing a data set from x/y of different lengths is a
    caller bug and halts the process (see ``fail_incompatible_sizes``).
    """

    def __init__(
        self,
        x_values: Any = None,
        y_values: Any = None,
        *,
        color: ColorLike = DEFAULT_COLOR,
        label: str = "",
        plotting_type: PlottingType | str = PlottingType.POINTS,
    ) -> None:
        x_arr = _empty() if x_values is None else coerce_1d_numeric(x_values, label="x")
        y_arr = _empty() if y_values is None else coerce_1d_numeric(y_values, label="y")
        if x_arr.size != y_arr.size:
            fail_incompatible_sizes(int(x_arr.size), int(y_arr.size))
        self._x_values = x_arr
        self._y_values = y_arr
        self._color = coerce_color(color)
        self._label = str(label)
        self._plotting_type = PlottingType.parse(plotting_type)

    @staticmethod
    def multi(
        x_values: Any,
        y_values: Any,
        color: ColorLike,
        plotting_type: PlottingType | str,
        labels: Sequence[str] | None = (),
    ) -> list["PlotDataSet"]:
        from sfgraphing.multi import multi_plot_data_set

        return multi_plot_data_set(x_values, y_values, color, plotting_type, labels)

    @property
    def x_values(self) -> np.ndarray:
        return self._x_values.copy()

    @property
    def y_values(self) -> np.ndarray:
        return self._y_values.copy()

    def data_length(self) -> int:
        return int(self._x_values.size)

    def __len__(self) -> int:
        return self.data_length()

    def get_data_value(self, i: int) -> tuple[float, float]:
        idx = self._check_index(i)
        return (float(self._x_values[idx]), float(self._y_values[idx]))

    def set_data_value(self, i: int, value_pair: Sequence[float]) -> None:
        idx = self._check_index(i)
        x, y = _unpack_pair(value_pair)
        self._x_values[idx] = x
        self._y_values[idx] = y

    def push_pair(self, pair: Sequence[float]) -> None:
        x, y = _unpack_pair(pair)
        self._x_values = np.append(self._x_values, STORAGE_DTYPE(x))
        self._y_values = np.append(self._y_values, STORAGE_DTYPE(y))

    def pop_front(self, n: int = 1) -> None:
        """Drop the first ``n`` pairs; asking for more than exist just empties the set."""
        if n < 0:
            raise ValueError("n must be >= 0")
        if n == 0:
            return
        self._x_values = self._x_values[n:].copy()
        self._y_values = self._y_values[n:].copy()

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, color: ColorLike) -> None:
        self._color = coerce_color(color)

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, label: str) -> None:
        self._label = str(label)

    @property
    def plotting_type(self) -> PlottingType:
        return self._plotting_type

    @plotting_type.setter
    def plotting_type(self, plotting_type: PlottingType | str) -> None:
        self._plotting_type = PlottingType.parse(plotting_type)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        for x, y in zip(self._x_values.tolist(), self._y_values.tolist()):
            yield (float(x), float(y))

    def to_array(self) -> np.ndarray:
        return np.column_stack((self._x_values, self._y_values))

    def copy(self) -> "PlotDataSet":
        return PlotDataSet(
            self._x_values,
            self._y_values,
            color=self._color,
            label=self._label,
            plotting_type=self._plotting_type,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlotDataSet):
            return NotImplemented
        return (
            self._color == other._color
            and self._label == other._label
            and self._plotting_type is other._plotting_type
            and np.array_equal(self._x_values, other._x_values, equal_nan=True)
            and np.array_equal(self._y_values, other._y_values, equal_nan=True)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"PlotDataSet(length={self.data_length()}, label={self._label!r}, "
            f"plotting_type={self._plotting_type.name}, color={self._color})"
        )

    def _check_index(self, i: int) -> int:
        idx = int(i)
        if idx < 0 or idx >= self._x_values.size:
            raise IndexError(f"data index out of range: {i} (length {self._x_values.size})")
        return idx


def _empty() -> np.ndarray:
    return np.empty(0, dtype=STORAGE_DTYPE)


def _unpack_pair(pair: Sequence[float]) -> tuple[float, float]:
    if len(pair) != 2:
        raise ValueError(f"value pair must have exactly 2 entries, got {len(pair)}")
    return (float(pair[0]), float(pair[1]))
