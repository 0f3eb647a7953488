from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import tomllib
from typing import Any

from sfgraphing.multi import multi_plot_data_set
from sfgraphing.series import DEFAULT_COLOR, Color, PlotDataSet, PlottingType, coerce_color


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSetEntry:
    x: Any
    y: Any
    color: Color
    plotting_type: PlottingType
    labels: list[str]


@dataclass(frozen=True)
class PlotManifest:
    path: Path
    entries: list[DataSetEntry]


def load_plot_manifest(path: str | Path) -> PlotManifest:
    manifest_path = Path(path)
    if not manifest_path.exists():
        raise FileNotFoundError(f"plot manifest not found: {manifest_path}")
    with manifest_path.open("rb") as f:
        raw = tomllib.load(f)

    defaults = raw.get("defaults", {})
    if not isinstance(defaults, dict):
        raise ValueError("defaults must be a table")
    default_color = _coerce_color_field(defaults.get("color", DEFAULT_COLOR), "defaults.color")
    default_type = _coerce_type_field(defaults.get("type", PlottingType.POINTS), "defaults.type")

    tables = raw.get("dataset", [])
    if not isinstance(tables, list) or not all(isinstance(t, dict) for t in tables):
        raise ValueError("dataset must be an array of tables")

    entries: list[DataSetEntry] = []
    for i, table in enumerate(tables):
        field = f"dataset[{i}]"
        try:
            x = table["x"]
            y = table["y"]
        except KeyError as exc:
            raise ValueError(f"{field} missing required field: {exc.args[0]}") from exc
        entries.append(
            DataSetEntry(
                x=x,
                y=y,
                color=_coerce_color_field(table["color"], f"{field}.color") if "color" in table else default_color,
                plotting_type=(
                    _coerce_type_field(table["type"], f"{field}.type") if "type" in table else default_type
                ),
                labels=_coerce_labels(table.get("labels", []), f"{field}.labels"),
            )
        )
    LOGGER.debug("loaded %d dataset entries from %s", len(entries), manifest_path)
    return PlotManifest(path=manifest_path, entries=entries)


def build_data_sets(manifest: PlotManifest) -> list[PlotDataSet]:
    out: list[PlotDataSet] = []
    for entry in manifest.entries:
        out.extend(multi_plot_data_set(entry.x, entry.y, entry.color, entry.plotting_type, entry.labels))
    return out


def _coerce_color_field(value: Any, field: str) -> Color:
    try:
        return coerce_color(value)
    except ValueError as exc:
        raise ValueError(f"{field}: {exc}") from exc


def _coerce_type_field(value: Any, field: str) -> PlottingType:
    try:
        return PlottingType.parse(value)
    except ValueError as exc:
        raise ValueError(f"{field}: {exc}") from exc


def _coerce_labels(value: Any, field: str) -> list[str]:
    if not isinstance(value, list):
        raise ValueError(f"{field} must be a list")
    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field} must contain only strings")
        out.append(item)
    return out
