from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Sequence

from sfgraphing.config import build_data_sets, load_plot_manifest
from sfgraphing.series import PlotDataSet


LOGGER = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sfgraphing")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    summary = sub.add_parser("summary", help="Build the data sets described by a TOML manifest and print them as JSON.")
    summary.add_argument("manifest", type=Path)
    summary.add_argument("--points", action="store_true", help="Include every (x, y) pair in the output.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "summary":
        try:
            manifest = load_plot_manifest(args.manifest)
            data_sets = build_data_sets(manifest)
        except (FileNotFoundError, ValueError) as exc:
            LOGGER.debug("summary failed", exc_info=True)
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print(json.dumps(summarize(data_sets, include_points=args.points), indent=2, sort_keys=True))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def summarize(data_sets: Sequence[PlotDataSet], *, include_points: bool = False) -> dict[str, object]:
    series: list[dict[str, object]] = []
    for ds in data_sets:
        entry: dict[str, object] = {
            "label": ds.label,
            "type": ds.plotting_type.value,
            "color": list(ds.color),
            "length": ds.data_length(),
        }
        if include_points:
            entry["points"] = [[x, y] for x, y in ds]
        series.append(entry)
    return {"count": len(series), "series": series}
