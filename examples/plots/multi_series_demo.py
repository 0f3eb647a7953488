from __future__ import annotations

from pathlib import Path

import numpy as np

from sfgraphing import PlotDataSet, PlottingType, build_data_sets, load_plot_manifest


def main() -> None:
    t = np.linspace(0.0, 2.0 * np.pi, 16)
    # One row per sample: [sin, cos].
    wide = np.column_stack((np.sin(t), np.cos(t)))
    for ds in PlotDataSet.multi(t, wide, (62, 149, 255), PlottingType.LINE, ["sin"]):
        print(f"{ds.label or '<unlabeled>'}: {ds.data_length()} points, first={ds.get_data_value(0)}")

    stream = PlotDataSet(color="green", label="stream", plotting_type=PlottingType.POINTS)
    for i in range(10):
        stream.push_pair((float(i), float(i * i)))
        if stream.data_length() > 4:
            stream.pop_front()
    print(f"stream window: {list(stream)}")

    manifest = load_plot_manifest(Path(__file__).with_name("wide_table.toml"))
    for ds in build_data_sets(manifest):
        print(ds)


if __name__ == "__main__":
    main()
