from sfgraphing.config import PlotManifest, build_data_sets, load_plot_manifest
from sfgraphing.errors import PlotDataError
from sfgraphing.multi import multi_plot_data_set, transpose_samples
from sfgraphing.series import NAMED_COLORS, Color, PlotDataSet, PlottingType, coerce_color

__all__ = [
    "Color",
    "NAMED_COLORS",
    "PlotDataError",
    "PlotDataSet",
    "PlotManifest",
    "PlottingType",
    "build_data_sets",
    "coerce_color",
    "load_plot_manifest",
    "multi_plot_data_set",
    "transpose_samples",
]
