"""Chart path: normalize raw results into points, then pick a chart type."""

from .classify import ChartType, classify
from .normalize import InputKind, normalize, tag_input
from .table import ColumnType, TableModel, build_table

__all__ = [
    "ChartType",
    "ColumnType",
    "InputKind",
    "TableModel",
    "build_table",
    "classify",
    "normalize",
    "tag_input",
]
