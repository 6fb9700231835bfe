"""Graph path: group nodes into containers and place them on a canvas."""

from .force import ForceConfig, layout
from .grid import grid_layout
from .grouping import GroupingResult, child_offset, group, group_size

__all__ = [
    "ForceConfig",
    "GroupingResult",
    "child_offset",
    "grid_layout",
    "group",
    "group_size",
    "layout",
]
