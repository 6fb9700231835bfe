from __future__ import annotations

from collections.abc import Iterable

DEFAULT_ICON = "circle"
DEFAULT_NODE_COLOR = "#00B5AD"
DEFAULT_EDGE_COLOR = "#999999"
GROUP_LABEL = "Group"
GROUP_ICON = "folder"

_ICONS: dict[str, str] = {
    "Database": "database",
    "Table": "table",
    "Column": "columns",
    "View": "eye",
    "Schema": "sitemap",
    "User": "user",
    "Role": "users",
    "Process": "cogs",
    "File": "file",
    "System": "server",
}

_NODE_COLORS: dict[str, str] = {
    "Database": "#2185D0",
    "Table": "#21BA45",
    "Column": "#F2711C",
    "View": "#6435C9",
    "Schema": "#A333C8",
    "User": "#E03997",
    "Role": "#A5673F",
    "Process": "#767676",
    "File": "#FBBD08",
    "System": "#DB2828",
    GROUP_LABEL: "#e9ecef",
}

_EDGE_COLORS: dict[str, str] = {
    "CONTAINS": "#21BA45",
    "REFERENCES": "#2185D0",
    "DEPENDS_ON": "#F2711C",
    "FLOWS_TO": "#6435C9",
    "TRANSFORMS": "#A333C8",
    "ACCESSES": "#E03997",
}


def node_icon(labels: Iterable[str]) -> str:
    """Icon of the first label that has one."""
    for label in labels:
        icon = _ICONS.get(label)
        if icon:
            return icon
    return DEFAULT_ICON


def node_color(primary_label: str) -> str:
    return _NODE_COLORS.get(primary_label, DEFAULT_NODE_COLOR)


def edge_color(rel_type: str) -> str:
    return _EDGE_COLORS.get(rel_type, DEFAULT_EDGE_COLOR)
