from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

# Closed set of property value shapes. Lists show up for Neo4j array properties.
Value = Union[str, int, float, bool, None, "list[Value]", "dict[str, Value]"]

UNKNOWN_LABEL = "Unknown"


def coerce_value(v: Any) -> Value:
    """Fold an arbitrary property value into the closed `Value` variant."""
    if v is None or isinstance(v, (str, bool, int, float)):
        return v
    if isinstance(v, Mapping):
        return {str(k): coerce_value(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [coerce_value(x) for x in v]
    return str(v)


def coerce_properties(props: Any) -> dict[str, Value]:
    if not isinstance(props, Mapping):
        return {}
    return {str(k): coerce_value(v) for k, v in props.items()}


def is_number(v: Any) -> bool:
    """True for real numbers; bools and NaN don't count."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return not (isinstance(v, float) and math.isnan(v))


def stringify(v: Any) -> str:
    """Text form of a scalar; `1.0` and `1` both become "1", bools are lowercase."""
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def _ref(v: Any) -> str:
    # Missing ids stay empty rather than turning into "None".
    return "" if v is None else stringify(v)


def first_present(props: Mapping[str, Any], *keys: str) -> Any:
    """Return the first value among `keys` that is neither None nor an empty string."""
    for k in keys:
        v = props.get(k)
        if v is not None and v != "":
            return v
    return None


@dataclass(frozen=True, slots=True)
class Entity:
    """A graph node as returned by a Neo4j query.

    `labels` may be empty; `primary_label` then falls back to "Unknown".
    """

    id: str
    labels: tuple[str, ...] = ()
    properties: dict[str, Value] = field(default_factory=dict)

    @property
    def primary_label(self) -> str:
        return self.labels[0] if self.labels and self.labels[0] else UNKNOWN_LABEL

    @property
    def display_name(self) -> str:
        return str(first_present(self.properties, "name", "title") or self.id)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Entity:
        labels = raw.get("labels") or ()
        if isinstance(labels, str):
            labels = (labels,)
        elif not isinstance(labels, (list, tuple)):
            labels = ()
        return cls(
            id=_ref(raw.get("id")),
            labels=tuple(str(x) for x in labels),
            properties=coerce_properties(raw.get("properties")),
        )


@dataclass(frozen=True, slots=True)
class Relation:
    """A directed, typed edge between two entities.

    Endpoints are not validated against any node set.
    """

    id: str
    type: str
    start_id: str
    end_id: str
    properties: dict[str, Value] = field(default_factory=dict)

    @property
    def has_endpoints(self) -> bool:
        return bool(self.start_id and self.end_id)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Relation:
        start = raw.get("startId", raw.get("startNodeId", raw.get("source")))
        end = raw.get("endId", raw.get("endNodeId", raw.get("target")))
        return cls(
            id=_ref(raw.get("id")),
            type=str(raw.get("type") or UNKNOWN_LABEL),
            start_id=_ref(start),
            end_id=_ref(end),
            properties=coerce_properties(raw.get("properties")),
        )


@dataclass(frozen=True, slots=True)
class Point:
    """One chart datum."""

    label: str
    value: float
    x: float | None = None
    y: float | None = None

    @property
    def has_xy(self) -> bool:
        return self.x is not None and self.y is not None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"label": self.label, "value": self.value}
        if self.x is not None:
            out["x"] = self.x
        if self.y is not None:
            out["y"] = self.y
        return out


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Canvas:
    width: float = 800
    height: float = 600

    @property
    def margin(self) -> float:
        base = 30.0 if min(self.width, self.height) < 400 else 50.0
        # Tiny canvases shrink the margin so the usable box never inverts.
        return min(base, min(self.width, self.height) / 4)

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


@dataclass(frozen=True, slots=True)
class Group:
    """Synthetic container for 2+ entities sharing a grouping value."""

    id: str
    value: str
    child_ids: tuple[str, ...]
    size: Size

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.value,
            "childIds": list(self.child_ids),
            "size": {"width": self.size.width, "height": self.size.height},
        }


@dataclass(frozen=True, slots=True)
class PositionedNode:
    id: str
    x: float
    y: float
    parent_id: str | None = None
    label: str = ""
    primary_label: str = UNKNOWN_LABEL
    color: str = ""
    icon: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "label": self.label,
            "primaryLabel": self.primary_label,
            "color": self.color,
            "icon": self.icon,
        }
        if self.parent_id is not None:
            out["parentId"] = self.parent_id
        return out


@dataclass(frozen=True, slots=True)
class RenderEdge:
    id: str
    source: str
    target: str
    type: str
    color: str
    width: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "color": self.color,
            "width": self.width,
        }
