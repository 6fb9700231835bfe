"""Turn raw query results into chart points.

Input shapes are tagged first (`tag_input`) and then handed to exactly one
normalizer per shape. Unrecognized or empty input yields `[]`; nothing in here
raises on bad values.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from ..models import UNKNOWN_LABEL, Entity, Point, Relation, first_present, is_number, stringify

logger = logging.getLogger(__name__)


class InputKind(Enum):
    RECORDS = "records"
    NODES = "nodes"
    RELATIONSHIPS = "relationships"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True, slots=True)
class RecordsInput:
    records: tuple[Any, ...]
    kind: InputKind = InputKind.RECORDS


@dataclass(frozen=True, slots=True)
class NodesInput:
    nodes: tuple[Any, ...]
    kind: InputKind = InputKind.NODES


@dataclass(frozen=True, slots=True)
class RelationshipsInput:
    relationships: tuple[Any, ...]
    kind: InputKind = InputKind.RELATIONSHIPS


@dataclass(frozen=True, slots=True)
class ArrayInput:
    items: tuple[Any, ...]
    kind: InputKind = InputKind.ARRAY


@dataclass(frozen=True, slots=True)
class ObjectInput:
    fields: Mapping[str, Any]
    kind: InputKind = InputKind.OBJECT


ChartInput = Union[RecordsInput, NodesInput, RelationshipsInput, ArrayInput, ObjectInput]
_TAGGED = (RecordsInput, NodesInput, RelationshipsInput, ArrayInput, ObjectInput)


def _is_collection(v: Any) -> bool:
    return isinstance(v, Sequence) and not isinstance(v, (str, bytes))


def tag_input(data: Any) -> ChartInput | None:
    """Classify raw input into one of the supported shapes.

    A mapping carrying several collections is tagged by the first of
    records > nodes > relationships.
    """
    if isinstance(data, Mapping):
        for key, ctor in (
            ("records", RecordsInput),
            ("nodes", NodesInput),
            ("relationships", RelationshipsInput),
        ):
            coll = data.get(key)
            if _is_collection(coll):
                return ctor(tuple(coll))
        return ObjectInput(dict(data))
    if _is_collection(data):
        return ArrayInput(tuple(data))
    return None


def _frequency(keys: Sequence[str]) -> list[Point]:
    # dicts keep insertion order, so labels come out in first-seen order
    counts: dict[str, int] = {}
    for k in keys:
        counts[k] = counts.get(k, 0) + 1
    return [Point(label=k, value=float(c)) for k, c in counts.items()]


def numeric_fields(rows: Sequence[Any]) -> list[str]:
    """Keys of the first row whose value is a number."""
    if not rows or not isinstance(rows[0], Mapping):
        return []
    return [str(k) for k, v in rows[0].items() if is_number(v)]


def _xy(row: Mapping[str, Any]) -> tuple[float | None, float | None]:
    x, y = row.get("x"), row.get("y")
    if is_number(x) and is_number(y):
        return float(x), float(y)
    return None, None


def _points_from_rows(
    rows: Sequence[Any], field: str, label_keys: tuple[str, ...], fallback: str
) -> list[Point]:
    out: list[Point] = []
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            continue
        value = row.get(field)
        if not is_number(value):
            continue
        label = first_present(row, *label_keys)
        x, y = _xy(row)
        out.append(
            Point(
                label=stringify(label) if label is not None else f"{fallback} {i + 1}",
                value=float(value),
                x=x,
                y=y,
            )
        )
    return out


def normalize_records(inp: RecordsInput) -> list[Point]:
    records = inp.records
    if not records or not isinstance(records[0], Mapping) or not records[0]:
        return []

    fields = numeric_fields(records)
    if fields:
        return _points_from_rows(records, fields[0], ("name", "title", "id"), "Record")

    # No numeric column: count the first column's values instead.
    first_key = next(iter(records[0]))
    keys = []
    for r in records:
        v = r.get(first_key) if isinstance(r, Mapping) else None
        keys.append(UNKNOWN_LABEL if v is None or v == "" else stringify(v))
    return _frequency(keys)


def normalize_nodes(inp: NodesInput) -> list[Point]:
    labels = []
    for raw in inp.nodes:
        if isinstance(raw, Entity):
            labels.append(raw.primary_label)
        elif isinstance(raw, Mapping):
            labels.append(Entity.from_raw(raw).primary_label)
    return _frequency(labels)


def normalize_relationships(inp: RelationshipsInput) -> list[Point]:
    types = []
    for raw in inp.relationships:
        if isinstance(raw, Relation):
            types.append(raw.type or UNKNOWN_LABEL)
        elif isinstance(raw, Mapping):
            types.append(str(raw.get("type") or UNKNOWN_LABEL))
    return _frequency(types)


def normalize_array(inp: ArrayInput) -> list[Point]:
    items = inp.items
    if not items:
        return []

    if isinstance(items[0], Mapping):
        fields = numeric_fields(items)
        if not fields:
            return []
        return _points_from_rows(items, fields[0], ("name", "label", "title"), "Item")

    if isinstance(items[0], (str, int, float)) and not isinstance(items[0], bool):
        return _frequency([stringify(x) for x in items])

    return []


def normalize_object(inp: ObjectInput) -> list[Point]:
    return [Point(label=str(k), value=float(v)) for k, v in inp.fields.items() if is_number(v)]


_NORMALIZERS: dict[InputKind, Callable[[Any], list[Point]]] = {
    InputKind.RECORDS: normalize_records,
    InputKind.NODES: normalize_nodes,
    InputKind.RELATIONSHIPS: normalize_relationships,
    InputKind.ARRAY: normalize_array,
    InputKind.OBJECT: normalize_object,
}


def normalize(data: Any) -> list[Point]:
    """Extract `{label, value}` points from any supported input shape."""
    tagged = data if isinstance(data, _TAGGED) else tag_input(data)
    if tagged is None:
        logger.debug("normalize: unsupported input type %s", type(data).__name__)
        return []

    points = _NORMALIZERS[tagged.kind](tagged)
    logger.debug("normalize: %s input -> %d points", tagged.kind.value, len(points))
    return points
