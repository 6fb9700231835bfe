"""Tabular view of query records.

Headers are the union of record keys in first-seen order. Cells are display
text: nested values are JSON, missing values are empty strings.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..models import is_number, stringify

logger = logging.getLogger(__name__)


class ColumnType(str, Enum):
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    OBJECT = "Object"
    TEXT = "Text"


@dataclass(slots=True)
class TableModel:
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    column_types: dict[str, ColumnType] = field(default_factory=dict)
    title: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "headers": list(self.headers),
            "rows": [list(r) for r in self.rows],
            "columnTypes": {h: t.value for h, t in self.column_types.items()},
        }


def column_type(v: Any) -> ColumnType:
    # bool before number: True is an int in Python
    if isinstance(v, bool):
        return ColumnType.BOOLEAN
    if is_number(v):
        return ColumnType.NUMBER
    if isinstance(v, (Mapping, list, tuple)):
        return ColumnType.OBJECT
    return ColumnType.TEXT


def cell_text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, (Mapping, list, tuple)):
        return json.dumps(v, default=str)
    return stringify(v)


def build_table(records: Iterable[Any], title: str | None = None) -> TableModel:
    """Lay `records` out as rows under the union of their keys.

    Non-mapping records are skipped. A column's type comes from its first
    non-null value; columns that are null throughout are Text.
    """
    rows_in = [r for r in records if isinstance(r, Mapping)]
    headers = list(dict.fromkeys(str(k) for r in rows_in for k in r))

    out = TableModel(headers=headers, title=title)
    for r in rows_in:
        out.rows.append([cell_text(r.get(h)) for h in headers])

    for h in headers:
        first = next((r[h] for r in rows_in if r.get(h) is not None), None)
        out.column_types[h] = column_type(first) if first is not None else ColumnType.TEXT

    logger.debug("build_table: %d rows, %d columns", len(out.rows), len(headers))
    return out
