from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models import Entity, Group, Size, stringify

logger = logging.getLogger(__name__)

GROUP_WIDTH = 300
GROUP_MIN_HEIGHT = 100
ROW_HEIGHT = 60
HEADER_HEIGHT = 40
CHILD_INSET = 20
CHILD_WIDTH = 260
CHILD_HEIGHT = 50


@dataclass(slots=True)
class GroupingResult:
    groups: list[Group] = field(default_factory=list)
    ungrouped: list[Entity] = field(default_factory=list)
    child_of: dict[str, str] = field(default_factory=dict)


def group_size(member_count: int) -> Size:
    """Container box for a group; a layout hint only."""
    return Size(width=GROUP_WIDTH, height=max(GROUP_MIN_HEIGHT, member_count * ROW_HEIGHT + HEADER_HEIGHT))


def child_offset(index: int) -> tuple[float, float]:
    """Top-left of the index-th child, relative to its container."""
    return float(CHILD_INSET), float(HEADER_HEIGHT + index * ROW_HEIGHT)


def group_key(entity: Entity, group_property: str) -> str | None:
    v = entity.properties.get(group_property)
    if v is None or v == "":
        return None
    return stringify(v)


def _unique_id(base: str, taken: set[str]) -> str:
    if base not in taken:
        return base
    k = 2
    while f"{base}-{k}" in taken:
        k += 1
    return f"{base}-{k}"


def group(nodes: Sequence[Entity], group_property: str) -> GroupingResult:
    """Fold nodes sharing `group_property` into containers.

    Nodes without the property, and values held by a single node, stay
    ungrouped. Groups and their children keep the order nodes were seen in.
    Container ids are `group-<value>`, suffixed `-2`, `-3`, ... when that
    id is already taken by a node or another container.
    """
    partitions: dict[str, list[Entity]] = {}
    for node in nodes:
        key = group_key(node, group_property)
        if key is not None:
            partitions.setdefault(key, []).append(node)

    res = GroupingResult()
    taken = {n.id for n in nodes}
    for value, members in partitions.items():
        if len(members) < 2:
            continue
        gid = _unique_id(f"group-{value}", taken)
        taken.add(gid)
        g = Group(
            id=gid,
            value=value,
            child_ids=tuple(m.id for m in members),
            size=group_size(len(members)),
        )
        res.groups.append(g)
        for m in members:
            res.child_of[m.id] = g.id
    res.ungrouped = [n for n in nodes if n.id not in res.child_of]

    logger.debug(
        "group by %r: %d groups, %d ungrouped of %d nodes",
        group_property,
        len(res.groups),
        len(res.ungrouped),
        len(nodes),
    )
    return res
