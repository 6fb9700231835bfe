"""Entry points that turn raw query results into render-ready models.

Three independent paths:
- `prepare_chart`: normalize -> classify
- `prepare_table`: records -> headers, text rows, column types
- `prepare_graph`: group -> layout
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .charts import ChartType, TableModel, build_table, classify, normalize
from .errors import ConfigurationError
from .layout import ForceConfig, GroupingResult, child_offset, grid_layout, group, layout
from .models import Canvas, Entity, Group, Point, PositionedNode, Relation, RenderEdge, is_number
from .settings import settings
from .styles import GROUP_ICON, GROUP_LABEL, edge_color, node_color, node_icon

logger = logging.getLogger(__name__)

DEFAULT_EDGE_WIDTH = 2.0


class VisualizationOptions(BaseModel):
    """Caller-supplied configuration. Accepts camelCase keys as well."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: str | None = None
    width: int = Field(default_factory=lambda: settings.default_width, gt=0)
    height: int = Field(default_factory=lambda: settings.default_height, gt=0)
    node_spacing: float = Field(default=100, ge=0, alias="nodeSpacing")
    rank_spacing: float = Field(default=150, ge=0, alias="rankSpacing")
    group_by_property: str | None = Field(default=None, alias="groupByProperty")
    show_hierarchy: bool = Field(default=True, alias="showHierarchy")
    iterations: int = Field(default_factory=lambda: settings.layout_iterations, ge=0)
    seed: int | None = None
    layout: Literal["force", "grid"] = "force"

    @classmethod
    def parse(cls, raw: Mapping[str, Any] | VisualizationOptions | None) -> VisualizationOptions:
        if isinstance(raw, VisualizationOptions):
            return raw
        try:
            return cls.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ConfigurationError(f"invalid visualization options: {e}") from e

    @property
    def canvas(self) -> Canvas:
        return Canvas(width=self.width, height=self.height)


@dataclass(slots=True)
class ChartModel:
    points: list[Point]
    chart_type: ChartType
    title: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.points

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "chartType": self.chart_type.value,
            "points": [p.to_dict() for p in self.points],
        }


@dataclass(slots=True)
class GraphModel:
    nodes: list[PositionedNode] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    edges: list[RenderEdge] = field(default_factory=list)
    node_types: list[str] = field(default_factory=list)
    edge_types: list[str] = field(default_factory=list)
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "nodes": [n.to_dict() for n in self.nodes],
            "groups": [g.to_dict() for g in self.groups],
            "edges": [e.to_dict() for e in self.edges],
            "nodeTypes": list(self.node_types),
            "edgeTypes": list(self.edge_types),
        }


def prepare_chart(
    data: Any, options: Mapping[str, Any] | VisualizationOptions | None = None
) -> ChartModel:
    """Normalize `data` into points and pick a chart type.

    An empty `points` list is the "no data" state, not an error.
    """
    opts = VisualizationOptions.parse(options)
    points = normalize(data)
    chart_type = classify(points)
    if not points:
        logger.debug("prepare_chart: no chartable data found")
    return ChartModel(points=points, chart_type=chart_type, title=opts.title)


def prepare_table(
    data: Any, options: Mapping[str, Any] | VisualizationOptions | None = None
) -> TableModel:
    """Tabulate a record list, or the `records` of a result object."""
    opts = VisualizationOptions.parse(options)
    if isinstance(data, Mapping):
        data = data.get("records")
    if not isinstance(data, (list, tuple)):
        data = []
    return build_table(data, title=opts.title)


def _as_entities(nodes: Iterable[Any]) -> list[Entity]:
    out: list[Entity] = []
    for n in nodes:
        if isinstance(n, Entity):
            out.append(n)
        elif isinstance(n, Mapping):
            out.append(Entity.from_raw(n))
    return out


def _as_relations(rels: Iterable[Any]) -> list[Relation]:
    out: list[Relation] = []
    for r in rels:
        if isinstance(r, Relation):
            out.append(r)
        elif isinstance(r, Mapping):
            out.append(Relation.from_raw(r))
    return out


def _first_seen(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _lift_edges(relations: list[Relation], child_of: Mapping[str, str]) -> list[tuple[str, str]]:
    """Re-point edges at their containers; edges inside one container vanish."""
    out: list[tuple[str, str]] = []
    for r in relations:
        if not r.has_endpoints:
            continue
        src = child_of.get(r.start_id, r.start_id)
        dst = child_of.get(r.end_id, r.end_id)
        if src != dst:
            out.append((src, dst))
    return out


def _edge_width(rel: Relation) -> float:
    weight = rel.properties.get("weight")
    if is_number(weight) and weight:
        return max(1.0, float(weight))
    return DEFAULT_EDGE_WIDTH


def _place(
    top_ids: list[str], edges: list[tuple[str, str]], opts: VisualizationOptions
) -> dict[str, tuple[float, float]]:
    if opts.layout == "grid":
        return grid_layout(top_ids, node_spacing=opts.node_spacing, rank_spacing=opts.rank_spacing)
    rng = random.Random(opts.seed) if opts.seed is not None else None
    return layout(
        top_ids,
        edges,
        opts.canvas,
        opts.iterations,
        forces=ForceConfig.from_settings(),
        rng=rng,
    )


def prepare_graph(
    nodes: Iterable[Any],
    relationships: Iterable[Any] = (),
    options: Mapping[str, Any] | VisualizationOptions | None = None,
) -> GraphModel:
    """Group, lay out and style a node/relationship set.

    Top-level items (containers and ungrouped nodes) get canvas coordinates.
    Children of a container get coordinates relative to the container and carry
    its id in `parent_id`.
    """
    opts = VisualizationOptions.parse(options)
    entities = _as_entities(nodes)
    relations = _as_relations(relationships)

    if opts.show_hierarchy and opts.group_by_property:
        grouping = group(entities, opts.group_by_property)
    else:
        grouping = GroupingResult(ungrouped=list(entities))

    top_ids = [g.id for g in grouping.groups] + [e.id for e in grouping.ungrouped]
    positions = _place(top_ids, _lift_edges(relations, grouping.child_of), opts)

    by_id = {e.id: e for e in entities}
    out = GraphModel(groups=list(grouping.groups), title=opts.title)

    for g in grouping.groups:
        gx, gy = positions[g.id]
        out.nodes.append(
            PositionedNode(
                id=g.id,
                x=gx,
                y=gy,
                label=g.value,
                primary_label=GROUP_LABEL,
                color=node_color(GROUP_LABEL),
                icon=GROUP_ICON,
            )
        )
        for i, child_id in enumerate(g.child_ids):
            child = by_id[child_id]
            cx, cy = child_offset(i)
            out.nodes.append(_positioned(child, cx, cy, parent_id=g.id))

    for e in grouping.ungrouped:
        x, y = positions[e.id]
        out.nodes.append(_positioned(e, x, y))

    known = set(by_id)
    for r in relations:
        if not r.has_endpoints or r.start_id not in known or r.end_id not in known:
            continue
        out.edges.append(
            RenderEdge(
                id=r.id,
                source=r.start_id,
                target=r.end_id,
                type=r.type,
                color=edge_color(r.type),
                width=_edge_width(r),
            )
        )

    out.node_types = _first_seen(label for e in entities for label in e.labels)
    out.edge_types = _first_seen(r.type for r in relations)
    logger.debug(
        "prepare_graph: %d nodes, %d groups, %d edges (%s layout)",
        len(entities),
        len(out.groups),
        len(out.edges),
        opts.layout,
    )
    return out


def _positioned(e: Entity, x: float, y: float, *, parent_id: str | None = None) -> PositionedNode:
    return PositionedNode(
        id=e.id,
        x=x,
        y=y,
        parent_id=parent_id,
        label=e.display_name,
        primary_label=e.primary_label,
        color=node_color(e.primary_label),
        icon=node_icon(e.labels),
    )
