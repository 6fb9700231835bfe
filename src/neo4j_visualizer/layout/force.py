"""
Force-directed layout without an external layout library.

Nodes repel each other with an inverse-square force, edges pull their ends
together linearly, and an `alpha` factor decays linearly over the run so the
layout settles. Every call is self-contained: positions live in a local dict
that is returned to the caller.

Cost is O(iterations * n^2) because repulsion is all-pairs. That is fine for
tens to a few hundred nodes; bigger graphs would want a quadtree
(Barnes-Hut) for the repulsion pass.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import LayoutConfigError
from ..models import Canvas, Relation
from ..settings import settings

logger = logging.getLogger(__name__)

Position = tuple[float, float]

MIN_DISTANCE = 1.0
# Golden angle; spreads coincident pairs in different directions.
_NUDGE_ANGLE = math.pi * (3 - math.sqrt(5))


@dataclass(frozen=True, slots=True)
class ForceConfig:
    repulsion: float = 8000.0
    attraction: float = 0.03
    alpha_min: float = 0.05
    max_step: float = 50.0

    @classmethod
    def from_settings(cls) -> ForceConfig:
        return cls(
            repulsion=settings.repulsion,
            attraction=settings.attraction,
            alpha_min=settings.alpha_min,
        )

    def validate(self) -> None:
        if self.repulsion < 0 or self.attraction < 0:
            raise LayoutConfigError(
                f"force constants must be >= 0 (repulsion={self.repulsion}, attraction={self.attraction})"
            )
        if not 0 < self.alpha_min <= 1:
            raise LayoutConfigError(f"alpha_min must be in (0, 1], got {self.alpha_min}")
        if self.max_step <= 0:
            raise LayoutConfigError(f"max_step must be > 0, got {self.max_step}")


def _validate(canvas: Canvas, iterations: int) -> None:
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise LayoutConfigError(f"iterations must be an integer, got {iterations!r}")
    if iterations < 0:
        raise LayoutConfigError(f"iterations must be >= 0, got {iterations}")
    for name, dim in (("width", canvas.width), ("height", canvas.height)):
        if not isinstance(dim, (int, float)) or not math.isfinite(dim) or dim <= 0:
            raise LayoutConfigError(f"canvas {name} must be a positive number, got {dim!r}")


def edge_endpoints(edge: Any) -> tuple[str, str] | None:
    """(source, target) for a Relation, a mapping or a 2-tuple; None otherwise."""
    if isinstance(edge, Relation):
        return (edge.start_id, edge.end_id) if edge.has_endpoints else None
    if isinstance(edge, Mapping):
        src = edge.get("source", edge.get("startId", edge.get("startNodeId")))
        dst = edge.get("target", edge.get("endId", edge.get("endNodeId")))
    elif isinstance(edge, (tuple, list)) and len(edge) == 2:
        src, dst = edge
    else:
        return None
    if src is None or dst is None or src == "" or dst == "":
        return None
    return str(src), str(dst)


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def _resolve_edges(edges: Iterable[Any], index: Mapping[str, int]) -> list[tuple[int, int]]:
    out: list[tuple[int, int]] = []
    skipped = 0
    for e in edges:
        ends = edge_endpoints(e)
        if ends is None or ends[0] not in index or ends[1] not in index:
            skipped += 1
            continue
        a, b = index[ends[0]], index[ends[1]]
        if a != b:
            out.append((a, b))
    if skipped:
        logger.debug("layout: skipped %d edges with unknown endpoints", skipped)
    return out


def layout(
    node_ids: Sequence[str],
    edges: Iterable[Any] = (),
    canvas: Canvas | None = None,
    iterations: int | None = None,
    *,
    forces: ForceConfig | None = None,
    rng: random.Random | None = None,
) -> dict[str, Position]:
    """Compute 2-D positions for `node_ids`.

    Returns `{id: (x, y)}` with every coordinate inside
    `[margin, dimension - margin]`. One node sits at the center and two nodes
    sit at the 1/3 and 2/3 marks; neither case runs the simulation.

    `iterations` and `forces` default to the configured settings.

    Raises `LayoutConfigError` for negative iterations, non-positive canvas
    sizes or invalid force constants. Edges pointing at unknown ids are ignored.
    """
    canvas = canvas or Canvas()
    forces = forces or ForceConfig.from_settings()
    if iterations is None:
        iterations = settings.layout_iterations
    _validate(canvas, iterations)
    forces.validate()

    ids = list(dict.fromkeys(node_ids))
    n = len(ids)
    if n == 0:
        return {}
    if n == 1:
        return {ids[0]: canvas.center}
    if n == 2:
        cy = canvas.height / 2
        return {ids[0]: (canvas.width / 3, cy), ids[1]: (canvas.width * 2 / 3, cy)}

    rng = rng or random.Random()
    margin = canvas.margin
    x_lo, x_hi = margin, canvas.width - margin
    y_lo, y_hi = margin, canvas.height - margin

    xs = [rng.uniform(x_lo, x_hi) for _ in range(n)]
    ys = [rng.uniform(y_lo, y_hi) for _ in range(n)]

    index = {node_id: i for i, node_id in enumerate(ids)}
    links = _resolve_edges(edges, index)

    for k in range(iterations):
        alpha = max(forces.alpha_min, 1.0 - k / iterations)
        fx = [0.0] * n
        fy = [0.0] * n

        # Repulsion between all pairs
        for i in range(n):
            for j in range(i + 1, n):
                dx = xs[i] - xs[j]
                dy = ys[i] - ys[j]
                dist = math.hypot(dx, dy)
                if dist == 0.0:
                    angle = (i + j) * _NUDGE_ANGLE
                    dx, dy = math.cos(angle), math.sin(angle)
                    dist = 1.0
                ux, uy = dx / dist, dy / dist
                dist = max(dist, MIN_DISTANCE)
                force = forces.repulsion / (dist * dist) * alpha
                fx[i] += ux * force
                fy[i] += uy * force
                fx[j] -= ux * force
                fy[j] -= uy * force

        # Attraction along edges
        for a, b in links:
            dx = xs[b] - xs[a]
            dy = ys[b] - ys[a]
            dist = math.hypot(dx, dy)
            if dist == 0.0:
                continue
            force = dist * forces.attraction * alpha
            ux, uy = dx / dist, dy / dist
            fx[a] += ux * force
            fy[a] += uy * force
            fx[b] -= ux * force
            fy[b] -= uy * force

        # Integrate only after every force for this step is known
        for i in range(n):
            step = math.hypot(fx[i], fy[i])
            if step > forces.max_step:
                scale = forces.max_step / step
                fx[i] *= scale
                fy[i] *= scale
            xs[i] = _clamp(xs[i] + fx[i], x_lo, x_hi)
            ys[i] = _clamp(ys[i] + fy[i], y_lo, y_hi)

    logger.debug("layout: %d nodes, %d edges, %d iterations", n, len(links), iterations)
    return {node_id: (xs[i], ys[i]) for i, node_id in enumerate(ids)}
