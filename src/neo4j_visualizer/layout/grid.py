from __future__ import annotations

import math
from collections.abc import Sequence

from ..errors import LayoutConfigError

# Nominal node footprint added to the configured spacing.
CELL_WIDTH = 200
CELL_HEIGHT = 100


def grid_layout(
    item_ids: Sequence[str], *, node_spacing: float = 100, rank_spacing: float = 150
) -> dict[str, tuple[float, float]]:
    """Row-major grid with ceil(sqrt(n)) columns, starting at the origin."""
    if node_spacing < 0 or rank_spacing < 0:
        raise LayoutConfigError(
            f"spacing must be >= 0 (node_spacing={node_spacing}, rank_spacing={rank_spacing})"
        )
    ids = list(dict.fromkeys(item_ids))
    if not ids:
        return {}

    cols = math.ceil(math.sqrt(len(ids)))
    out: dict[str, tuple[float, float]] = {}
    for i, item_id in enumerate(ids):
        row, col = divmod(i, cols)
        out[item_id] = (float(col * (node_spacing + CELL_WIDTH)), float(row * (rank_spacing + CELL_HEIGHT)))
    return out
