import sys
from pathlib import Path

import pytest

# Let the suite run from a plain checkout as well as an installed package.
SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from neo4j_visualizer.models import Entity, Relation  # noqa: E402


@pytest.fixture
def lineage_nodes():
    return [
        Entity(id="a", labels=("Table",), properties={"name": "orders", "schema": "sales"}),
        Entity(id="b", labels=("Table",), properties={"name": "customers", "schema": "sales"}),
        Entity(id="c", labels=("View",), properties={"name": "revenue", "schema": "reporting"}),
        Entity(id="d", labels=(), properties={"title": "raw dump"}),
    ]


@pytest.fixture
def lineage_relations():
    return [
        Relation(id="r1", type="FLOWS_TO", start_id="a", end_id="c"),
        Relation(id="r2", type="REFERENCES", start_id="a", end_id="b", properties={"weight": 3}),
        Relation(id="r3", type="DEPENDS_ON", start_id="c", end_id="ghost"),
    ]
