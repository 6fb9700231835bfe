"""Neo4j Visualizer.

Data preparation for graph and chart visualizations of Neo4j query results:
- chart normalization + chart type classification
- tabular views of query records
- hierarchical grouping of nodes into containers
- a dependency-free force-directed layout
"""

from .engine import VisualizationOptions, prepare_chart, prepare_graph, prepare_table
from .models import Entity, Group, Point, PositionedNode, Relation

__version__ = "0.1.0"

__all__ = [
    "Entity",
    "Relation",
    "Point",
    "PositionedNode",
    "Group",
    "VisualizationOptions",
    "prepare_chart",
    "prepare_graph",
    "prepare_table",
    "__version__",
]
