"""
lwwgraph - A Last-Write-Wins Element Graph CRDT.

This package implements a conflict-free replicated graph:
- Timestamped vertex and edge elements
- LWW-Element-Set with effective-change reporting on merge
- LWW-Element-Graph with vertex and adjacency projections and path search
- Sparse matrix views of the graph state
"""

from .adjacency_matrix import VertexMapping, adjacency_matrix, connected_components
from .clock import Clock, WallClock
from .element import Edge, LWWElement, Vertex
from .element_set import LWWElementSet
from .exceptions import LWWGraphError, PathNotFoundError, VertexNotFoundError
from .graph import GraphChanges, GraphMergeResult, LWWElementGraph
from .merge_result import LWWElementSetMergeResult

__version__ = "0.1.0"
__all__ = [
    "Clock",
    "WallClock",
    "LWWElement",
    "Vertex",
    "Edge",
    "LWWElementSet",
    "LWWElementSetMergeResult",
    "LWWElementGraph",
    "GraphChanges",
    "GraphMergeResult",
    "LWWGraphError",
    "VertexNotFoundError",
    "PathNotFoundError",
    "VertexMapping",
    "adjacency_matrix",
    "connected_components"
]
