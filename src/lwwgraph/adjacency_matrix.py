"""
Sparse matrix views of the current state of an LWW-Element-Graph.

Only vertices currently in the graph take part, and only connections between
them, as returned by LWWElementGraph.get_connected_vertices().
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Tuple

import numpy as np
from scipy.sparse import csr_matrix, lil_matrix
from scipy.sparse import csgraph

if TYPE_CHECKING:
    from .graph import LWWElementGraph


@dataclass
class VertexMapping:
    """Maps vertices to matrix indices for efficient matrix operations"""
    vertex_to_index: Dict[str, int] = field(default_factory=dict)
    index_to_vertex: Dict[int, str] = field(default_factory=dict)
    next_index: int = 0

    def get_or_create_index(self, vertex: str) -> int:
        """Get or create a matrix index for the given vertex"""
        if vertex not in self.vertex_to_index:
            self.vertex_to_index[vertex] = self.next_index
            self.index_to_vertex[self.next_index] = vertex
            self.next_index += 1
        return self.vertex_to_index[vertex]

    def size(self) -> int:
        return self.next_index


def adjacency_matrix(graph: 'LWWElementGraph') -> Tuple[csr_matrix, VertexMapping]:
    """
    Build the symmetric adjacency matrix of the graph.

    Rows and columns follow the order of graph.get_vertices(); the mapping
    translates between vertices and indices.
    """
    mapping = VertexMapping()
    for vertex in graph.get_vertices():
        mapping.get_or_create_index(vertex)

    n = mapping.size()
    matrix = lil_matrix((n, n), dtype=np.int8)
    for vertex, row in mapping.vertex_to_index.items():
        for neighbor in graph.get_connected_vertices(vertex):
            matrix[row, mapping.vertex_to_index[neighbor]] = 1

    return matrix.tocsr(), mapping


def connected_components(graph: 'LWWElementGraph') -> List[List[str]]:
    """
    Group the vertices of the graph by connected component.

    Components are ordered by their first vertex in graph.get_vertices(), and
    vertices keep that order within each component.
    """
    matrix, mapping = adjacency_matrix(graph)
    if mapping.size() == 0:
        return []

    _, labels = csgraph.connected_components(matrix, directed=False)

    components: Dict[int, List[str]] = {}
    for index, label in enumerate(labels):
        components.setdefault(int(label), []).append(mapping.index_to_vertex[index])
    return list(components.values())
