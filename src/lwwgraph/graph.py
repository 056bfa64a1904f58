"""
Last-Write-Wins Element Graph (LWW-Element-Graph).

The graph is made of two LWW-Element-Sets, one of vertices and one of edges.
On top of them it keeps two projections of the latest known state: the set of
vertices currently in the graph and the adjacency lists implied by the edges
currently in the graph. The projections slightly increase the cost of updates
and merges, but keep reads from scanning the logs of the two sets.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .clock import Clock, WallClock
from .element import Edge, Vertex
from .element_set import LWWElementSet
from .exceptions import PathNotFoundError, VertexNotFoundError
from .merge_result import LWWElementSetMergeResult


class GraphChanges(NamedTuple):
    """Full history of a replica, in the argument order of LWWElementGraph.merge()."""

    add_vertices: Tuple[Vertex, ...]
    remove_vertices: Tuple[Vertex, ...]
    add_edges: Tuple[Edge, ...]
    remove_edges: Tuple[Edge, ...]


@dataclass(frozen=True)
class GraphMergeResult:
    """Effective changes of a graph merge, per element set."""

    vertices: LWWElementSetMergeResult
    edges: LWWElementSetMergeResult

    def is_empty(self) -> bool:
        return self.vertices.is_empty() and self.edges.is_empty()


class LWWElementGraph:
    """
    LWW-Element-Graph CRDT.

    add_vertex(), remove_vertex(), add_edge() and remove_edge() are intended
    for execution at the source replica only. Changes from other replicas are
    applied through merge().

    Edges are undirected for adjacency purposes, but an edge is stored with the
    order of its vertices: (A, B) and (B, A) are tracked as different elements.
    Removing a vertex does not remove its edges; vertices that are no longer in
    the graph are filtered out when connections are read.
    """

    def __init__(self, replica_id: str = "local", clock: Optional[Clock] = None):
        self.replica_id = replica_id
        self.clock = clock or WallClock()

        self.vertices = LWWElementSet()
        self.edges = LWWElementSet()

        # Projections of the latest known state (vertex_state is used as an ordered set)
        self.vertex_state: Dict[str, None] = {}
        self.adjacency: Dict[str, List[str]] = {}

        self.logger = logging.getLogger(f"LWWElementGraph-{replica_id}")

    def add_vertex(self, value: str) -> None:
        """Add a vertex to the graph."""
        self.vertices.add(Vertex(value, self.clock()))
        self._add_to_vertex_state(value)
        self.logger.debug(f"Added vertex {value}")

    def remove_vertex(self, value: str) -> None:
        """Remove a vertex from the graph. Its edges are kept."""
        self.vertices.remove(Vertex(value, self.clock()))
        self._remove_from_vertex_state(value)
        self.logger.debug(f"Removed vertex {value}")

    def does_contain_vertex(self, value: str) -> bool:
        return value in self.vertex_state

    def get_vertices(self) -> List[str]:
        """All vertices currently in the graph."""
        return list(self.vertex_state)

    def add_edge(self, vertex_a: str, vertex_b: str) -> None:
        """
        Add an edge between two vertices.

        Both vertices must be in the graph of this replica.

        Raises:
            VertexNotFoundError: if either vertex is not in the graph.
        """
        for vertex in (vertex_a, vertex_b):
            if vertex not in self.vertex_state:
                self.logger.warning(f"Cannot add edge ({vertex_a}, {vertex_b}): unknown vertex {vertex}")
                raise VertexNotFoundError(vertex)

        self.edges.add(Edge(vertex_a, vertex_b, self.clock()))
        self._link(vertex_a, vertex_b)
        self.logger.debug(f"Added edge ({vertex_a}, {vertex_b})")

    def remove_edge(self, vertex_a: str, vertex_b: str) -> None:
        """
        Remove an edge.

        The removal targets the edge stored as (vertex_a, vertex_b); an edge
        added as (vertex_b, vertex_a) is a different element of the edge set.
        """
        self.edges.remove(Edge(vertex_a, vertex_b, self.clock()))
        self._unlink(vertex_a, vertex_b)
        self.logger.debug(f"Removed edge ({vertex_a}, {vertex_b})")

    def does_contain_edge(self, vertex_a: str, vertex_b: str) -> bool:
        if vertex_a not in self.vertex_state or vertex_b not in self.vertex_state:
            return False
        return (vertex_b in self.adjacency.get(vertex_a, ()) and
                vertex_a in self.adjacency.get(vertex_b, ()))

    def get_connected_vertices(self, vertex: str) -> List[str]:
        """All vertices in the graph connected to the given vertex."""
        if vertex not in self.vertex_state:
            return []
        return [
            neighbor for neighbor in self.adjacency.get(vertex, ())
            if neighbor in self.vertex_state
        ]

    def find_path(self, source: str, target: str) -> List[str]:
        """
        Find any path between two vertices.

        Uses a depth-first search, which tends to find some path quicker than
        a breadth-first one; the path found is not necessarily the shortest.

        Raises:
            PathNotFoundError: if no path connects the two vertices.
        """
        path = [source]
        if source == target:
            return path

        visited = {source}
        # One iterator over connected vertices per vertex on the path
        stack: List[Iterator[str]] = [iter(self.get_connected_vertices(source))]

        while stack:
            next_vertex = next((v for v in stack[-1] if v not in visited), None)
            if next_vertex is None:
                # Dead end, backtrack
                stack.pop()
                path.pop()
                continue

            visited.add(next_vertex)
            path.append(next_vertex)
            if next_vertex == target:
                return path
            stack.append(iter(self.get_connected_vertices(next_vertex)))

        raise PathNotFoundError(source, target)

    def merge(self, add_vertices: Iterable[Vertex], remove_vertices: Iterable[Vertex],
              add_edges: Iterable[Edge], remove_edges: Iterable[Edge]) -> GraphMergeResult:
        """
        Merge concurrent changes from another replica.

        Only the effective changes reported by the two element sets are applied
        to the projections.
        """
        vertex_result = self.vertices.merge(add_vertices, remove_vertices)
        edge_result = self.edges.merge(add_edges, remove_edges)

        for vertex in vertex_result.effective_additions.values():
            self._add_to_vertex_state(vertex.value)
        for vertex in vertex_result.effective_removals.values():
            self._remove_from_vertex_state(vertex.value)
        for edge in edge_result.effective_additions.values():
            self._link(edge.vertex_a, edge.vertex_b)
        for edge in edge_result.effective_removals.values():
            self._unlink(edge.vertex_a, edge.vertex_b)

        result = GraphMergeResult(vertex_result, edge_result)
        if not result.is_empty():
            self.logger.info(
                f"Merge applied: vertices +{len(vertex_result.effective_additions)}"
                f"/-{len(vertex_result.effective_removals)}, "
                f"edges +{len(edge_result.effective_additions)}"
                f"/-{len(edge_result.effective_removals)}"
            )
        return result

    def changes(self) -> GraphChanges:
        """Every addition and removal recorded by this replica, ready to merge elsewhere."""
        return GraphChanges(
            add_vertices=self.vertices.additions(),
            remove_vertices=self.vertices.removals(),
            add_edges=self.edges.additions(),
            remove_edges=self.edges.removals()
        )

    def rebuild_projections(self) -> None:
        """Derive the vertex state and the adjacency lists again from the element sets."""
        self.vertex_state = dict.fromkeys(vertex.value for vertex in self.vertices.get_all_elements())
        self.adjacency = {}
        for edge in self.edges.get_all_elements():
            self._link(edge.vertex_a, edge.vertex_b)
        self.logger.info(f"Rebuilt projections: {len(self.vertex_state)} vertices, "
                         f"{len(self.adjacency)} adjacency lists")

    def _add_to_vertex_state(self, value: str) -> None:
        self.vertex_state[value] = None

    def _remove_from_vertex_state(self, value: str) -> None:
        self.vertex_state.pop(value, None)

    def _link(self, vertex_a: str, vertex_b: str) -> None:
        """Update the adjacency lists for an added edge."""
        neighbors = self.adjacency.setdefault(vertex_a, [])
        if vertex_b not in neighbors:
            neighbors.append(vertex_b)
        neighbors = self.adjacency.setdefault(vertex_b, [])
        if vertex_a not in neighbors:
            neighbors.append(vertex_a)

    def _unlink(self, vertex_a: str, vertex_b: str) -> None:
        """Update the adjacency lists for a removed edge."""
        if vertex_b in self.adjacency.get(vertex_a, ()):
            self.adjacency[vertex_a].remove(vertex_b)
        if vertex_a in self.adjacency.get(vertex_b, ()):
            self.adjacency[vertex_b].remove(vertex_a)

    def __str__(self) -> str:
        connections = {vertex: self.get_connected_vertices(vertex) for vertex in self.vertex_state}
        return f"LWWElementGraph({self.replica_id}): {connections}"
