"""
Exceptions raised by local-only operations of the LWW-Element-Graph.
"""


class LWWGraphError(Exception):
    """Base class for errors raised by the graph."""


class VertexNotFoundError(LWWGraphError):
    """A vertex required by the operation is not present on the local replica."""

    def __init__(self, vertex: str):
        super().__init__(f"Vertex {vertex!r} not found in graph")
        self.vertex = vertex


class PathNotFoundError(LWWGraphError):
    """No path connects the two vertices."""

    def __init__(self, source: str, target: str):
        super().__init__(f"No path found from {source!r} to {target!r}")
        self.source = source
        self.target = target
