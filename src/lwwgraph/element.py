"""
Elements that can be stored in an LWW-Element-Set.

An element is an immutable, timestamped value. Two concrete kinds exist:
vertices and edges. Equality only looks at the values an element carries,
never at its timestamp, since the timestamp only records when the element
was added or removed.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict

from .clock import Clock, WallClock


class LWWElement(ABC):
    """Base class for any element that can be inserted into an LWW-Element-Set."""

    timestamp: float

    @abstractmethod
    def equals(self, other: 'LWWElement') -> bool:
        """Compare values with another element, ignoring timestamps."""
        pass

    @abstractmethod
    def unique_value(self) -> str:
        """
        Key identifying the element independently of its timestamp.

        Elements of different kinds never share a unique value, even when
        they carry the same strings.
        """
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        pass

    def replicate_now(self, clock: Clock = None) -> 'LWWElement':
        """Copy the element with the same value(s), stamped with the current time."""
        clock = clock or WallClock()
        return replace(self, timestamp=clock())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LWWElement):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.unique_value())

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'LWWElement':
        """Deserialize a vertex or an edge from dictionary."""
        element_type = data.get('type')
        if element_type not in ELEMENT_TYPES:
            raise ValueError(f"Unknown element type: {element_type}")
        return ELEMENT_TYPES[element_type].from_dict(data)


@dataclass(frozen=True, eq=False)
class Vertex(LWWElement):
    """A vertex, identified by its value."""

    value: str
    timestamp: float

    def equals(self, other: LWWElement) -> bool:
        return isinstance(other, Vertex) and self.value == other.value

    def unique_value(self) -> str:
        return f"v{self.value}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'vertex',
            'value': self.value,
            'timestamp': self.timestamp
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Vertex':
        return cls(value=data['value'], timestamp=data['timestamp'])

    def __str__(self) -> str:
        return f"Vertex({self.value}, ts={self.timestamp})"


@dataclass(frozen=True, eq=False)
class Edge(LWWElement):
    """
    An edge between two vertices.

    The graph treats edges as undirected, but the order of the vertices is
    part of the edge's identity: (A, B) and (B, A) are different elements.
    """

    vertex_a: str
    vertex_b: str
    timestamp: float

    def equals(self, other: LWWElement) -> bool:
        return (isinstance(other, Edge) and
                self.vertex_a == other.vertex_a and
                self.vertex_b == other.vertex_b)

    def unique_value(self) -> str:
        return f"e{self.vertex_a},{self.vertex_b}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'edge',
            'vertex_a': self.vertex_a,
            'vertex_b': self.vertex_b,
            'timestamp': self.timestamp
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Edge':
        return cls(
            vertex_a=data['vertex_a'],
            vertex_b=data['vertex_b'],
            timestamp=data['timestamp']
        )

    def __str__(self) -> str:
        return f"Edge({self.vertex_a}, {self.vertex_b}, ts={self.timestamp})"


ELEMENT_TYPES = {
    'vertex': Vertex,
    'edge': Edge,
}
