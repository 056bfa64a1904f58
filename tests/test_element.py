"""Tests for vertex and edge elements."""

import dataclasses

import pytest

from lwwgraph import Edge, LWWElement, Vertex


class TestVertex:
    """Test vertex elements."""

    def test_construct(self):
        """Test that values and timestamp are kept."""
        vertex = Vertex("a", 10.0)
        assert vertex.value == "a"
        assert vertex.timestamp == 10.0

    def test_equals_ignores_timestamp(self):
        """Test that only the value is compared."""
        assert Vertex("a", 10.0).equals(Vertex("a", 20.0))
        assert Vertex("a", 10.0) == Vertex("a", 20.0)
        assert not Vertex("a", 10.0).equals(Vertex("b", 10.0))
        assert Vertex("a", 10.0) != Vertex("b", 10.0)

    def test_never_equals_edge(self):
        """Test that a vertex and an edge are never equal."""
        assert not Vertex("a,b", 10.0).equals(Edge("a", "b", 10.0))
        assert not Edge("a", "b", 10.0).equals(Vertex("a,b", 10.0))

    def test_unique_value(self):
        """Test the unique value of a vertex."""
        assert Vertex("a", 10.0).unique_value() == "va"
        assert Vertex("a", 10.0).unique_value() == Vertex("a", 99.0).unique_value()

    def test_replicate_now(self, clock):
        """Test that replication keeps the value and takes the current time."""
        vertex = Vertex("a", 10.0)
        replica = vertex.replicate_now(clock)

        assert isinstance(replica, Vertex)
        assert replica.equals(vertex)
        assert replica.timestamp == 1001.0
        assert vertex.timestamp == 10.0

    def test_replicate_now_default_clock(self):
        """Test replication with the wall clock."""
        vertex = Vertex("a", 10.0)
        assert vertex.replicate_now().timestamp > vertex.timestamp

    def test_immutable(self):
        """Test that elements cannot be changed."""
        vertex = Vertex("a", 10.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            vertex.value = "b"


class TestEdge:
    """Test edge elements."""

    def test_construct(self):
        """Test that vertices keep their positions."""
        edge = Edge("b", "a", 10.0)
        assert edge.vertex_a == "b"
        assert edge.vertex_b == "a"
        assert edge.timestamp == 10.0

    def test_equals(self):
        """Test that both vertices are compared, in order."""
        assert Edge("a", "b", 10.0).equals(Edge("a", "b", 20.0))
        assert not Edge("a", "b", 10.0).equals(Edge("a", "c", 10.0))
        assert not Edge("a", "b", 10.0).equals(Edge("c", "b", 10.0))
        assert not Edge("a", "b", 10.0).equals(Edge("b", "a", 10.0))

    def test_unique_value_is_directional(self):
        """Test that the order of the vertices is part of the identity."""
        assert Edge("a", "b", 10.0).unique_value() == "ea,b"
        assert Edge("b", "a", 10.0).unique_value() == "eb,a"

    def test_replicate_now(self, clock):
        """Test that replication keeps both vertices."""
        edge = Edge("a", "b", 10.0)
        replica = edge.replicate_now(clock)

        assert isinstance(replica, Edge)
        assert (replica.vertex_a, replica.vertex_b) == ("a", "b")
        assert replica.timestamp == 1001.0


class TestSerialization:
    """Test conversion of elements from and to dictionaries."""

    def test_vertex_to_dict(self):
        assert Vertex("a", 10.0).to_dict() == {'type': 'vertex', 'value': 'a', 'timestamp': 10.0}

    def test_edge_to_dict(self):
        assert Edge("a", "b", 10.0).to_dict() == {
            'type': 'edge', 'vertex_a': 'a', 'vertex_b': 'b', 'timestamp': 10.0
        }

    def test_from_dict_dispatches_on_type(self):
        """Test that the type tag picks the element class."""
        vertex = LWWElement.from_dict({'type': 'vertex', 'value': 'a', 'timestamp': 10.0})
        edge = LWWElement.from_dict({'type': 'edge', 'vertex_a': 'a', 'vertex_b': 'b', 'timestamp': 5.0})

        assert isinstance(vertex, Vertex) and vertex.value == "a" and vertex.timestamp == 10.0
        assert isinstance(edge, Edge) and edge.unique_value() == "ea,b" and edge.timestamp == 5.0

    def test_from_dict_unknown_type(self):
        """Test that unknown element types are rejected."""
        with pytest.raises(ValueError, match="Unknown element type"):
            LWWElement.from_dict({'type': 'hyperedge', 'timestamp': 1.0})


def test_hash_follows_equality():
    """Test that elements with the same values collapse in sets."""
    elements = {Vertex("a", 1.0), Vertex("a", 2.0), Edge("a", "b", 1.0), Edge("b", "a", 1.0)}
    assert len(elements) == 3
