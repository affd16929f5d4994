from __future__ import annotations

import pytest

from family_graph.graph import RelationshipGraph
from family_graph.models import Connection, Person, Relation, Sex

ABE = Person(1, "Abe", "Cohen", Sex.M)
BEA = Person(2, "Bea", "Cohen", Sex.F)


class TestRelationshipGraph:
    def test_initialized_entry_is_empty(self) -> None:
        graph = RelationshipGraph()
        graph.initialize_entry(ABE.id)
        assert graph.contains(ABE.id)
        assert ABE.id in graph
        assert graph.edges_of(ABE.id) == []

    def test_uninitialized_entry_raises(self) -> None:
        graph = RelationshipGraph()
        assert not graph.contains(ABE.id)
        with pytest.raises(KeyError):
            graph.edges_of(ABE.id)

    def test_append_keeps_insertion_order(self) -> None:
        graph = RelationshipGraph()
        graph.initialize_entry(ABE.id)
        graph.append_edge(ABE.id, BEA, Relation.DAUGHTER)
        graph.append_edge(ABE.id, BEA, Relation.SIBLINGS)
        assert graph.edges_of(ABE.id) == [
            Connection(BEA, Relation.DAUGHTER),
            Connection(BEA, Relation.SIBLINGS),
        ]

    def test_append_does_not_validate(self) -> None:
        """ストアは検証しないので重複も追加される。"""
        graph = RelationshipGraph()
        graph.initialize_entry(BEA.id)
        graph.append_edge(BEA.id, ABE, Relation.FATHER)
        graph.append_edge(BEA.id, ABE, Relation.FATHER)
        assert len(graph.edges_of(BEA.id)) == 2

    def test_edges_of_returns_copy(self) -> None:
        graph = RelationshipGraph()
        graph.initialize_entry(ABE.id)
        graph.edges_of(ABE.id).append(Connection(BEA, Relation.DAUGHTER))
        assert graph.edges_of(ABE.id) == []

    def test_reinitialize_keeps_edges(self) -> None:
        graph = RelationshipGraph()
        graph.initialize_entry(ABE.id)
        graph.append_edge(ABE.id, BEA, Relation.DAUGHTER)
        graph.initialize_entry(ABE.id)
        assert len(graph.edges_of(ABE.id)) == 1

    def test_has_edge(self) -> None:
        graph = RelationshipGraph()
        graph.initialize_entry(BEA.id)
        assert not graph.has_edge(BEA.id, Relation.FATHER)
        graph.append_edge(BEA.id, ABE, Relation.FATHER)
        assert graph.has_edge(BEA.id, Relation.FATHER)
        assert not graph.has_edge(BEA.id, Relation.MOTHER)

    def test_counts(self) -> None:
        graph = RelationshipGraph()
        graph.initialize_entry(ABE.id)
        graph.initialize_entry(BEA.id)
        graph.append_edge(ABE.id, BEA, Relation.MARRIAGE)
        graph.append_edge(BEA.id, ABE, Relation.MARRIAGE)
        assert graph.person_ids() == [ABE.id, BEA.id]
        assert graph.edge_count() == 2
