from __future__ import annotations

import graphviz

from family_graph.config import ColorConfig
from family_graph.graph_builder import build_graph
from family_graph.models import Relation, Sex
from family_graph.tree import FamilyTree


def _build_simple_tree() -> FamilyTree:
    """3世代のシンプルな家族を構築する。

    世代0: 1(Abe) -- 2(Ruth)
    世代1: 3(Bea, 親:1,2) -- 4(Carl)
    世代2: 5(Eli, 親:3,4, 祖父:1)
    """
    tree = FamilyTree()
    abe = tree.add_person("Abe", "Cohen", Sex.M, cohort=3)
    ruth = tree.add_person("Ruth", "Cohen", Sex.F)
    bea = tree.add_person("Bea", "Cohen", Sex.F)
    carl = tree.add_person("Carl", "Levi", Sex.M)
    eli = tree.add_person("Eli", "Levi", Sex.M)
    tree.connect_existing(abe, ruth, Relation.MARRIAGE)
    tree.connect_existing(abe, bea, Relation.FATHER)
    tree.connect_existing(ruth, bea, Relation.MOTHER)
    tree.connect_existing(bea, carl, Relation.MARRIAGE)
    tree.connect_existing(eli, bea, Relation.SON)
    tree.connect_existing(carl, eli, Relation.FATHER)
    tree.connect_existing(abe, eli, Relation.GRANDFATHER)
    return tree


def _edge_lines(dot: graphviz.Digraph) -> list[str]:
    return [line.strip() for line in dot.body if "->" in line]


class TestBuildGraph:
    def test_returns_digraph(self) -> None:
        dot = build_graph(_build_simple_tree())
        assert isinstance(dot, graphviz.Digraph)

    def test_all_persons_are_nodes(self) -> None:
        source = build_graph(_build_simple_tree()).source
        for name in ("Abe Cohen", "Ruth Cohen", "Bea Cohen", "Carl Levi", "Eli Levi"):
            assert name in source

    def test_cohort_in_label(self) -> None:
        source = build_graph(_build_simple_tree()).source
        assert "第3期" in source

    def test_marriage_drawn_once(self) -> None:
        """双方向に保存された婚姻は1本の線になる。"""
        lines = _edge_lines(build_graph(_build_simple_tree()))
        marriages = [line for line in lines if "dir=none" in line and "penwidth=2" in line]
        assert len(marriages) == 2
        assert any(line.startswith("1 -> 2") for line in marriages)

    def test_parent_edges_point_to_child(self) -> None:
        lines = _edge_lines(build_graph(_build_simple_tree()))
        assert any(line.startswith("1 -> 3") for line in lines)
        assert any(line.startswith("2 -> 3") for line in lines)
        assert any(line.startswith("3 -> 5") for line in lines)
        assert any(line.startswith("4 -> 5") for line in lines)
        assert not any(line.startswith("3 -> 1") for line in lines)

    def test_grandparent_edge_dashed(self) -> None:
        lines = _edge_lines(build_graph(_build_simple_tree()))
        grand = [line for line in lines if line.startswith("1 -> 5")]
        assert len(grand) == 1
        assert "dashed" in grand[0]

    def test_total_edge_count(self) -> None:
        """7回の connect で保存される14本の関係が7本の線になる。"""
        lines = _edge_lines(build_graph(_build_simple_tree()))
        assert len(lines) == 7

    def test_siblings_and_cousins_dotted_once(self) -> None:
        tree = FamilyTree()
        a = tree.add_person("A", "X", Sex.M)
        b = tree.add_person("B", "X", Sex.F)
        c = tree.add_person("C", "Y", Sex.M)
        tree.connect_existing(a, b, Relation.SIBLINGS)
        tree.connect_existing(a, c, Relation.COUSINS)
        lines = _edge_lines(build_graph(tree))
        assert len(lines) == 2
        assert all("dotted" in line for line in lines)

    def test_custom_colors(self) -> None:
        tree = FamilyTree()
        tree.add_person("Abe", "Cohen", Sex.M)
        colors = ColorConfig(male_fill=(0, 0, 255))
        source = build_graph(tree, colors).source
        assert "#0000ff" in source

    def test_empty_tree(self) -> None:
        dot = build_graph(FamilyTree())
        assert _edge_lines(dot) == []
