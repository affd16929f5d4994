from __future__ import annotations

import graphviz

from family_graph.config import ColorConfig, to_hex
from family_graph.models import Person, Relation, Sex
from family_graph.tree import FamilyTree

_PARENT_RELATIONS = (Relation.FATHER, Relation.MOTHER)
_GRANDPARENT_RELATIONS = (Relation.GRANDFATHER, Relation.GRANDMOTHER)
_PAIR_RELATIONS = (Relation.MARRIAGE, Relation.SIBLINGS, Relation.COUSINS)


def _get_node_color(person: Person, colors: ColorConfig) -> str:
    return to_hex(colors.male_fill if person.sex == Sex.M else colors.female_fill)


def _format_label(person: Person) -> str:
    if person.is_institutional:
        return f"{person.full_name}\n第{person.cohort}期"
    return person.full_name


def build_graph(tree: FamilyTree, colors: ColorConfig | None = None) -> graphviz.Digraph:
    """FamilyTree から Graphviz の Digraph オブジェクトを生成する。

    双方向に保存されている関係は1本の線として描く。
    親子・祖父母と孫は上位の世代から下位の世代へ向けて描く。
    """
    colors = colors or ColorConfig()

    dot = graphviz.Digraph(
        "family_graph",
        graph_attr={
            "rankdir": "TB",
            "splines": "polyline",
            "nodesep": "0.8",
            "ranksep": "1.0",
        },
        node_attr={
            "fontname": "Helvetica",
            "fontsize": "11",
            "shape": "box",
            "style": "filled,rounded",
            "fontcolor": to_hex(colors.text),
        },
        edge_attr={
            "fontname": "Helvetica",
        },
    )

    # 人物ノードを追加
    for person in tree.persons():
        dot.node(
            str(person.id),
            label=_format_label(person),
            fillcolor=_get_node_color(person, colors),
        )

    # 対称な関係は重複回避のためペアを追跡
    processed_pairs: set[tuple[int, int, Relation]] = set()

    for person in tree.persons():
        for conn in tree.connections_of(person):
            other = conn.member
            rel = conn.relationship

            if rel in _PARENT_RELATIONS:
                dot.edge(str(other.id), str(person.id), color=to_hex(colors.parent_line))
            elif rel in _GRANDPARENT_RELATIONS:
                dot.edge(
                    str(other.id),
                    str(person.id),
                    color=to_hex(colors.grandparent_line),
                    style="dashed",
                )
            elif rel in _PAIR_RELATIONS:
                low, high = sorted((person.id, other.id))
                if (low, high, rel) in processed_pairs:
                    continue
                processed_pairs.add((low, high, rel))
                _add_pair_edge(dot, low, high, rel, colors)

    return dot


def _add_pair_edge(
    dot: graphviz.Digraph, low: int, high: int, rel: Relation, colors: ColorConfig
) -> None:
    if rel is Relation.MARRIAGE:
        # 配偶者同士を同じ rank に配置
        with dot.subgraph() as s:
            s.attr(rank="same")
            s.node(str(low))
            s.node(str(high))
        dot.edge(
            str(low),
            str(high),
            dir="none",
            color=to_hex(colors.marriage_line),
            penwidth="2",
        )
        return

    line = colors.sibling_line if rel is Relation.SIBLINGS else colors.cousin_line
    dot.edge(
        str(low),
        str(high),
        dir="none",
        color=to_hex(line),
        style="dotted",
        constraint="false",
    )
