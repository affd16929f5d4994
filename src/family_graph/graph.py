"""人物ごとの関係（隣接リスト）を保持するストア。

検証は行わない。矛盾のチェックは connector モジュールの責務。
"""

from __future__ import annotations

from family_graph.models import Connection, Person, Relation


class RelationshipGraph:
    """person_id -> 関係リスト の隣接リスト。"""

    def __init__(self) -> None:
        self._adjacency: dict[int, list[Connection]] = {}

    def initialize_entry(self, person_id: int) -> None:
        """空の関係リストを用意する。既存のエントリはそのまま残す。"""
        self._adjacency.setdefault(person_id, [])

    def contains(self, person_id: int) -> bool:
        return person_id in self._adjacency

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._adjacency

    def person_ids(self) -> list[int]:
        return list(self._adjacency)

    def edges_of(self, person_id: int) -> list[Connection]:
        """所有者の関係を追加順に返す（コピー）。

        Raises:
            KeyError: エントリが初期化されていない場合
        """
        return list(self._adjacency[person_id])

    def has_edge(self, person_id: int, relation: Relation) -> bool:
        """所有者が指定の続柄の関係を既に持っているか。"""
        return any(
            c.relationship == relation for c in self._adjacency.get(person_id, [])
        )

    def append_edge(self, owner_id: int, target: Person, relation: Relation) -> None:
        self._adjacency[owner_id].append(Connection(target, relation))

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())
