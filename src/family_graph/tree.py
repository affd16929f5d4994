from __future__ import annotations

import logging

from family_graph.connector import RelationshipConnector
from family_graph.exceptions import MemberNotInTreeError
from family_graph.graph import RelationshipGraph
from family_graph.models import Connection, Person, Relation, Sex
from family_graph.registry import PersonRegistry

logger = logging.getLogger(__name__)


class FamilyTree:
    """人物レジストリと関係グラフをまとめて扱う窓口。

    レジストリとグラフは呼び出し側が所有する。省略時は新規に生成する。
    スレッドセーフではないため、更新は1つのスレッドから行うこと。
    """

    def __init__(
        self,
        registry: PersonRegistry | None = None,
        graph: RelationshipGraph | None = None,
    ) -> None:
        self.registry = registry if registry is not None else PersonRegistry()
        self.graph = graph if graph is not None else RelationshipGraph()
        self.connector = RelationshipConnector(self.graph)

    def add_person(
        self,
        first_name: str,
        last_name: str,
        sex: Sex,
        cohort: int = 0,
    ) -> Person:
        """人物を生成し、レジストリとグラフの両方に登録する。"""
        person = self.registry.create_person(first_name, last_name, sex, cohort)
        self.registry.register(person)
        self.graph.initialize_entry(person.id)
        logger.info("人物を追加しました: %s (ID %d)", person.full_name, person.id)
        return person

    def connect_existing(
        self, person_one: Person, person_two: Person, relation: Relation
    ) -> None:
        """登録済みの2人を関係づける。

        Raises:
            MemberNotInTreeError: どちらかが家系図に登録されていない場合
            InvalidRelationshipError / InvalidGenderRoleError: connector による検証エラー
        """
        self._require_member(person_one)
        self._require_member(person_two)
        self.connector.connect(person_one, person_two, relation)

    def get_person(self, person_id: int) -> Person | None:
        return self.registry.get(person_id)

    def persons(self) -> list[Person]:
        return self.registry.persons()

    def connections_of(self, person: Person) -> list[Connection]:
        self._require_member(person)
        return self.graph.edges_of(person.id)

    def available_relations(self, person: Person) -> list[Relation]:
        self._require_member(person)
        return self.connector.available_relations(person)

    def _require_member(self, person: Person) -> None:
        # 別レジストリで採番された同じ ID の人物は受け付けない
        if not self.registry.holds(person):
            raise MemberNotInTreeError(person)

    def __len__(self) -> int:
        return len(self.registry)
