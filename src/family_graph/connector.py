"""関係の検証と双方向の追加。

connect() は宣言された続柄（person_one から見た自分の立場）から相手側の続柄を
導出し、検証がすべて通った場合のみ両方向の関係をグラフに追加する。
検証で拒否された呼び出しは関係を1本も追加しない。
"""

from __future__ import annotations

import logging
from typing import assert_never

from family_graph.exceptions import (
    FamilyGraphError,
    InvalidGenderRoleError,
    InvalidRelationshipError,
    MemberNotInGraphError,
)
from family_graph.graph import RelationshipGraph
from family_graph.models import Person, Relation

logger = logging.getLogger(__name__)


class RelationshipConnector:
    """RelationshipGraph に対する関係追加の入口。"""

    def __init__(self, graph: RelationshipGraph) -> None:
        self.graph = graph

    def connect(self, person_one: Person, person_two: Person, relation: Relation) -> None:
        """person_one を person_two の relation として関係づける。

        例: connect(父, 子, Relation.FATHER) は子に FATHER、父に SON/DAUGHTER を追加する。

        Raises:
            MemberNotInGraphError: どちらかがグラフに存在しない場合
            InvalidRelationshipError: 重複・婚姻の排他性・同性婚の違反
            InvalidGenderRoleError: 宣言された続柄と性別が一致しない場合
        """
        try:
            self._validate_members_exist(person_one, person_two)

            match relation:
                case Relation.MARRIAGE:
                    self._add_marriage(person_one, person_two)
                case Relation.FATHER | Relation.MOTHER:
                    self._add_parent_child(person_one, person_two, relation)
                case Relation.SON | Relation.DAUGHTER:
                    self._add_child_parent(person_one, person_two, relation)
                case Relation.GRANDFATHER | Relation.GRANDMOTHER:
                    self._add_grandparent_grandchild(person_one, person_two, relation)
                case Relation.GRANDSON | Relation.GRANDDAUGHTER:
                    self._add_grandchild_grandparent(person_one, person_two, relation)
                case Relation.SIBLINGS | Relation.COUSINS:
                    self._link(person_one, person_two, relation, relation)
                case _:
                    assert_never(relation)
        except FamilyGraphError as e:
            logger.info("関係の追加を拒否しました: %s", e)
            raise

        logger.debug(
            "%s -> %s (%s) を追加しました",
            person_one.full_name,
            person_two.full_name,
            relation.value,
        )

    def available_relations(self, person: Person) -> list[Relation]:
        """新しい人物がこの人物に対して宣言できる続柄の一覧。

        既に持っている FATHER / MOTHER / MARRIAGE は除外する。
        性別の組み合わせは相手次第なので考慮しない。
        """
        held = {
            c.relationship
            for c in self.graph.edges_of(person.id)
            if c.relationship.is_single
        }
        return [r for r in Relation if r not in held]

    # ------------------------------------------------------------------
    # 検証
    # ------------------------------------------------------------------

    def _validate_members_exist(self, person_one: Person, person_two: Person) -> None:
        for person in (person_one, person_two):
            if not self.graph.contains(person.id):
                raise MemberNotInGraphError(person)

    def _validate_gender_role(self, member: Person, relation: Relation) -> None:
        expected = relation.expected_sex
        if expected is not None and member.sex != expected:
            raise InvalidGenderRoleError(member, expected, relation)

    def _validate_single(self, member: Person, relation: Relation) -> None:
        """member が relation の関係を既に持っていないことを確認する。"""
        if self.graph.has_edge(member.id, relation):
            raise InvalidRelationshipError(member, relation)

    # ------------------------------------------------------------------
    # 続柄ファミリーごとの追加
    # ------------------------------------------------------------------

    def _add_marriage(self, person_one: Person, person_two: Person) -> None:
        self._validate_single(person_one, Relation.MARRIAGE)
        self._validate_single(person_two, Relation.MARRIAGE)
        if person_one.sex == person_two.sex:
            raise InvalidRelationshipError(
                person_one, Relation.MARRIAGE, "同性間の婚姻は追加できません"
            )
        self._link(person_one, person_two, Relation.MARRIAGE, Relation.MARRIAGE)

    def _add_parent_child(
        self, parent: Person, child: Person, parent_relation: Relation
    ) -> None:
        child_relation = Relation.SON if child.is_male else Relation.DAUGHTER
        self._validate_gender_role(parent, parent_relation)
        self._validate_single(child, parent_relation)
        self._link(parent, child, child_relation, parent_relation)

    def _add_child_parent(
        self, child: Person, parent: Person, child_relation: Relation
    ) -> None:
        parent_relation = Relation.FATHER if parent.is_male else Relation.MOTHER
        self._validate_gender_role(child, child_relation)
        self._validate_single(child, parent_relation)
        self._link(child, parent, parent_relation, child_relation)

    def _add_grandparent_grandchild(
        self, grandparent: Person, grandchild: Person, grandparent_relation: Relation
    ) -> None:
        grandchild_relation = (
            Relation.GRANDSON if grandchild.is_male else Relation.GRANDDAUGHTER
        )
        self._validate_gender_role(grandparent, grandparent_relation)
        self._link(grandparent, grandchild, grandchild_relation, grandparent_relation)

    def _add_grandchild_grandparent(
        self, grandchild: Person, grandparent: Person, grandchild_relation: Relation
    ) -> None:
        grandparent_relation = (
            Relation.GRANDFATHER if grandparent.is_male else Relation.GRANDMOTHER
        )
        self._validate_gender_role(grandchild, grandchild_relation)
        self._link(grandchild, grandparent, grandparent_relation, grandchild_relation)

    def _link(
        self,
        a: Person,
        b: Person,
        a_sees_b: Relation,
        b_sees_a: Relation,
    ) -> None:
        """a と b の間に双方向の関係を追加する。"""
        self.graph.append_edge(a.id, b, a_sees_b)
        self.graph.append_edge(b.id, a, b_sees_a)
