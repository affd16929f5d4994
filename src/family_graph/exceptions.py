from __future__ import annotations

from family_graph.models import Person, Relation, Sex


class FamilyGraphError(Exception):
    """家系図操作に関するエラーの基底クラス。"""


class MemberNotRegisteredError(FamilyGraphError):
    """人物が登録されていない。"""

    def __init__(self, member: Person, message: str | None = None) -> None:
        self.member = member
        super().__init__(
            message or f"{member.full_name} (ID {member.id}) は登録されていません"
        )


class MemberNotInGraphError(MemberNotRegisteredError):
    """関係グラフに人物のエントリが存在しない。"""

    def __init__(self, member: Person) -> None:
        super().__init__(
            member,
            f"{member.full_name} (ID {member.id}) は関係グラフに存在しません",
        )


class MemberNotInTreeError(MemberNotRegisteredError):
    """家系図（人物レジストリ）に人物が登録されていない。"""

    def __init__(self, member: Person) -> None:
        super().__init__(
            member,
            f"{member.full_name} (ID {member.id}) は家系図に登録されていません",
        )


class InvalidRelationshipError(FamilyGraphError):
    """既存の関係と矛盾する関係を追加しようとした。"""

    def __init__(
        self, member: Person, relation: Relation, reason: str | None = None
    ) -> None:
        self.member = member
        self.relation = relation
        detail = reason or "既存の関係と矛盾します"
        super().__init__(
            f"{member.full_name} に {relation.value} を追加できません: {detail}"
        )


class InvalidGenderRoleError(FamilyGraphError):
    """続柄が期待する性別と人物の性別が一致しない。"""

    def __init__(self, member: Person, expected_sex: Sex, relation: Relation) -> None:
        self.member = member
        self.expected_sex = expected_sex
        self.relation = relation
        super().__init__(
            f"{member.full_name} (性別: {member.sex.value}) に "
            f"{relation.value} (期待される性別: {expected_sex.value}) は割り当てられません"
        )
