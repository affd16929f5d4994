from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Sex(Enum):
    M = "M"
    F = "F"


class Relation(Enum):
    """関係の種類。所有者から見た相手の続柄を表す。"""

    FATHER = "FATHER"
    MOTHER = "MOTHER"
    SON = "SON"
    DAUGHTER = "DAUGHTER"
    GRANDFATHER = "GRANDFATHER"
    GRANDMOTHER = "GRANDMOTHER"
    GRANDSON = "GRANDSON"
    GRANDDAUGHTER = "GRANDDAUGHTER"
    MARRIAGE = "MARRIAGE"
    SIBLINGS = "SIBLINGS"
    COUSINS = "COUSINS"

    @property
    def expected_sex(self) -> Sex | None:
        """この続柄を担う人物に期待される性別。性別を問わない場合は None。"""
        return _EXPECTED_SEX.get(self)

    @property
    def is_single(self) -> bool:
        """1人につき1本までしか持てない続柄かどうか。"""
        return self in (Relation.FATHER, Relation.MOTHER, Relation.MARRIAGE)

    def label(self, sex: Sex) -> str:
        """表示用ラベル。性別を問わない続柄は相手の性別で呼び分ける。"""
        if self is Relation.MARRIAGE:
            return "husband" if sex == Sex.M else "wife"
        if self is Relation.SIBLINGS:
            return "brother" if sex == Sex.M else "sister"
        if self is Relation.COUSINS:
            return "cousin"
        return self.value.lower()


_EXPECTED_SEX: dict[Relation, Sex] = {
    Relation.FATHER: Sex.M,
    Relation.MOTHER: Sex.F,
    Relation.SON: Sex.M,
    Relation.DAUGHTER: Sex.F,
    Relation.GRANDFATHER: Sex.M,
    Relation.GRANDMOTHER: Sex.F,
    Relation.GRANDSON: Sex.M,
    Relation.GRANDDAUGHTER: Sex.F,
}


@dataclass(frozen=True)
class Person:
    """家系図の1人物を表すデータクラス。

    id は登録時に採番され、以後変更されない。
    cohort は学内メンバーの期（0 は該当なし）。
    """

    id: int
    first_name: str
    last_name: str
    sex: Sex
    cohort: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_male(self) -> bool:
        return self.sex == Sex.M

    @property
    def is_institutional(self) -> bool:
        return self.cohort != 0


@dataclass(frozen=True)
class Connection:
    """所有者から相手への有向の関係。

    relationship は所有者から見た相手の続柄（相手が父なら FATHER）。
    """

    member: Person
    relationship: Relation
