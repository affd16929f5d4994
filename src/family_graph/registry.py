from __future__ import annotations

import itertools
import logging

from family_graph.models import Person, Sex

logger = logging.getLogger(__name__)


class PersonRegistry:
    """人物の採番と ID -> 人物 の対応を管理する。

    ID は 1 から始まる連番で、エラー後も含めて再利用しない。
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._persons: dict[int, Person] = {}

    def create_person(
        self,
        first_name: str,
        last_name: str,
        sex: Sex,
        cohort: int = 0,
    ) -> Person:
        """次の ID を採番して Person を生成する（登録はしない）。"""
        person = Person(
            id=next(self._ids),
            first_name=first_name,
            last_name=last_name,
            sex=sex,
            cohort=cohort,
        )
        logger.debug("ID %d を採番しました: %s", person.id, person.full_name)
        return person

    def register(self, person: Person) -> None:
        self._persons[person.id] = person

    def is_registered(self, person_id: int) -> bool:
        return person_id in self._persons

    def holds(self, person: Person) -> bool:
        """この人物オブジェクト自体が登録されているか。ID の一致だけでは足りない。"""
        return self._persons.get(person.id) is person

    def get(self, person_id: int) -> Person | None:
        return self._persons.get(person_id)

    def persons(self) -> list[Person]:
        """登録順の人物リストを返す。"""
        return list(self._persons.values())

    def __len__(self) -> int:
        return len(self._persons)
