from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from family_graph.exceptions import FamilyGraphError
from family_graph.models import Person, Relation, Sex
from family_graph.tree import FamilyTree

logger = logging.getLogger(__name__)

MEMBER_COLUMNS = {"key", "first_name", "last_name", "sex"}
CONNECTION_COLUMNS = {"from", "to", "relation"}


class CsvParseError(FamilyGraphError):
    """CSV読み込み時のエラー。"""


@dataclass
class MemberRow:
    key: str
    first_name: str
    last_name: str
    sex: Sex
    cohort: int = 0


@dataclass
class ConnectionRow:
    line: int
    from_key: str
    to_key: str
    relation: Relation


def parse_members(path: str | Path) -> list[MemberRow]:
    """人物CSVを読み込む。

    必須カラムは key, first_name, last_name, sex。cohort は任意（空なら 0）。
    それ以外のカラムは無視する。

    Raises:
        CsvParseError: CSV読み込み・バリデーションエラー
    """
    rows = _read_rows(path, MEMBER_COLUMNS)
    members: list[MemberRow] = []
    seen_keys: set[str] = set()

    for i, row in enumerate(rows, start=2):  # ヘッダー行が1行目
        try:
            member = _parse_member_row(row)
        except (ValueError, KeyError) as e:
            raise CsvParseError(f"{i}行目: {e}") from e

        if member.key in seen_keys:
            raise CsvParseError(f"{i}行目: キーが重複しています: {member.key}")
        seen_keys.add(member.key)
        members.append(member)

    return members


def parse_connections(path: str | Path) -> list[ConnectionRow]:
    """関係CSV (from, to, relation) を読み込む。"""
    rows = _read_rows(path, CONNECTION_COLUMNS)
    connections: list[ConnectionRow] = []

    for i, row in enumerate(rows, start=2):
        from_key = _field(row, "from")
        to_key = _field(row, "to")
        if not from_key or not to_key:
            raise CsvParseError(f"{i}行目: from / to が空です")
        relation_str = _field(row, "relation").upper()
        try:
            relation = Relation(relation_str)
        except ValueError as e:
            raise CsvParseError(f"{i}行目: 不正な続柄です: {_field(row, 'relation')}") from e
        connections.append(ConnectionRow(i, from_key, to_key, relation))

    return connections


def load_tree(
    members_path: str | Path,
    connections_path: str | Path | None = None,
) -> tuple[FamilyTree, dict[str, Person]]:
    """CSVから家系図を構築する。

    人物を登録順に add_person し、関係を行順に connect_existing する。
    最初に拒否された行で CsvParseError を送出する。

    Returns:
        (FamilyTree, key -> Person のマッピング)
    """
    tree = FamilyTree()
    persons: dict[str, Person] = {}
    for member in parse_members(members_path):
        persons[member.key] = tree.add_person(
            member.first_name, member.last_name, member.sex, member.cohort
        )

    if connections_path is None:
        return tree, persons

    for conn in parse_connections(connections_path):
        missing = [k for k in (conn.from_key, conn.to_key) if k not in persons]
        if missing:
            raise CsvParseError(
                f"{conn.line}行目: 未登録のキーです: {', '.join(missing)}"
            )
        try:
            tree.connect_existing(
                persons[conn.from_key], persons[conn.to_key], conn.relation
            )
        except FamilyGraphError as e:
            raise CsvParseError(f"{conn.line}行目: {e}") from e

    logger.info(
        "%d 人、%d 本の関係を読み込みました", len(tree), tree.graph.edge_count()
    )
    return tree, persons


def _read_rows(path: str | Path, required: set[str]) -> list[dict[str, str]]:
    path = Path(path)
    if not path.exists():
        raise CsvParseError(f"ファイルが見つかりません: {path}")

    with path.open(encoding="utf-8") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise CsvParseError(f"CSVファイルが空です: {path}")

        _validate_columns(set(reader.fieldnames), required)
        return list(reader)


def _validate_columns(headers: set[str], required: set[str]) -> None:
    """必須カラムの存在を確認する。"""
    missing = required - headers
    if missing:
        raise CsvParseError(f"必須カラムが不足しています: {', '.join(sorted(missing))}")


def _parse_member_row(row: dict[str, str]) -> MemberRow:
    """1行のCSVデータを MemberRow に変換する。"""
    key = _field(row, "key")
    if not key:
        raise ValueError("キーが空です")

    sex_str = _field(row, "sex").upper()
    try:
        sex = Sex(sex_str)
    except ValueError:
        raise ValueError(f"不正な性別値です: {_field(row, 'sex')}")

    cohort_str = _field(row, "cohort")
    cohort = int(cohort_str) if cohort_str else 0

    return MemberRow(
        key=key,
        first_name=_field(row, "first_name"),
        last_name=_field(row, "last_name"),
        sex=sex,
        cohort=cohort,
    )


def _field(row: dict[str, str], column: str) -> str:
    """列の値を取り出す。列が足りない行では DictReader が None を入れるので空文字扱い。"""
    return (row.get(column) or "").strip()
