import logging
from pathlib import Path

import click

from family_graph.config import AppConfig, load_config, log_level
from family_graph.csv_parser import CsvParseError, load_tree
from family_graph.graph_builder import build_graph
from family_graph.renderer import render_graph
from family_graph.tree import FamilyTree

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    default=None,
    help="設定ファイルのパス（省略時はカレントディレクトリの config.toml を自動検索）",
)
_MEMBERS_OPTION = click.option(
    "--members", "members_path", required=True, help="人物CSVファイルパス"
)
_CONNECTIONS_OPTION = click.option(
    "--connections", "connections_path", default=None, help="関係CSVファイルパス"
)


def _setup(config_path: str | None) -> AppConfig:
    """設定を読み込み、ログレベルを反映する。"""
    config = load_config(Path(config_path) if config_path else None)
    verbose = click.get_current_context().find_root().params.get("verbose", False)
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(logging.DEBUG if verbose else log_level(config))
    return config


def _load(members_path: str, connections_path: str | None) -> FamilyTree:
    try:
        tree, _ = load_tree(members_path, connections_path)
    except CsvParseError as e:
        raise click.ClickException(str(e))
    return tree


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="デバッグログを出力する")
def cli(verbose: bool) -> None:
    """家族関係グラフCLIアプリケーション"""
    pass


@cli.command()
@_MEMBERS_OPTION
@_CONNECTIONS_OPTION
@_CONFIG_OPTION
def check(members_path: str, connections_path: str | None, config_path: str | None) -> None:
    """CSVを読み込み、関係の整合性を検証する"""
    _setup(config_path)
    tree = _load(members_path, connections_path)
    click.echo(f"OK: {len(tree)} 人, {tree.graph.edge_count()} 本の関係")


@cli.command()
@_MEMBERS_OPTION
@_CONNECTIONS_OPTION
@_CONFIG_OPTION
def show(members_path: str, connections_path: str | None, config_path: str | None) -> None:
    """人物ごとの関係を一覧表示する"""
    _setup(config_path)
    tree = _load(members_path, connections_path)
    for person in tree.persons():
        click.echo(f"{person.id}: {person.full_name}")
        for conn in tree.connections_of(person):
            label = conn.relationship.label(conn.member.sex)
            click.echo(f"    {label}: {conn.member.full_name}")


@cli.command()
@_MEMBERS_OPTION
@_CONNECTIONS_OPTION
@click.option("--output", "output_path", required=True, help="出力ファイルパス")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["png", "svg"]),
    default="png",
    help="出力形式",
)
@_CONFIG_OPTION
def render(
    members_path: str,
    connections_path: str | None,
    output_path: str,
    fmt: str,
    config_path: str | None,
) -> None:
    """家族関係グラフを画像として出力する"""
    config = _setup(config_path)
    tree = _load(members_path, connections_path)
    dot = build_graph(tree, config.colors)
    result = render_graph(dot, output_path, fmt=fmt)
    click.echo(f"出力しました: {result}")
