from __future__ import annotations

import logging
from pathlib import Path

import graphviz

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("png", "svg")


def render_graph(
    dot: graphviz.Digraph,
    output_path: str | Path,
    fmt: str = "png",
) -> Path:
    """家族関係グラフを png / svg に書き出し、書き出したパスを返す。

    出力先のディレクトリがなければ作成する。未対応の形式は ValueError。
    """
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"未対応の出力形式です: {fmt}")

    target = Path(output_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    dot.render(outfile=str(target), format=fmt, cleanup=True, quiet=True)
    logger.info("家族関係グラフを出力しました: %s (%s)", target, fmt)
    return target
