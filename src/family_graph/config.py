"""設定ファイルの読み込みと設定値の管理。

TOML 形式の設定ファイルを読み込み、AppConfig として返す。
設定ファイルが存在しない場合はデフォルト値を使用する。
"""

from __future__ import annotations

import logging
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ColorConfig:
    """描画色の設定（和色）。"""

    male_fill: tuple[int, int, int] = (193, 216, 236)         # 白藍（しらあい）
    female_fill: tuple[int, int, int] = (253, 239, 242)       # 桜色（さくらいろ）
    marriage_line: tuple[int, int, int] = (197, 61, 67)       # 朱色（しゅいろ）
    parent_line: tuple[int, int, int] = (89, 88, 87)          # 墨色（すみいろ）
    grandparent_line: tuple[int, int, int] = (46, 79, 111)    # 藍色（あいいろ）
    sibling_line: tuple[int, int, int] = (142, 53, 74)        # 蘇芳（すおう）
    cousin_line: tuple[int, int, int] = (116, 125, 60)        # 鶯色（うぐいすいろ）
    text: tuple[int, int, int] = (43, 43, 43)                 # 墨


@dataclass
class LoggingConfig:
    """ログ出力の設定。"""

    level: str = "INFO"


@dataclass
class AppConfig:
    """アプリケーション全体の設定。"""

    colors: ColorConfig = field(default_factory=ColorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# バリデーション
# ---------------------------------------------------------------------------

_RGB_KEYS = (
    "male_fill",
    "female_fill",
    "marriage_line",
    "parent_line",
    "grandparent_line",
    "sibling_line",
    "cousin_line",
    "text",
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _validate_rgb(value: object, key: str) -> tuple[int, int, int]:
    """RGB 配列値を検証し tuple[int, int, int] に変換する。"""
    if not isinstance(value, list) or len(value) != 3:
        print(
            f"設定エラー: {key} は [R, G, B] 形式の3要素配列で指定してください",
            file=sys.stderr,
        )
        sys.exit(1)
    for i, v in enumerate(value):
        if not isinstance(v, int) or not (0 <= v <= 255):
            print(
                f"設定エラー: {key}[{i}] は 0〜255 の整数で指定してください",
                file=sys.stderr,
            )
            sys.exit(1)
    return (int(value[0]), int(value[1]), int(value[2]))


def _build_colors(data: dict[str, object]) -> ColorConfig:
    cfg = ColorConfig()
    for key in _RGB_KEYS:
        if key in data:
            setattr(cfg, key, _validate_rgb(data[key], f"style.colors.{key}"))
    return cfg


def _build_logging(data: dict[str, object]) -> LoggingConfig:
    cfg = LoggingConfig()
    if "level" in data:
        val = data["level"]
        if not isinstance(val, str) or val.upper() not in _LOG_LEVELS:
            print(
                f"設定エラー: logging.level は {', '.join(_LOG_LEVELS)} のいずれかで指定してください",
                file=sys.stderr,
            )
            sys.exit(1)
        cfg.level = val.upper()
    return cfg


def to_hex(rgb: tuple[int, int, int]) -> str:
    """RGB を Graphviz 用の #rrggbb 文字列に変換する。"""
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def log_level(config: AppConfig) -> int:
    return getattr(logging, config.logging.level)


# ---------------------------------------------------------------------------
# ロード
# ---------------------------------------------------------------------------


def load_config(path: Path | None) -> AppConfig:
    """設定ファイルを読み込んで AppConfig を返す。

    Args:
        path: 設定ファイルのパス。None の場合はカレントディレクトリの
              config.toml を探索し、存在しなければデフォルト値を使用する。

    Returns:
        AppConfig オブジェクト。
    """
    config_path = path if path is not None else Path("config.toml")

    if not config_path.exists():
        return AppConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    app_config = AppConfig()

    style: dict[str, object] = data.get("style", {})  # type: ignore[assignment]
    if isinstance(style, dict):
        colors = style.get("colors")
        if isinstance(colors, dict):
            app_config.colors = _build_colors(colors)  # type: ignore[arg-type]

    logging_section = data.get("logging")
    if isinstance(logging_section, dict):
        app_config.logging = _build_logging(logging_section)  # type: ignore[arg-type]

    return app_config
