"""
どこで: `common.logging`
何を: wirekind のロガー階層（`numkind` / `engine` / `util`）へレベルを適用し、必要なら最小のハンドラを付ける。
なぜ: コアはロガーを取得するだけで設定しない。`WK_LOG_LEVEL` や `--log-level` の反映はランナーが 1 か所で行う。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- パッケージ側のレベルは毎回適用する（ホストアプリがルートを設定済みでも効く）。
- ルートにハンドラが無いときだけ `basicConfig` を 1 度適用する。
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# レベルを適用するトップレベルのロガー名
PACKAGE_LOGGERS = ("numkind", "engine", "util")


def resolve_level(level: int | str) -> int:
    """`"debug"` や `logging.DEBUG` をレベル値へ正規化する（未知の名前は INFO）。"""
    if isinstance(level, str):
        lvl = getattr(logging, level.strip().upper(), logging.INFO)
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def apply_package_level(level: int | str) -> int:
    """`PACKAGE_LOGGERS` の各ロガーへレベルを設定し、適用したレベル値を返す。"""
    lvl = resolve_level(level)
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(lvl)
    return lvl


def setup_default_logging(level: int | str = "INFO") -> None:
    """パッケージのレベルを設定し、ルートが未設定なら最小構成を付ける。"""
    lvl = apply_package_level(level)

    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=lvl, format=_FORMAT)


__all__ = ["PACKAGE_LOGGERS", "apply_package_level", "setup_default_logging", "resolve_level"]
