"""
どこで: `common.settings`
何を: プロジェクトの環境変数（`WK_` 接頭辞）を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass
class _Settings:
    # 乱数（None は非決定的）
    RANDOM_SEED: int | None = None

    # Canvas
    CANVAS_WIDTH: int = 800
    CANVAS_HEIGHT: int = 600

    # フレームごとの回転角 [deg]
    FRAME_STEP_DEG: float = 2.0

    # 座標軸の描画（None は YAML の `render.grid` に従う）
    GRID: bool | None = None

    # Misc
    LOG_LEVEL: str = "INFO"
    OUTPUT_DIR: str | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 不正値は既定値へフォールバックする。
    - キャンバス寸法は下限 1 に丸める。
    """
    _settings.RANDOM_SEED = env_int("WK_RANDOM_SEED", None, min_value=0)

    _settings.CANVAS_WIDTH = env_int("WK_CANVAS_WIDTH", 800, min_value=1) or 800
    _settings.CANVAS_HEIGHT = env_int("WK_CANVAS_HEIGHT", 600, min_value=1) or 600

    _settings.FRAME_STEP_DEG = env_float("WK_FRAME_STEP_DEG", 2.0)
    _settings.GRID = env_bool("WK_GRID") if env_str("WK_GRID") is not None else None

    level = (env_str("WK_LOG_LEVEL", "INFO") or "INFO").upper()
    _settings.LOG_LEVEL = level if level in _LOG_LEVELS else "INFO"
    _settings.OUTPUT_DIR = env_str("WK_OUTPUT_DIR", None)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
