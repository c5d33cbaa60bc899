"""
どこで: `util.paths`。
何を: フレーム画像の保存先ディレクトリの生成と解決ユーティリティを提供する。
なぜ: ランナーから簡潔に保存先を扱え、並行呼び出しでも安全に作成できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from .utils import _find_project_root


def ensure_frames_dir(base: Path | str | None = None) -> Path:
    """フレーム出力先を作成して返す。

    - `base` 未指定時はプロジェクトルート直下の `data/frames/`。
    - 既存の場合もそのまま Path を返す。
    - 並行呼び出しに対して `exist_ok=True` で安全。
    """
    if base is None:
        out = _find_project_root(Path(__file__).parent) / "data" / "frames"
    else:
        out = Path(base)
    out.mkdir(parents=True, exist_ok=True)
    return out


__all__ = ["ensure_frames_dir"]
