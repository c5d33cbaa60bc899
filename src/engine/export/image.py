"""
どこで: `engine.export.image`。
何を: `Canvas` の内容を PNG として保存するラッパ（Matplotlib、ヘッドレス）。
なぜ: ウィンドウや OpenGL コンテキスト無しでフレームを画像として残せるようにするため。

ファイル名:
- `index` 指定時は `frame_0000.png` のような連番。
- 未指定時はタイムスタンプ名（`20250101_120000_800x600.png`）。既存名は `-1`, `-2` ... を付けて回避。
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # headless
import matplotlib.image as mpimg

from engine.render.canvas import Canvas
from util.paths import ensure_frames_dir

logger = logging.getLogger(__name__)


def _unique_path(path: Path) -> Path:
    if not path.exists():
        return path
    n = 1
    while True:
        cand = path.with_name(f"{path.stem}-{n}{path.suffix}")
        if not cand.exists():
            return cand
        n += 1


def frame_path(directory: Path, index: int, prefix: str = "frame") -> Path:
    """連番フレームのパス（`<prefix>_0000.png`）。"""
    return directory / f"{prefix}_{int(index):04d}.png"


def save_png(
    canvas: Canvas,
    path: Path | str | None = None,
    *,
    directory: Path | str | None = None,
    index: int | None = None,
) -> Path:
    """キャンバスを PNG として保存する。

    Parameters
    ----------
    canvas : Canvas
        保存対象。
    path : Path | str | None
        出力先パス。None の場合は `directory`（既定 `data/frames/`）に自動命名で保存。
    directory : Path | str | None
        自動命名時の出力ディレクトリ。
    index : int | None
        自動命名時の連番。None ならタイムスタンプ名。

    Returns
    -------
    Path
        保存先のファイルパス。
    """
    if path is None:
        out_dir = ensure_frames_dir(directory)
        if index is not None:
            out = frame_path(out_dir, index)
        else:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            out = _unique_path(out_dir / f"{ts}_{canvas.width}x{canvas.height}.png")
    else:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)

    try:
        mpimg.imsave(out, canvas.pixels(copy=True), format="png")
    except (OSError, ValueError) as e:
        raise RuntimeError(f"PNG 保存に失敗: {e}") from e
    logger.info("saved frame %s", out)
    return out


__all__ = ["save_png", "frame_path"]
