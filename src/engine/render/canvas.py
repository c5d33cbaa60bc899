"""
どこで: `engine.render.canvas`。
何を: 固定サイズの RGBA ピクセルバッファ `Canvas`。
なぜ: ウィンドウやテクスチャに依存せず、描画結果を配列のまま検査・保存できるようにするため。

レイアウト:
- `pixels` は shape `(height, width, 4)`、dtype `uint8`、行優先（y が行）。
- 原点は左上。範囲外への書き込みは黙って無視する。
"""

from __future__ import annotations

import numpy as np

from .types import TRANSPARENT, Color


class Canvas:
    __slots__ = ("_pixels",)

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"Canvas のサイズは正である必要があります: {width}x{height}")
        self._pixels = np.zeros((int(height), int(width), 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def clear(self, color: Color = TRANSPARENT) -> None:
        """全ピクセルを `color`（既定は全 0）で塗る。"""
        self._pixels[...] = color.as_tuple()

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, color: Color) -> bool:
        """1 ピクセルを書き込む。範囲外なら何もせず False。"""
        if not self.contains(x, y):
            return False
        self._pixels[y, x] = color.as_tuple()
        return True

    def get(self, x: int, y: int) -> Color:
        if not self.contains(x, y):
            raise IndexError(f"({x}, {y}) は Canvas {self.width}x{self.height} の範囲外です")
        r, g, b, a = (int(c) for c in self._pixels[y, x])
        return Color(r, g, b, a)

    def pixels(self, *, copy: bool = False) -> np.ndarray:
        """ピクセル配列を返す。`copy=False` は読み取り専用ビュー。"""
        if copy:
            return self._pixels.copy()
        view = self._pixels.view()
        view.setflags(write=False)
        return view

    def count(self, color: Color) -> int:
        """`color` と完全一致するピクセル数。"""
        target = np.asarray(color.as_tuple(), dtype=np.uint8)
        return int(np.all(self._pixels == target, axis=-1).sum())


__all__ = ["Canvas"]
