"""
どこで: `engine.render` 型定義。
何を: 8bit RGBA の色 `Color` と、よく使う色の定数。
なぜ: キャンバスへの書き込み値を検査済みの小さな値オブジェクトで受け渡すため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class Color:
    """0..255 の RGBA。アルファ省略時は不透明。"""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"Color.{name} は 0..255 の整数である必要があります: {value!r}")

    @classmethod
    def from_seq(cls, values: Sequence[int]) -> "Color":
        """`[r, g, b]` または `[r, g, b, a]` から作る（YAML 構成用）。"""
        items = [int(v) for v in values]
        if len(items) not in (3, 4):
            raise ValueError(f"Color は 3 要素または 4 要素が必要です: {values!r}")
        return cls(*items)

    def as_tuple(self) -> RGBA:
        return (self.r, self.g, self.b, self.a)


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
GREY = Color(0x80, 0x80, 0x80)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
TRANSPARENT = Color(0, 0, 0, 0)


__all__ = ["Color", "RGBA", "BLACK", "WHITE", "GREY", "RED", "GREEN", "BLUE", "TRANSPARENT"]
