"""
どこで: `engine.render.camera`。
何を: ピンホールカメラ `Camera`。ワールド座標の点を画面座標 (x, y, depth) へ透視投影する。
なぜ: 斜投影/正投影（2x3 行列）と並ぶ第三の投影として、奥行き感のあるフレームを出すため。

座標系:
- `forward = unit(look_at - position)`、`right = unit(forward × up)`、`up' = right × forward`。
- 画面座標は中心原点・y 上向き（`draw_line(..., centered=True)` と組み合わせる）。
- x = f · (d·right) / depth、y = f · (d·up') / depth、depth = d·forward（d = point - position）。
- depth <= 0（カメラ上または背後）の点は投影しない（None）。
"""

from __future__ import annotations

import logging
import math

import numpy as np

from numkind import DimensionMismatchError, UnsupportedKindError, Vector

from engine.core.transform_utils import as_vector

logger = logging.getLogger(__name__)

# forward が up と平行なときの代替 up
_FALLBACK_UP = (0.0, 1.0, 0.0)


def cross(a: Vector, b: Vector) -> Vector:
    """3 次元ベクトルの外積（種別の算術）。"""
    if a.dimension != 3 or b.dimension != 3:
        raise DimensionMismatchError(f"cross: 3 次元ベクトルが必要です: {a.dimension}, {b.dimension}")
    ax, ay, az = a.get(0), a.get(1), a.get(2)
    bx, by, bz = b.get(0), b.get(1), b.get(2)
    with np.errstate(over="ignore", invalid="ignore"):
        cells = np.array([ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx], dtype=a.kind.dtype)
    return Vector(cells, a.kind)


class Camera:
    """位置・注視点・焦点距離で定まるカメラ。"""

    def __init__(
        self,
        position: Vector,
        look_at: Vector,
        focal_length: float = 500.0,
        up: tuple[float, float, float] = (0.0, 0.0, 1.0),
    ) -> None:
        if not position.kind.is_float:
            raise UnsupportedKindError(f"Camera は浮動小数種別のみ対応です: {position.kind}")
        if position.dimension != 3:
            raise DimensionMismatchError(f"Camera: 3 次元の位置が必要です: {position.dimension}")
        if position.equal(look_at):
            raise ValueError("Camera: position と look_at が同一です")
        if not (math.isfinite(focal_length) and focal_length > 0):
            raise ValueError(f"Camera: focal_length は正の有限値である必要があります: {focal_length}")

        kind = position.kind
        self._position = position
        self._look_at = look_at
        self._focal = kind.cast(focal_length)
        self._forward = look_at.sub(position).unit()

        right = cross(self._forward, as_vector(up, kind))
        if right.magnitude() < 1e-6:
            right = cross(self._forward, as_vector(_FALLBACK_UP, kind))
        self._right = right.unit()
        self._up = cross(self._right, self._forward)

    @property
    def position(self) -> Vector:
        return self._position

    @property
    def look_at(self) -> Vector:
        return self._look_at

    @property
    def forward(self) -> Vector:
        return self._forward

    def project(self, point: Vector) -> Vector | None:
        """点を (x, y, depth) へ投影する。カメラ上/背後の点は None。"""
        d = point.sub(self._position)
        depth = d.dot(self._forward)
        if not depth > 0:
            logger.debug("point %s is behind the camera (depth=%s)", point, depth)
            return None
        kind = point.kind
        with np.errstate(over="ignore", invalid="ignore"):
            x = kind.cast(self._focal * d.dot(self._right) / depth)
            y = kind.cast(self._focal * d.dot(self._up) / depth)
        return Vector(np.array([x, y, depth], dtype=kind.dtype), kind)


__all__ = ["Camera", "cross"]
