"""
どこで: `engine.core` の変換ユーティリティ。
何を: 回転/拡大/投影行列のビルダと、複合変換 `transform_combined()`。
なぜ: 行列の組み立てを一か所に集め、モデル層・描画層が `numkind` の行列積だけで変換を表せるようにするため。

規約:
- 角度はラジアン（`oblique_projection` のみ度）。
- 回転は右手系・反時計回り。`rotation_xyz` は X → Y → Z の順に適用（R = Rz·Ry·Rx）。
- 三角関数は float64 で評価し、最後に種別の格納型へ丸める。
- 行列ビルダは浮動小数種別のみ（整数種別は `UnsupportedKindError`）。
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from numkind import ElementKind, Matrix, UnsupportedKindError, Vector
from numkind.kinds import resolve_kind

Vec3 = tuple[float, float, float]


def _float_kind(kind: ElementKind | str) -> ElementKind:
    resolved = resolve_kind(kind)
    if not resolved.is_float:
        raise UnsupportedKindError(f"変換行列は浮動小数種別のみ対応です: {resolved}")
    return resolved


def _matrix(rows: Sequence[Sequence[float]], kind: ElementKind) -> Matrix:
    cells = np.asarray(rows, dtype=np.float64).astype(kind.dtype)
    return Matrix(cells, kind)


def vec3(x: float, y: float, z: float, kind: ElementKind | str = ElementKind.FLOAT32) -> Vector:
    """3 成分の浮動小数ベクトル（Python の数値を種別へ丸めて格納）。"""
    k = _float_kind(kind)
    return Vector(np.asarray([x, y, z], dtype=np.float64).astype(k.dtype), k)


def as_vector(values: Vector | Iterable[float], kind: ElementKind) -> Vector:
    """`Vector` はそのまま、数値列は `kind` の浮動小数ベクトルへ変換する。"""
    if isinstance(values, Vector):
        return values
    k = _float_kind(kind)
    return Vector(np.asarray(list(values), dtype=np.float64).astype(k.dtype), k)


def rotation_x(angle_rad: float, kind: ElementKind | str = ElementKind.FLOAT32) -> Matrix:
    """X 軸回りの回転行列。"""
    k = _float_kind(kind)
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    return _matrix([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]], k)


def rotation_y(angle_rad: float, kind: ElementKind | str = ElementKind.FLOAT32) -> Matrix:
    """Y 軸回りの回転行列。"""
    k = _float_kind(kind)
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    return _matrix([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]], k)


def rotation_z(angle_rad: float, kind: ElementKind | str = ElementKind.FLOAT32) -> Matrix:
    """Z 軸回りの回転行列。"""
    k = _float_kind(kind)
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    return _matrix([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], k)


def rotation_xyz(
    rx: float, ry: float, rz: float, kind: ElementKind | str = ElementKind.FLOAT32
) -> Matrix:
    """XYZ まとめ回転（X → Y → Z の順に適用）。"""
    k = _float_kind(kind)
    return rotation_z(rz, k).multiply_matrix(rotation_y(ry, k)).multiply_matrix(rotation_x(rx, k))


def scaling(
    sx: float,
    sy: float | None = None,
    sz: float | None = None,
    kind: ElementKind | str = ElementKind.FLOAT32,
) -> Matrix:
    """拡大行列。`sy`/`sz` 省略時は `sx` の一様拡大。"""
    k = _float_kind(kind)
    fy = sx if sy is None else sy
    fz = sx if sz is None else sz
    return _matrix([[sx, 0.0, 0.0], [0.0, fy, 0.0], [0.0, 0.0, fz]], k)


def oblique_projection(
    angle_deg: float = 30.0, kind: ElementKind | str = ElementKind.FLOAT32
) -> Matrix:
    """斜投影（2x3）: `[[1, cos a, 0], [0, sin a, 1]]`。奥行き軸 y を角度 a で画面へ倒す。"""
    k = _float_kind(kind)
    a = math.radians(angle_deg)
    return _matrix([[1.0, math.cos(a), 0.0], [0.0, math.sin(a), 1.0]], k)


def orthographic_projection(kind: ElementKind | str = ElementKind.FLOAT32) -> Matrix:
    """正投影（2x3）: z を捨てて (x, y) を取る。"""
    k = _float_kind(kind)
    return _matrix([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], k)


def translate(v: Vector, offset: Vector | Iterable[float]) -> Vector:
    """平行移動（`Vector.add` の薄いラッパ）。数値列は `v` の種別へ丸めて加算する。"""
    return v.add(as_vector(offset, v.kind))


def transform_combined(
    v: Vector,
    scale: Vec3 = (1.0, 1.0, 1.0),
    rotation: Vec3 = (0.0, 0.0, 0.0),
    translation: Vec3 = (0.0, 0.0, 0.0),
) -> Vector:
    """複合変換：スケール → 回転 → 移動を順次適用。

    引数:
        v: 変換対象の 3 次元ベクトル（浮動小数種別）
        scale: (sx, sy, sz) スケール係数
        rotation: (rx, ry, rz) 回転角度（ラジアン）
        translation: 最終的な移動量

    返り値:
        変換後の新しい Vector
    """
    result = v

    # 1. スケール変換（原点中心）
    sx, sy, sz = scale
    if sx != 1 or sy != 1 or sz != 1:
        result = scaling(sx, sy, sz, v.kind).multiply_vector(result)

    # 2. 回転変換（原点中心）
    rx, ry, rz = rotation
    if rx != 0 or ry != 0 or rz != 0:
        result = rotation_xyz(rx, ry, rz, v.kind).multiply_vector(result)

    # 3. 移動変換（最終位置へ）
    if any(t != 0 for t in translation):
        result = translate(result, translation)

    return result


__all__ = [
    "vec3",
    "as_vector",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "rotation_xyz",
    "scaling",
    "oblique_projection",
    "orthographic_projection",
    "translate",
    "transform_combined",
]
