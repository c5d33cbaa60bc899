"""
どこで: `engine.render.renderer`。
何を: 線分ラスタライズ `draw_line` と、メッシュ/座標軸グリッド/フレーム全体の描画。
なぜ: `Vector` の演算（sub/unit/add/magnitude）だけで線を引き、コアの算術をそのまま画素へ流すため。

線分の走査:
- 始点から単位ベクトル方向へ 1 ずつ進み、終点までの残り距離が 1 未満になったら止める。
- 終点そのものは描かない。長さ 1 未満の線分は何も描かない。
- 浮動小数の丸めで停滞しないよう、歩数は ceil(長さ) + 1 を上限とする。

画素への写像:
- raw:      (int(x), int(y))
- centered: (int(x + W/2), int(-y + H/2))   画面中心が原点、y 上向き
- int() は 0 方向への切り捨て。範囲外は `Canvas.set` が無視する。

投影:
- `Projector` は 3 次元の点を 2 次元以上のベクトルへ写す関数（None は投影不能）。
- 2x3 行列は `matrix_projector`、`Camera` は `camera.project` をそのまま渡す。
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, Optional

from numkind import DimensionMismatchError, ElementKind, Matrix, Vector

from engine.core.model import Mesh
from engine.core.transform_utils import vec3

from .canvas import Canvas
from .types import BLUE, GREEN, GREY, RED, TRANSPARENT, WHITE, Color

logger = logging.getLogger(__name__)

Projector = Callable[[Vector], Optional[Vector]]


def matrix_projector(m: Matrix) -> Projector:
    """行列×ベクトルによる投影関数。"""
    return m.multiply_vector


def _planar(v: Vector) -> Vector:
    """先頭 2 成分のベクトル（奥行きなどの余剰成分を捨てる）。"""
    if v.dimension < 2:
        raise DimensionMismatchError(f"描画には 2 成分以上が必要です: {v.dimension}")
    if v.dimension == 2:
        return v
    return Vector(v.as_array()[:2], v.kind)


def to_pixel(p: Vector, canvas: Canvas, *, centered: bool = False) -> tuple[int, int]:
    x = float(p.get(0))
    y = float(p.get(1))
    if centered:
        return int(x + canvas.width / 2.0), int(-y + canvas.height / 2.0)
    return int(x), int(y)


def draw_line(
    start: Vector,
    end: Vector,
    canvas: Canvas,
    color: Color = WHITE,
    *,
    centered: bool = False,
) -> int:
    """始点から終点へ単位歩幅で点を打つ。キャンバス内に打てた点の数を返す。"""
    a = _planar(start)
    b = _planar(end)
    length = b.sub(a).magnitude()
    if not math.isfinite(length) or length < 1.0:
        return 0
    step = b.sub(a).unit()
    limit = int(math.ceil(length)) + 1

    plotted = 0
    p = a
    for _ in range(limit):
        if not p.sub(b).magnitude() >= 1.0:
            break
        x, y = to_pixel(p, canvas, centered=centered)
        if canvas.set(x, y, color):
            plotted += 1
        p = p.add(step)
    return plotted


def draw_mesh(
    mesh: Mesh,
    project: Projector,
    canvas: Canvas,
    color: Color = WHITE,
    *,
    centered: bool = False,
) -> int:
    """三角形の 3 辺を描く。投影できない頂点を含む辺は飛ばす。"""
    projected = [project(v) for v in mesh]
    plotted = 0
    for i in range(3):
        a, b = projected[i], projected[(i + 1) % 3]
        if a is None or b is None:
            logger.debug("skip edge %d of mesh: vertex not projectable", i)
            continue
        plotted += draw_line(a, b, canvas, color, centered=centered)
    return plotted


def draw_grid(
    project: Projector,
    canvas: Canvas,
    *,
    extent: float = 500.0,
    centered: bool = False,
    kind: ElementKind = ElementKind.FLOAT32,
) -> int:
    """原点から ±extent の座標軸を描く（+X 赤、+Y 緑、+Z 青、負側は灰）。"""
    origin = vec3(0.0, 0.0, 0.0, kind)
    axes = (
        ((extent, 0.0, 0.0), RED),
        ((-extent, 0.0, 0.0), GREY),
        ((0.0, extent, 0.0), GREEN),
        ((0.0, -extent, 0.0), GREY),
        ((0.0, 0.0, extent), BLUE),
        ((0.0, 0.0, -extent), GREY),
    )
    o = project(origin)
    if o is None:
        return 0
    plotted = 0
    for (x, y, z), color in axes:
        tip = project(vec3(x, y, z, kind))
        if tip is None:
            continue
        plotted += draw_line(o, tip, canvas, color, centered=centered)
    return plotted


def draw(
    meshes: Iterable[Mesh],
    project: Projector,
    canvas: Canvas,
    *,
    color: Color = WHITE,
    background: Color = TRANSPARENT,
    grid: bool = False,
    centered: bool = False,
    kind: ElementKind = ElementKind.FLOAT32,
) -> Canvas:
    """キャンバスを消去し、（任意で座標軸と）全メッシュを描く。"""
    canvas.clear(background)
    if grid:
        draw_grid(project, canvas, centered=centered, kind=kind)
    count = 0
    for mesh in meshes:
        draw_mesh(mesh, project, canvas, color, centered=centered)
        count += 1
    logger.debug("drew %d meshes on %dx%d canvas", count, canvas.width, canvas.height)
    return canvas


__all__ = [
    "Projector",
    "matrix_projector",
    "to_pixel",
    "draw_line",
    "draw_mesh",
    "draw_grid",
    "draw",
]
