"""
どこで: `engine.core.model`。
何を: 三角形メッシュ `Mesh`、位置/回転/拡大を持つ部品 `Part`、直方体プリミティブ `Box`。
なぜ: 描画対象を「ローカル座標の三角形の集まり + 姿勢」として持ち、
      フレームごとに姿勢だけを差し替えて再描画できるようにするため。

ローカル座標からワールド座標への変換（`Part.get_mesh`）:

    world = rotation · (scaling · local) + position

- 姿勢の種別は部品の種別（既定 FLOAT32）に揃える。異なる種別は `KindMismatchError`。
- メッシュ自体は不変。`get_mesh` は毎回新しい `Mesh` を返す。
"""

from __future__ import annotations

import math
from typing import Iterable, Iterator, Sequence

from numkind import (
    DimensionMismatchError,
    ElementKind,
    IndexOutOfRangeError,
    KindMismatchError,
    Matrix,
    Vector,
)

from .transform_utils import _float_kind, rotation_xyz, scaling, vec3


class Mesh:
    """3 頂点の三角形。全頂点は同じ種別の 3 次元ベクトル。"""

    __slots__ = ("_vertices",)

    def __init__(self, vertices: Iterable[Vector]) -> None:
        verts = tuple(vertices)
        if len(verts) != 3:
            raise DimensionMismatchError(f"Mesh: 頂点は 3 個必要です（実際 {len(verts)}）")
        for i, v in enumerate(verts):
            if not isinstance(v, Vector):
                raise KindMismatchError(f"Mesh: 頂点 {i} が Vector ではありません: {type(v).__name__}")
            if v.dimension != 3:
                raise DimensionMismatchError(f"Mesh: 頂点 {i} は 3 次元である必要があります: {v.dimension}")
            if v.kind is not verts[0].kind:
                raise KindMismatchError(f"Mesh: 頂点 {i} の種別 {v.kind} が {verts[0].kind} と一致しません")
        self._vertices = verts

    @property
    def kind(self) -> ElementKind:
        return self._vertices[0].kind

    @property
    def vertices(self) -> tuple[Vector, Vector, Vector]:
        return self._vertices  # type: ignore[return-value]

    def get_vertex(self, index: int) -> Vector:
        if not 0 <= index < 3:
            raise IndexOutOfRangeError(f"Mesh.get_vertex: 添字は 0..2 です（実際 {index}）")
        return self._vertices[index]

    def edges(self) -> Iterator[tuple[Vector, Vector]]:
        """辺 (0,1), (1,2), (2,0) を順に返す。"""
        for i in range(3):
            yield self._vertices[i], self._vertices[(i + 1) % 3]

    def __iter__(self) -> Iterator[Vector]:
        return iter(self._vertices)

    def __str__(self) -> str:
        return "[\n" + "".join(f"\t{v}\n" for v in self._vertices) + "]"


class Part:
    """ローカル座標のメッシュ群と、その姿勢（位置・回転・拡大）。

    既定の姿勢は原点・単位回転・等倍。
    """

    def __init__(
        self, meshes: Sequence[Mesh] = (), kind: ElementKind | str = ElementKind.FLOAT32
    ) -> None:
        self._kind = _float_kind(kind)
        self._meshes: list[Mesh] = []
        for m in meshes:
            self._check_mesh(m)
            self._meshes.append(m)
        self._position = Vector.zero(3, self._kind)
        self._rotation = Matrix.identity(3, 3, self._kind)
        self._scaling = Matrix.identity(3, 3, self._kind)

    def _check_mesh(self, mesh: Mesh) -> None:
        if not isinstance(mesh, Mesh):
            raise KindMismatchError(f"Part: Mesh が必要です: {type(mesh).__name__}")
        if mesh.kind is not self._kind:
            raise KindMismatchError(f"Part: メッシュの種別 {mesh.kind} が部品の種別 {self._kind} と一致しません")

    def _check_vector3(self, v: Vector, what: str) -> Vector:
        if not isinstance(v, Vector):
            raise KindMismatchError(f"Part.{what}: Vector が必要です: {type(v).__name__}")
        if v.dimension != 3:
            raise DimensionMismatchError(f"Part.{what}: 3 次元ベクトルが必要です: {v.dimension}")
        if v.kind is not self._kind:
            raise KindMismatchError(f"Part.{what}: 種別 {self._kind} が必要です: {v.kind}")
        return v

    def _check_matrix3(self, m: Matrix, what: str) -> Matrix:
        if m.shape != (3, 3):
            raise DimensionMismatchError(f"Part.{what}: 3x3 行列が必要です: {m.shape}")
        if m.kind is not self._kind:
            raise KindMismatchError(f"Part.{what}: 種別 {self._kind} が必要です: {m.kind}")
        return m

    # ── 姿勢 ─────────────────────────
    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def position(self) -> Vector:
        return self._position

    @property
    def rotation(self) -> Matrix:
        return self._rotation

    @property
    def scaling(self) -> Matrix:
        return self._scaling

    def set_position(self, position: Vector) -> "Part":
        """親座標系での位置を設定する。"""
        self._position = self._check_vector3(position, "set_position")
        return self

    def set_rotation(self, rotation: Matrix | Vector) -> "Part":
        """回転を設定する。3x3 行列、または各軸の角度（度）を持つ 3 次元ベクトル。"""
        if isinstance(rotation, Matrix):
            self._rotation = self._check_matrix3(rotation, "set_rotation")
            return self
        deg = self._check_vector3(rotation, "set_rotation")
        rx, ry, rz = (math.radians(float(c)) for c in deg)
        self._rotation = rotation_xyz(rx, ry, rz, self._kind)
        return self

    def set_scaling(self, factors: Matrix | Vector | float) -> "Part":
        """拡大を設定する。3x3 行列、(sx, sy, sz) ベクトル、または一様係数。"""
        if isinstance(factors, Matrix):
            self._scaling = self._check_matrix3(factors, "set_scaling")
        elif isinstance(factors, Vector):
            sx, sy, sz = (float(c) for c in self._check_vector3(factors, "set_scaling"))
            self._scaling = scaling(sx, sy, sz, self._kind)
        else:
            self._scaling = scaling(float(factors), kind=self._kind)
        return self

    # ── メッシュ ─────────────────────
    def add_mesh(self, mesh: Mesh) -> "Part":
        self._check_mesh(mesh)
        self._meshes.append(mesh)
        return self

    def local_mesh(self, index: int) -> Mesh:
        """姿勢を適用する前のメッシュ。"""
        if not 0 <= index < len(self._meshes):
            raise IndexOutOfRangeError(
                f"Part.local_mesh: 添字は [0..{len(self._meshes)}) です（実際 {index}）"
            )
        return self._meshes[index]

    def _to_world(self, v: Vector) -> Vector:
        scaled = self._scaling.multiply_vector(v)
        return self._rotation.multiply_vector(scaled).add(self._position)

    def get_mesh(self, index: int) -> Mesh:
        """姿勢を適用したワールド座標のメッシュ。"""
        local = self.local_mesh(index)
        return Mesh(self._to_world(v) for v in local)

    def meshes(self) -> Iterator[Mesh]:
        """全メッシュをワールド座標で順に返す。"""
        for i in range(len(self._meshes)):
            yield self.get_mesh(i)

    def __len__(self) -> int:
        return len(self._meshes)


class Box(Part):
    """底面が y=0、中心が原点の直方体（12 三角形）。

    幅は x、奥行きは z、高さは y 方向。
    """

    def __init__(
        self,
        width: float,
        depth: float,
        height: float,
        kind: ElementKind | str = ElementKind.FLOAT32,
    ) -> None:
        for name, size in (("width", width), ("depth", depth), ("height", height)):
            if not (math.isfinite(size) and size > 0):
                raise ValueError(f"Box: {name} は正の有限値である必要があります: {size}")
        super().__init__((), kind)
        self._size = (float(width), float(depth), float(height))

        k = self._kind
        w, d, h = width / 2.0, depth / 2.0, float(height)
        # front/back × bottom/top × left/right
        fbl, bbl = vec3(-w, 0.0, -d, k), vec3(-w, 0.0, d, k)
        bbr, fbr = vec3(w, 0.0, d, k), vec3(w, 0.0, -d, k)
        ftl, btl = vec3(-w, h, -d, k), vec3(-w, h, d, k)
        btr, ftr = vec3(w, h, d, k), vec3(w, h, -d, k)

        faces = (
            # bottom
            (fbl, bbl, fbr), (bbl, bbr, fbr),
            # top
            (ftl, btl, ftr), (btl, btr, ftr),
            # left
            (fbl, bbl, btl), (fbl, ftl, btl),
            # right
            (fbr, bbr, btr), (fbr, ftr, btr),
            # front
            (fbl, ftl, ftr), (fbl, fbr, ftr),
            # back
            (bbl, btl, btr), (bbl, bbr, btr),
        )
        for tri in faces:
            self.add_mesh(Mesh(tri))

    @property
    def width(self) -> float:
        return self._size[0]

    @property
    def depth(self) -> float:
        return self._size[1]

    @property
    def height(self) -> float:
        return self._size[2]


__all__ = ["Mesh", "Part", "Box"]
