"""
どこで: `numkind.matrix`。
何を: 種別タグ付きの 2 次元数値コンテナ `Matrix` と、行列×ベクトル/行列×行列の積。
なぜ: 回転・拡大・投影を 1 種類の容器で表し、`Vector` と同じ種別規則で合成できるようにするため。

データモデル（不変条件）:
- `cells: ndarray (rows, cols)`（行優先・C 連続）、dtype は常に `kind.dtype`。
- `rows, cols >= 1` かつ `rows * cols` はアドレス可能範囲（`np.iinfo(np.intp).max`）以内。

累積順（浮動小数の丸め結果を決めるため固定）:
- 積の各要素は「左の行 r と右の列 c の内積」を k = 0 .. cols-1 の昇順で逐次加算する。
- 各ステップは積 1 回・和 1 回をそれぞれ種別の精度で丸める（FMA や BLAS の並べ替えなし）。
- 整数は拡幅せず、種別のビット幅でラップアラウンドする。

直感図（2x3 の投影を 3 次元ベクトルに適用）:

    [[1, 0, 1],     [1,      [1*1 + 0*2 + 1*3,     [4,
     [0, 1, 1]]  ×   2,   =   0*1 + 1*2 + 1*3]  =   5]
                     3]
"""

from __future__ import annotations

import operator
from typing import Any, Iterable, Sequence

import numpy as np

from . import kinds
from .errors import (
    DimensionMismatchError,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidShapeError,
    IrregularInputError,
    KindMismatchError,
)
from .kinds import ElementKind
from .vector import Vector, _as_sequence

_MAX_CELLS = int(np.iinfo(np.intp).max)


def _check_shape(rows: int, cols: int) -> tuple[int, int]:
    r = operator.index(rows)
    c = operator.index(cols)
    if r <= 0 or c <= 0:
        raise InvalidShapeError(f"行数/列数は正の整数である必要があります: ({rows}, {cols})")
    if r * c > _MAX_CELLS:
        raise InvalidShapeError(f"要素数がアドレス可能範囲を超えます: ({rows}, {cols})")
    return r, c


def _as_row(row: Any, index: int) -> list[Any]:
    try:
        return list(_as_sequence(row))
    except IrregularInputError as exc:
        raise IrregularInputError(f"行 {index} がシーケンスではありません: {row!r}") from exc


class Matrix:
    """種別タグ付きの行列。

    フィールド:
    - `kind`: 要素種別（`ElementKind`）。
    - `cells (rows, cols)`: 種別の dtype を持つ行優先の 2 次元配列。
    """

    __slots__ = ("_kind", "_cells")

    _kind: ElementKind
    _cells: np.ndarray

    def __init__(self, cells: np.ndarray, kind: ElementKind | str) -> None:
        resolved = kinds.resolve_kind(kind)
        arr = np.asarray(cells)
        if arr.ndim != 2:
            raise InvalidShapeError(f"cells は 2 次元配列である必要があります: {arr.shape}")
        _check_shape(arr.shape[0], arr.shape[1])
        if arr.dtype != resolved.dtype:
            raise KindMismatchError(
                f"cells の dtype {arr.dtype} は種別 {resolved} の格納型 {resolved.dtype} と一致しません"
            )
        self._kind = resolved
        self._cells = np.array(arr, dtype=resolved.dtype, copy=True, order="C")

    @classmethod
    def _wrap(cls, cells: np.ndarray, kind: ElementKind) -> "Matrix":
        obj = object.__new__(cls)
        obj._kind = kind
        obj._cells = cells
        return obj

    # ── ファクトリ ───────────────────
    @classmethod
    def zero(cls, rows: int, cols: int, kind: ElementKind | str) -> "Matrix":
        """全要素 0 の行列。"""
        resolved = kinds.resolve_kind(kind)
        r, c = _check_shape(rows, cols)
        return cls._wrap(kinds.zeros(resolved, (r, c)), resolved)

    @classmethod
    def identity(cls, rows: int, cols: int, kind: ElementKind | str) -> "Matrix":
        """先頭 `min(rows, cols)` 個の主対角が 1、他は 0 の行列。"""
        resolved = kinds.resolve_kind(kind)
        r, c = _check_shape(rows, cols)
        return cls._wrap(kinds.identity(resolved, r, c), resolved)

    @classmethod
    def random(
        cls,
        rows: int,
        cols: int,
        kind: ElementKind | str,
        rng: np.random.Generator | None = None,
    ) -> "Matrix":
        """乱数行列（テスト補助）。"""
        resolved = kinds.resolve_kind(kind)
        r, c = _check_shape(rows, cols)
        return cls._wrap(kinds.random_cells(resolved, (r, c), rng), resolved)

    @classmethod
    def filled(cls, values: Iterable[Iterable[Any]]) -> "Matrix":
        """入れ子のリテラル行から行列を作る。種別は先頭要素から推論する。

        Raises
        ------
        EmptyInputError
            行が 0 本、または先頭行が空。
        IrregularInputError
            行長の不一致、シーケンスでない行、種別の混在。
        """
        source = _as_sequence(values)
        if not source:
            raise EmptyInputError("行が 0 本の入力から行列は作れません")
        rows: list[list[Any]] = [_as_row(row, i) for i, row in enumerate(source)]
        cols = len(rows[0])
        if cols == 0:
            raise EmptyInputError("列が 0 の入力から行列は作れません")
        for i, row in enumerate(rows):
            if len(row) != cols:
                raise IrregularInputError(f"行 {i} の列数 {len(row)} が {cols} と一致しません")
        kind = kinds.infer_kind([v for row in rows for v in row])
        _check_shape(len(rows), cols)
        return cls._wrap(kinds.cells_from_values(kind, rows), kind)

    # ── 属性 ─────────────────────────
    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def rows(self) -> int:
        return int(self._cells.shape[0])

    @property
    def cols(self) -> int:
        return int(self._cells.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def as_array(self, *, copy: bool = False) -> np.ndarray:
        """内部配列を返す。`copy=False` は読み取り専用ビュー。"""
        if copy:
            return self._cells.copy()
        view = self._cells.view()
        view.setflags(write=False)
        return view

    # ── アクセサ ─────────────────────
    def _check_index(self, row: int, col: int) -> tuple[int, int]:
        r = operator.index(row)
        c = operator.index(col)
        if not (0 <= r < self.rows and 0 <= c < self.cols):
            raise IndexOutOfRangeError(
                f"添字 ({row}, {col}) は範囲外です（< ({self.rows}, {self.cols})）"
            )
        return r, c

    def get(self, row: int, col: int) -> np.generic:
        return self._cells[self._check_index(row, col)]

    def set(self, row: int, col: int, value: Any) -> "Matrix":
        """要素をその場で書き換え、自身を返す。検査は `Vector.set` と同じ。"""
        idx = self._check_index(row, col)
        self._cells[idx] = kinds.coerce_scalar(self._kind, value)
        return self

    def row(self, i: int) -> Vector:
        """i 行目をベクトルとして取り出す（コピー）。"""
        r, _ = self._check_index(i, 0)
        return Vector._wrap(self._cells[r].copy(), self._kind)

    def col(self, j: int) -> Vector:
        """j 列目をベクトルとして取り出す（コピー）。"""
        _, c = self._check_index(0, j)
        return Vector._wrap(np.ascontiguousarray(self._cells[:, c]), self._kind)

    # ── 積 ───────────────────────────
    def multiply_vector(self, v: Vector) -> Vector:
        """行列×ベクトル。結果の次元は `rows`。

        Raises
        ------
        KindMismatchError
            種別が異なる。
        DimensionMismatchError
            `cols != v.dimension`。
        """
        if not isinstance(v, Vector):
            raise KindMismatchError(f"Matrix.multiply_vector: Vector が必要です: {type(v).__name__}")
        if v.kind is not self._kind:
            raise KindMismatchError(
                f"Matrix.multiply_vector: 行列の種別 {self._kind} とベクトルの種別 {v.kind} が一致しません"
            )
        if v.dimension != self.cols:
            raise DimensionMismatchError(
                f"Matrix.multiply_vector: ベクトル長 {self.cols} が必要です（実際 {v.dimension}）"
            )
        out = kinds.matvec(self._kind, self._cells, v.as_array())
        return Vector._wrap(out, self._kind)

    def multiply_matrix(self, n: "Matrix") -> "Matrix":
        """行列×行列。結果の形状は `(self.rows, n.cols)`。"""
        if not isinstance(n, Matrix):
            raise KindMismatchError(f"Matrix.multiply_matrix: Matrix が必要です: {type(n).__name__}")
        if n.kind is not self._kind:
            raise KindMismatchError(
                f"Matrix.multiply_matrix: 種別 {self._kind} と {n.kind} が一致しません"
            )
        if n.rows != self.cols:
            raise DimensionMismatchError(
                f"Matrix.multiply_matrix: 右辺の行数 {self.cols} が必要です（実際 {n.rows}）"
            )
        out = kinds.matmul(self._kind, self._cells, n._cells)
        return Matrix._wrap(out, self._kind)

    def equal(self, n: "Matrix") -> bool:
        """要素ごとの厳密一致。種別/形状が異なれば例外。"""
        if not isinstance(n, Matrix):
            raise KindMismatchError(f"Matrix.equal: Matrix が必要です: {type(n).__name__}")
        if n.kind is not self._kind:
            raise KindMismatchError(f"Matrix.equal: 種別 {self._kind} と {n.kind} が一致しません")
        if n.shape != self.shape:
            raise DimensionMismatchError(
                f"Matrix.equal: 形状 {self.shape} と {n.shape} が一致しません"
            )
        return kinds.equal(self._kind, self._cells, n._cells)

    # 演算子糖衣: M @ v / M @ N
    def __matmul__(self, other: object) -> "Vector | Matrix":
        if isinstance(other, Vector):
            return self.multiply_vector(other)
        if isinstance(other, Matrix):
            return self.multiply_matrix(other)
        return NotImplemented

    def __str__(self) -> str:
        lines = (" ".join(str(c) for c in row) for row in self._cells)
        return "\n".join(lines)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Matrix({self.rows}x{self.cols}, {self._kind})"


def rows_of(m: Matrix) -> Sequence[Vector]:
    """全行をベクトルのリストで返す。"""
    return [m.row(i) for i in range(m.rows)]


__all__ = ["Matrix", "rows_of"]
