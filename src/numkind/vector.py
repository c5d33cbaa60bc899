"""
どこで: `numkind.vector`。
何を: 固定長・種別タグ付きの 1 次元数値コンテナ `Vector`。
なぜ: 変換層/描画層が要素型を意識せずに加減算・正規化・ノルムを扱えるようにするため。

データモデル（不変条件）:
- `kind: ElementKind` は生成後に変わらない。
- `cells: ndarray (dimension,)` の dtype は常に `kind.dtype`（C 連続、インスタンス専有）。
- `dimension >= 1`。サイズ変更はしない。

API 方針:
- 算術（add/sub/dot/divide_by_scalar/unit）は新しい `Vector` を返す純関数。
- 唯一の破壊的操作は `set`。値の種別を再検査し、連鎖用に自身を返す。
- 実際の算術は `numkind.kinds` に委譲し、ここでは種別で分岐しない。

使用例:
    v = Vector.filled([1, 2, 3])            # INT と推論
    w = Vector.zero(3, "int").set(0, 1)     # 破壊的 set（自身を返す）
    u = Vector.filled([np.float32(4.0), np.float32(0.0)]).unit()
"""

from __future__ import annotations

import math
import operator
from typing import Any, Iterable, Iterator, Sequence

import numpy as np

from . import kinds
from .errors import (
    DimensionMismatchError,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidShapeError,
    IrregularInputError,
    KindMismatchError,
    UnsupportedKindError,
)
from .kinds import ElementKind


def _as_sequence(values: Any) -> Sequence[Any]:
    """リテラル入力を list に正規化する（文字列・非反復は拒否）。"""
    if isinstance(values, (str, bytes)):
        raise IrregularInputError("文字列はベクトルのリテラルとして扱えません")
    try:
        return list(values)
    except TypeError as exc:
        raise IrregularInputError(
            f"シーケンスが必要です: {type(values).__name__}"
        ) from exc


def _check_dimension(dimension: int) -> int:
    n = operator.index(dimension)
    if n <= 0:
        raise InvalidShapeError(f"次元は正の整数である必要があります: {dimension}")
    return n


class Vector:
    """種別タグ付きの固定長ベクトル。

    フィールド:
    - `kind`: 要素種別（`ElementKind`）。
    - `cells (dimension,)`: 種別の dtype を持つ 1 次元配列。
    """

    __slots__ = ("_kind", "_cells")

    _kind: ElementKind
    _cells: np.ndarray

    def __init__(self, cells: np.ndarray, kind: ElementKind | str) -> None:
        resolved = kinds.resolve_kind(kind)
        arr = np.asarray(cells)
        if arr.ndim != 1 or arr.size == 0:
            raise InvalidShapeError(f"cells は空でない 1 次元配列である必要があります: {arr.shape}")
        if arr.dtype != resolved.dtype:
            raise KindMismatchError(
                f"cells の dtype {arr.dtype} は種別 {resolved} の格納型 {resolved.dtype} と一致しません"
            )
        self._kind = resolved
        self._cells = np.array(arr, dtype=resolved.dtype, copy=True, order="C")

    @classmethod
    def _wrap(cls, cells: np.ndarray, kind: ElementKind) -> "Vector":
        """演算結果（新規確保済み配列）をコピーせずに包む内部経路。"""
        obj = object.__new__(cls)
        obj._kind = kind
        obj._cells = cells
        return obj

    # ── ファクトリ ───────────────────
    @classmethod
    def zero(cls, dimension: int, kind: ElementKind | str) -> "Vector":
        """全要素が種別の 0 のベクトル。

        Raises
        ------
        InvalidKindError
            未知の種別。
        InvalidShapeError
            次元が正でない。
        """
        resolved = kinds.resolve_kind(kind)
        n = _check_dimension(dimension)
        return cls._wrap(kinds.zeros(resolved, n), resolved)

    @classmethod
    def filled(cls, values: Iterable[Any]) -> "Vector":
        """リテラル列からベクトルを作る。種別は先頭要素から推論する。

        Parameters
        ----------
        values : Iterable
            Python の int/float、または numpy スカラーの列。全要素が同じ種別であること。

        Raises
        ------
        EmptyInputError
            空の入力。
        IrregularInputError
            非シーケンス、または種別の混在（暗黙の型変換はしない）。
        """
        items = _as_sequence(values)
        if not items:
            raise EmptyInputError("空の入力からベクトルは作れません")
        kind = kinds.infer_kind(items)
        return cls._wrap(kinds.cells_from_values(kind, items), kind)

    @classmethod
    def random(
        cls,
        dimension: int,
        kind: ElementKind | str,
        rng: np.random.Generator | None = None,
    ) -> "Vector":
        """乱数ベクトル（テスト補助）。整数は全範囲、浮動小数は [0, 1)。"""
        resolved = kinds.resolve_kind(kind)
        n = _check_dimension(dimension)
        return cls._wrap(kinds.random_cells(resolved, n, rng), resolved)

    # ── 属性 ─────────────────────────
    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def dimension(self) -> int:
        return int(self._cells.shape[0])

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[np.generic]:
        return iter(self._cells)

    def as_array(self, *, copy: bool = False) -> np.ndarray:
        """内部配列を返す。`copy=False` は読み取り専用ビュー。"""
        if copy:
            return self._cells.copy()
        view = self._cells.view()
        view.setflags(write=False)
        return view

    # ── アクセサ ─────────────────────
    def _check_index(self, i: int) -> int:
        idx = operator.index(i)
        if not 0 <= idx < self.dimension:
            raise IndexOutOfRangeError(
                f"添字 {i} は範囲外です（0 <= i < {self.dimension}）"
            )
        return idx

    def get(self, i: int) -> np.generic:
        """i 番目の要素（種別の numpy スカラー）。"""
        return self._cells[self._check_index(i)]

    def set(self, i: int, value: Any) -> "Vector":
        """i 番目の要素をその場で書き換え、自身を返す（コピーではない）。

        Raises
        ------
        IndexOutOfRangeError
            添字が範囲外。
        KindMismatchError
            値の型が種別の格納型と一致しない。
        """
        idx = self._check_index(i)
        self._cells[idx] = kinds.coerce_scalar(self._kind, value)
        return self

    # ── 算術（すべて純粋） ────────────
    def _check_operand(self, other: Any, op: str) -> "Vector":
        if not isinstance(other, Vector):
            raise KindMismatchError(f"Vector.{op}: Vector が必要です: {type(other).__name__}")
        if other.kind is not self._kind:
            raise KindMismatchError(f"Vector.{op}: 種別 {self._kind} と {other.kind} が一致しません")
        if other.dimension != self.dimension:
            raise DimensionMismatchError(
                f"Vector.{op}: 次元 {self.dimension} と {other.dimension} が一致しません"
            )
        return other

    def add(self, other: "Vector") -> "Vector":
        """要素ごとの和。整数はラップアラウンド。"""
        w = self._check_operand(other, "add")
        return Vector._wrap(kinds.add(self._kind, self._cells, w._cells), self._kind)

    def sub(self, other: "Vector") -> "Vector":
        """要素ごとの差。整数はラップアラウンド。"""
        w = self._check_operand(other, "sub")
        return Vector._wrap(kinds.sub(self._kind, self._cells, w._cells), self._kind)

    def dot(self, other: "Vector") -> np.generic:
        """内積。添字昇順に種別の算術で累積する。"""
        w = self._check_operand(other, "dot")
        return kinds.dot(self._kind, self._cells, w._cells)

    def divide_by_scalar(self, scalar: Any) -> "Vector":
        """スカラーで除算。

        整数種別は 0 方向への切り捨て、ゼロ除算は `ZeroDivisionError`。
        浮動小数種別は IEEE 除算（ゼロ除算は inf/nan）。

        Raises
        ------
        KindMismatchError
            スカラーの型が種別の格納型と一致しない。
        """
        s = kinds.coerce_scalar(self._kind, scalar)
        return Vector._wrap(kinds.divide(self._kind, self._cells, s), self._kind)

    def magnitude(self) -> float:
        """ユークリッドノルム。全要素を float64 へ昇格して計算する（全種別で定義）。"""
        return math.sqrt(kinds.square_sum(self._kind, self._cells))

    def unit(self) -> "Vector":
        """同じ向きで長さ 1 のベクトル（FLOAT32/FLOAT64 のみ）。

        ノルムを種別の格納型へ変換してから `divide_by_scalar` する。
        ゼロベクトルは IEEE に従い nan になる。ノルムが格納型に収まらない場合（float32 の
        上限付近）はノルムが inf となり、各成分は 0 になる（警告は出さない）。
        """
        if not self._kind.is_float:
            raise UnsupportedKindError(f"unit() は浮動小数種別のみ対応です: {self._kind}")
        return self.divide_by_scalar(self._kind.cast(self.magnitude()))

    def equal(self, other: "Vector") -> bool:
        """要素ごとの厳密一致（許容誤差なし）。種別/次元が異なれば例外。"""
        w = self._check_operand(other, "equal")
        return kinds.equal(self._kind, self._cells, w._cells)

    # 演算子糖衣
    def __add__(self, other: object) -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.sub(other)

    def __str__(self) -> str:
        return "[" + ", ".join(str(c) for c in self._cells) + "]"

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Vector({self}, {self._kind})"


__all__ = ["Vector"]
