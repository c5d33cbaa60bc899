"""
どこで: `numkind.kinds`（コアの種別ディスパッチ層）。
何を: 要素種別 `ElementKind` と、種別ごとの零/単位元/乱数生成・型検査・算術を一か所に集約する。
なぜ: Vector/Matrix の各メソッドが 12 通りの分岐を個別に抱えると取りこぼしが起きるため。
      種別は numpy dtype に写像し、算術は dtype をパラメータとする 1 つの実装で全種別を扱う。

種別と格納型:

    INT    -> np.intp   (機械語長の符号付き整数)
    INT8   -> np.int8      UINT   -> np.uintp  (機械語長の符号なし整数)
    INT16  -> np.int16     UINT8  -> np.uint8
    INT32  -> np.int32     UINT16 -> np.uint16
    INT64  -> np.int64     UINT32 -> np.uint32
                           UINT64 -> np.uint64
    FLOAT32 -> np.float32  FLOAT64 -> np.float64

スカラー値の種別:
- Python `int` は INT、Python `float` は FLOAT64、numpy スカラーは自身の dtype に対応する
  サイズ付き種別（`np.int64` は INT64）。`bool` や非数値は種別を持たない。
- 「値の型が種別に一致する」とは、値の格納 dtype が `kind.dtype` と等しいことを指す。

算術方針（全演算で統一）:
- 整数のオーバーフローは 2^bits を法として黙ってラップアラウンドする（拡幅しない）。
- 整数のゼロ除算は `ZeroDivisionError`。浮動小数のゼロ除算/オーバーフローは IEEE の inf/nan。
- 整数除算は 0 方向への切り捨て（-7 / 2 == -3）。
- 和は常に添字昇順の逐次加算（1 ステップごとに積 1 回・和 1 回を丸める）。
  `np.sum` のペアワイズ加算や BLAS の並べ替えは使わない。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Sequence

import numpy as np

from .errors import (
    InvalidKindError,
    IrregularInputError,
    KindMismatchError,
)

logger = logging.getLogger(__name__)

# 算術はすべてこの errstate の下で行う（ラップ/inf/nan を警告なしで通す）
_NATIVE_ERRSTATE = {"over": "ignore", "under": "ignore", "divide": "ignore", "invalid": "ignore"}


class ElementKind(Enum):
    """要素種別タグ。各メンバーは格納用の numpy dtype を保持する。

    注意（INT/UINT と INT64/UINT64 の非対称）:
    - 64 bit 環境では INT と INT64 は同じ格納 dtype を持つ。`set`/`divide_by_scalar` は
      dtype で照合するため、`np.int64` の値を INT のベクトルへ渡せる。
    - 一方 `get` や反復が返すのは numpy スカラー（`np.int64`）で、推論は
      サイズ付き種別を選ぶ。よって `Vector.filled(list(v))` は INT64 となり、
      INT の `v` とは `equal` できない（`KindMismatchError`）。
    - 種別を保ったまま作り直すには `Vector(v.as_array(), v.kind)` を使う。
    """

    INT = ("int", np.intp)
    INT8 = ("int8", np.int8)
    INT16 = ("int16", np.int16)
    INT32 = ("int32", np.int32)
    INT64 = ("int64", np.int64)
    UINT = ("uint", np.uintp)
    UINT8 = ("uint8", np.uint8)
    UINT16 = ("uint16", np.uint16)
    UINT32 = ("uint32", np.uint32)
    UINT64 = ("uint64", np.uint64)
    FLOAT32 = ("float32", np.float32)
    FLOAT64 = ("float64", np.float64)

    def __init__(self, label: str, scalar_type: type) -> None:
        self.label = label
        self.dtype = np.dtype(scalar_type)

    @property
    def is_integer(self) -> bool:
        return self.dtype.kind in "iu"

    @property
    def is_signed(self) -> bool:
        return self.dtype.kind in "if"

    @property
    def is_float(self) -> bool:
        return self.dtype.kind == "f"

    def zero(self) -> np.generic:
        """この種別の 0。"""
        return self.dtype.type(0)

    def one(self) -> np.generic:
        """この種別の 1。"""
        return self.dtype.type(1)

    def cast(self, value: Any) -> np.generic:
        """値をこの種別の格納型へ明示変換する（検査なし。整数化は切り捨て）。

        格納型で表せない浮動小数（例: float32 に収まらないノルム）は警告なしで inf になる。
        """
        with np.errstate(**_NATIVE_ERRSTATE):
            return self.dtype.type(value)

    def accepts(self, value: Any) -> bool:
        """値の格納 dtype がこの種別と一致するか。"""
        try:
            other = kind_of(value)
        except InvalidKindError:
            return False
        return other.dtype == self.dtype

    def __str__(self) -> str:
        return self.label


_KIND_BY_LABEL: dict[str, ElementKind] = {k.label: k for k in ElementKind}

# numpy スカラーの逆引き。INT/UINT は INT64/UINT64 等と dtype が重なるため除外する。
_KIND_BY_LAYOUT: dict[tuple[str, int], ElementKind] = {
    (k.dtype.kind, k.dtype.itemsize): k
    for k in ElementKind
    if k not in (ElementKind.INT, ElementKind.UINT)
}


def resolve_kind(kind: ElementKind | str) -> ElementKind:
    """`ElementKind` または名前（大文字小文字不問）を `ElementKind` に解決する。

    Raises
    ------
    InvalidKindError
        未知の名前、またはそれ以外の型が渡された場合。
    """
    if isinstance(kind, ElementKind):
        return kind
    if isinstance(kind, str):
        found = _KIND_BY_LABEL.get(kind.strip().lower())
        if found is not None:
            return found
    raise InvalidKindError(f"未知の要素種別です: {kind!r}")


def kind_of(value: Any) -> ElementKind:
    """スカラー値の種別を返す。

    Raises
    ------
    InvalidKindError
        bool・非数値・未対応の numpy 型（float16/complex 等）の場合。
    """
    if isinstance(value, (bool, np.bool_)):
        raise InvalidKindError("bool は数値種別として扱えません")
    if isinstance(value, np.generic):
        found = _KIND_BY_LAYOUT.get((value.dtype.kind, value.dtype.itemsize))
        if found is None:
            raise InvalidKindError(f"未対応の numpy 型です: {value.dtype}")
        return found
    if isinstance(value, int):
        return ElementKind.INT
    if isinstance(value, float):
        return ElementKind.FLOAT64
    raise InvalidKindError(f"数値ではありません: {type(value).__name__}")


def infer_kind(values: Sequence[Any]) -> ElementKind:
    """リテラル列の種別を先頭要素から推論し、全要素が同種であることを検査する。

    呼び出し側で空でないことを保証する前提。
    """
    kind: ElementKind | None = None
    for i, value in enumerate(values):
        try:
            other = kind_of(value)
        except InvalidKindError as exc:
            raise IrregularInputError(f"要素 {i} が数値ではありません: {value!r}") from exc
        if kind is None:
            kind = other
        elif other is not kind:
            raise IrregularInputError(
                f"要素 {i} の種別 {other} が先頭要素の種別 {kind} と一致しません"
            )
    return kind  # type: ignore[return-value]


def coerce_scalar(kind: ElementKind, value: Any) -> np.generic:
    """値を検査してこの種別のスカラーへ変換する（`set`/除算用）。

    Raises
    ------
    KindMismatchError
        値の型が種別に一致しない、または格納型で表現できない場合。
    """
    if not kind.accepts(value):
        raise KindMismatchError(
            f"値の型 {type(value).__name__} は種別 {kind} の格納型 {kind.dtype} と一致しません"
        )
    try:
        return kind.dtype.type(value)
    except OverflowError as exc:
        raise KindMismatchError(f"値 {value!r} は種別 {kind} で表現できません") from exc


def cells_from_values(kind: ElementKind, values: Sequence[Any]) -> np.ndarray:
    """検査済みリテラル（1 次元または行のリスト）を種別の配列へ変換する。"""
    if values and isinstance(values[0], (list, tuple)):
        rows = [[coerce_scalar(kind, v) for v in row] for row in values]
        return np.array(rows, dtype=kind.dtype)
    return np.array([coerce_scalar(kind, v) for v in values], dtype=kind.dtype)


# ── 生成 ─────────────────────────────────────────────────────────────
def zeros(kind: ElementKind, shape: int | tuple[int, ...]) -> np.ndarray:
    return np.zeros(shape, dtype=kind.dtype)


def identity(kind: ElementKind, rows: int, cols: int) -> np.ndarray:
    """先頭 `min(rows, cols)` 個の主対角が 1、他は 0。"""
    return np.eye(rows, cols, dtype=kind.dtype)


_default_rng: np.random.Generator | None = None


def default_rng() -> np.random.Generator:
    """プロセス共通の乱数生成器。

    `reseed` が呼ばれていなければ初回に OS エントロピーで作る。
    シードの供給（`WK_RANDOM_SEED` 等）は呼び出し側（ランナー/テスト）の責務。
    """
    global _default_rng
    if _default_rng is None:
        _default_rng = np.random.default_rng()
    return _default_rng


def reseed(seed: int | None = None) -> None:
    """共通乱数生成器を作り直す（再現性確保用）。"""
    global _default_rng
    logger.debug("default rng seeded with %s", seed)
    _default_rng = np.random.default_rng(seed)


def random_cells(
    kind: ElementKind,
    shape: int | tuple[int, ...],
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """乱数で埋めた配列。整数は種別の全範囲（負値含む）、浮動小数は [0, 1)。"""
    gen = rng if rng is not None else default_rng()
    if kind.is_integer:
        info = np.iinfo(kind.dtype)
        return gen.integers(info.min, info.max, size=shape, dtype=kind.dtype, endpoint=True)
    return gen.random(size=shape, dtype=kind.dtype)


# ── 算術（入力は種別の dtype を持つ配列） ──────────────────────────────
def add(kind: ElementKind, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    with np.errstate(**_NATIVE_ERRSTATE):
        return np.add(a, b, dtype=kind.dtype)


def sub(kind: ElementKind, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    with np.errstate(**_NATIVE_ERRSTATE):
        return np.subtract(a, b, dtype=kind.dtype)


def divide(kind: ElementKind, a: np.ndarray, scalar: np.generic) -> np.ndarray:
    """要素ごとの除算。整数は 0 方向へ切り捨て、浮動小数は IEEE 除算。"""
    if kind.is_float:
        with np.errstate(**_NATIVE_ERRSTATE):
            return np.true_divide(a, scalar, dtype=kind.dtype)
    if scalar == 0:
        raise ZeroDivisionError(f"種別 {kind} の整数除算でゼロ除算が発生しました")
    with np.errstate(**_NATIVE_ERRSTATE):
        if kind.is_signed and scalar == -1:
            # MIN / -1 は MIN へラップ（numpy の版による差を避ける）
            return np.negative(a, dtype=kind.dtype)
        q = np.floor_divide(a, scalar, dtype=kind.dtype)
        if kind.is_signed:
            # floor と trunc の差は「余りあり かつ 符号が異なる」場合の 1
            r = np.remainder(a, scalar, dtype=kind.dtype)
            adjust = (r != 0) & ((a < 0) != (scalar < 0))
            q = np.add(q, adjust.astype(kind.dtype), dtype=kind.dtype)
    return q


def _ordered_sum(kind: ElementKind, products: np.ndarray, axis: int) -> Any:
    """`axis` 方向を添字昇順に逐次加算した最終値（accumulate の末尾）。

    1 次元入力ではスカラー、それ以外では新しい C 連続配列を返す。
    """
    acc = np.add.accumulate(products, axis=axis, dtype=kind.dtype)
    return np.take(acc, -1, axis=axis)


def dot(kind: ElementKind, a: np.ndarray, b: np.ndarray) -> np.generic:
    with np.errstate(**_NATIVE_ERRSTATE):
        products = np.multiply(a, b, dtype=kind.dtype)
        return _ordered_sum(kind, products, axis=0)


def matvec(kind: ElementKind, m: np.ndarray, v: np.ndarray) -> np.ndarray:
    """(r, k) × (k,) -> (r,)。各行は行ベクトルと v の内積。"""
    with np.errstate(**_NATIVE_ERRSTATE):
        products = np.multiply(m, v[np.newaxis, :], dtype=kind.dtype)
        return _ordered_sum(kind, products, axis=1)


def matmul(kind: ElementKind, m: np.ndarray, n: np.ndarray) -> np.ndarray:
    """(r, k) × (k, c) -> (r, c)。各要素は m の行と n の列の内積（k 昇順）。"""
    with np.errstate(**_NATIVE_ERRSTATE):
        products = np.multiply(m[:, :, np.newaxis], n[np.newaxis, :, :], dtype=kind.dtype)
        return _ordered_sum(kind, products, axis=1)


def square_sum(kind: ElementKind, a: np.ndarray) -> float:
    """全要素を float64 へ昇格した二乗和。"""
    wide = a.astype(np.float64)
    with np.errstate(**_NATIVE_ERRSTATE):
        return float(_ordered_sum(ElementKind.FLOAT64, wide * wide, axis=0))


def equal(kind: ElementKind, a: np.ndarray, b: np.ndarray) -> bool:
    """種別の素の等価比較（許容誤差なし、nan は不一致）。"""
    return bool(np.array_equal(a, b))


__all__ = [
    "ElementKind",
    "resolve_kind",
    "kind_of",
    "infer_kind",
    "coerce_scalar",
    "cells_from_values",
    "zeros",
    "identity",
    "default_rng",
    "reseed",
    "random_cells",
    "add",
    "sub",
    "divide",
    "dot",
    "matvec",
    "matmul",
    "square_sum",
    "equal",
]
