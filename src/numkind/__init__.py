"""
どこで: `numkind` パッケージ（コア）。
何を: 種別タグ付きの `Vector`/`Matrix`、要素種別 `ElementKind`、例外階層を公開する。
なぜ: 変換・描画層が要素型を意識せずに線形演算を扱えるようにするため。
"""

from .errors import (
    DimensionMismatchError,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidKindError,
    InvalidShapeError,
    IrregularInputError,
    KindMismatchError,
    NumKindError,
    UnsupportedKindError,
)
from .kinds import ElementKind, kind_of, resolve_kind
from .matrix import Matrix
from .vector import Vector

__all__ = [
    "ElementKind",
    "Vector",
    "Matrix",
    "kind_of",
    "resolve_kind",
    "NumKindError",
    "InvalidKindError",
    "EmptyInputError",
    "IrregularInputError",
    "IndexOutOfRangeError",
    "KindMismatchError",
    "DimensionMismatchError",
    "UnsupportedKindError",
    "InvalidShapeError",
]
