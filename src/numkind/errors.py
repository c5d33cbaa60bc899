"""
どこで: `numkind.errors`。
何を: Vector/Matrix が送出する例外階層（呼び出し側の契約違反のみ）。
なぜ: 種別不一致・次元不一致などを型で区別し、上位層が必要な粒度で捕捉できるようにするため。

方針:
- すべて `NumKindError` を基底とし、同時に最も近い組込み例外も継承する
  （`except ValueError` などの汎用ハンドラでも捕捉できる）。
- いずれも再試行で解消しない呼び出し側の誤りであり、コアは回復処理を行わない。
- 整数オーバーフロー/ゼロ除算はここに含めない（`numkind.kinds` の算術方針を参照）。
"""

from __future__ import annotations


class NumKindError(Exception):
    """`numkind` が送出する例外の基底クラス。"""


class InvalidKindError(NumKindError, ValueError):
    """未知の要素種別が要求された、または値から種別を推論できない。"""


class EmptyInputError(NumKindError, ValueError):
    """リテラル構築に空の入力が渡された。"""


class IrregularInputError(NumKindError, ValueError):
    """リテラル構築の入力が不揃い（種別混在・行長不一致・非シーケンス）。"""


class IndexOutOfRangeError(NumKindError, IndexError):
    """アクセサの添字が範囲外。"""


class KindMismatchError(NumKindError, TypeError):
    """オペランド同士、またはスカラーと容器の種別が一致しない。"""


class DimensionMismatchError(NumKindError, ValueError):
    """ベクトル長または行列形状が演算の要件を満たさない。"""


class UnsupportedKindError(NumKindError, TypeError):
    """演算が一部の種別にしか定義されていない（例: 整数ベクトルの `unit()`）。"""


class InvalidShapeError(NumKindError, ValueError):
    """次元が正でない、または要素数がアドレス可能範囲を超える。"""


__all__ = [
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
