"""共通フィクスチャ。

- 乱数シード固定（NumPy グローバル / numkind の共通生成器）
- 小さなベクトル/行列試料
"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from common.logging import PACKAGE_LOGGERS
from numkind import Matrix, Vector
from numkind import kinds as nk


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def numkind_seed() -> None:
    """`Vector.random` / `Matrix.random` の既定生成器をテストごとに固定。"""
    nk.reseed(12345)


@pytest.fixture(autouse=True)
def package_log_levels():
    """ランナーが設定したパッケージロガーのレベルをテストごとに戻す。"""
    saved = {name: logging.getLogger(name).level for name in PACKAGE_LOGGERS}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(2024)


@pytest.fixture()
def v_int3() -> Vector:
    return Vector.filled([1, 2, 3])


@pytest.fixture()
def v_f32_3() -> Vector:
    return Vector.filled([np.float32(3.0), np.float32(4.0), np.float32(12.0)])


@pytest.fixture()
def m_proj_int() -> Matrix:
    return Matrix.filled([[1, 0, 1], [0, 1, 1]])


