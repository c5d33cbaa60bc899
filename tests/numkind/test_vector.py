from __future__ import annotations

import math

import numpy as np
import pytest

from numkind import (
    DimensionMismatchError,
    ElementKind,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidKindError,
    InvalidShapeError,
    IrregularInputError,
    KindMismatchError,
    UnsupportedKindError,
    Vector,
)


@pytest.mark.parametrize("kind", list(ElementKind))
def test_zero_vector_holds_kind_zero(kind: ElementKind) -> None:
    v = Vector.zero(4, kind)
    assert v.kind is kind
    assert v.dimension == 4 and len(v) == 4
    for i in range(4):
        assert v.get(i) == kind.zero()
        assert v.get(i).dtype == kind.dtype


def test_zero_accepts_kind_name() -> None:
    assert Vector.zero(2, "uint8").kind is ElementKind.UINT8


def test_zero_rejects_unknown_kind_and_bad_dimension() -> None:
    with pytest.raises(InvalidKindError):
        Vector.zero(3, "int128")
    with pytest.raises(InvalidShapeError):
        Vector.zero(0, ElementKind.INT)
    with pytest.raises(InvalidShapeError):
        Vector.zero(-1, ElementKind.INT)


def test_filled_infers_int() -> None:
    v = Vector.filled([1, 2, 3])
    assert v.kind is ElementKind.INT
    assert v.dimension == 3
    assert [v.get(0), v.get(1), v.get(2)] == [1, 2, 3]


def test_filled_infers_sized_kind_from_numpy_scalars() -> None:
    v = Vector.filled([np.float32(1.5), np.float32(-2.0)])
    assert v.kind is ElementKind.FLOAT32
    assert v.as_array().dtype == np.float32


def test_filled_rejects_empty_irregular_and_non_sequence() -> None:
    with pytest.raises(EmptyInputError):
        Vector.filled([])
    with pytest.raises(IrregularInputError):
        Vector.filled([1, 2.0, 3])
    with pytest.raises(IrregularInputError):
        Vector.filled(5)
    with pytest.raises(IrregularInputError):
        Vector.filled("123")
    with pytest.raises(IrregularInputError):
        Vector.filled([[1, 2]])


def test_constructor_copies_and_checks_dtype() -> None:
    src = np.array([1, 2, 3], dtype=np.int16)
    v = Vector(src, ElementKind.INT16)
    src[0] = 99
    assert v.get(0) == 1
    with pytest.raises(KindMismatchError):
        Vector(np.array([1, 2], dtype=np.int32), ElementKind.INT16)
    with pytest.raises(InvalidShapeError):
        Vector(np.zeros((2, 2), dtype=np.int16), ElementKind.INT16)


def test_as_array_view_is_read_only() -> None:
    v = Vector.filled([1, 2, 3])
    view = v.as_array()
    with pytest.raises(ValueError):
        view[0] = 5
    cp = v.as_array(copy=True)
    cp[0] = 5
    assert v.get(0) == 1


def test_get_set_bounds() -> None:
    v = Vector.zero(3, ElementKind.INT)
    with pytest.raises(IndexOutOfRangeError):
        v.get(3)
    with pytest.raises(IndexOutOfRangeError):
        v.get(-1)
    with pytest.raises(IndexOutOfRangeError):
        v.set(3, 1)


def test_set_mutates_in_place_and_chains() -> None:
    v = Vector.zero(3, ElementKind.INT)
    assert v.set(0, 7).set(2, 9) is v
    assert [int(c) for c in v] == [7, 0, 9]


def test_set_rejects_mismatched_value_type() -> None:
    v = Vector.zero(3, ElementKind.FLOAT32)
    with pytest.raises(KindMismatchError):
        v.set(0, 1.0)
    with pytest.raises(KindMismatchError):
        v.set(0, 1)
    v.set(0, np.float32(1.0))
    assert v.get(0) == np.float32(1.0)


def test_add_sub_are_pure() -> None:
    a = Vector.filled([1, 2, 3])
    b = Vector.filled([10, 20, 30])
    s = a.add(b)
    assert s is not a and [int(c) for c in s] == [11, 22, 33]
    assert [int(c) for c in a] == [1, 2, 3]
    assert [int(c) for c in (b - a)] == [9, 18, 27]
    assert (a + b).equal(s)


def test_sub_self_is_zero() -> None:
    v = Vector.filled([5, -2, 7])
    assert v.sub(v).equal(Vector.zero(3, ElementKind.INT))


def test_add_kind_mismatch() -> None:
    a = Vector.filled([1, 2, 3])
    b = Vector.filled([np.float32(1), np.float32(2), np.float32(3)])
    with pytest.raises(KindMismatchError):
        a.add(b)


def test_add_dimension_mismatch() -> None:
    a = Vector.filled([1, 2])
    b = Vector.filled([1, 2, 3])
    with pytest.raises(DimensionMismatchError):
        a.add(b)
    with pytest.raises(DimensionMismatchError):
        a.equal(b)


def test_operator_sugar_returns_not_implemented_for_foreign_types() -> None:
    a = Vector.filled([1, 2])
    with pytest.raises(TypeError):
        a + 1  # noqa: B018


def test_add_wraps_at_int8_boundary() -> None:
    a = Vector.filled([np.int8(127), np.int8(-128)])
    b = Vector.filled([np.int8(1), np.int8(-1)])
    assert [int(c) for c in a.add(b)] == [-128, 127]


def test_sub_wraps_at_uint8_boundary() -> None:
    a = Vector.zero(2, ElementKind.UINT8)
    b = Vector.filled([np.uint8(1), np.uint8(255)])
    assert [int(c) for c in a.sub(b)] == [255, 1]


def test_dot() -> None:
    a = Vector.filled([1, 2, 3])
    b = Vector.filled([4, 5, 6])
    assert a.dot(b) == 32


def test_divide_by_one_is_identity() -> None:
    for v in (
        Vector.filled([7, -3, 0]),
        Vector.filled([np.uint16(9), np.uint16(4)]),
        Vector.filled([np.float32(0.1), np.float32(-3.5)]),
    ):
        assert v.divide_by_scalar(v.kind.one()).equal(v)


def test_divide_truncates_negative_ints() -> None:
    v = Vector.filled([-7, 7, -1])
    assert [int(c) for c in v.divide_by_scalar(2)] == [-3, 3, 0]


def test_divide_scalar_type_must_match() -> None:
    v = Vector.filled([1, 2])
    with pytest.raises(KindMismatchError):
        v.divide_by_scalar(2.0)
    with pytest.raises(KindMismatchError):
        v.divide_by_scalar(np.int8(2))


def test_integer_divide_by_zero() -> None:
    with pytest.raises(ZeroDivisionError):
        Vector.filled([1, 2]).divide_by_scalar(0)


def test_float_divide_by_zero() -> None:
    v = Vector.filled([1.0, -1.0, 0.0]).divide_by_scalar(0.0)
    assert v.get(0) == math.inf and v.get(1) == -math.inf and math.isnan(v.get(2))


def test_magnitude_all_kinds() -> None:
    assert Vector.filled([3, 4]).magnitude() == 5.0
    assert Vector.filled([np.int8(-3), np.int8(4)]).magnitude() == 5.0
    big = Vector.filled([np.uint8(255), np.uint8(255)])
    assert big.magnitude() == pytest.approx(255.0 * math.sqrt(2.0))
    assert isinstance(Vector.filled([1.0]).magnitude(), float)


@pytest.mark.parametrize("kind", [ElementKind.FLOAT32, ElementKind.FLOAT64])
def test_unit_has_magnitude_one(kind: ElementKind) -> None:
    v = Vector(np.array([3.0, -4.0, 12.0], dtype=kind.dtype), kind)
    u = v.unit()
    assert u.kind is kind
    assert abs(u.magnitude() - 1.0) < 1e-6
    np.testing.assert_allclose(u.as_array(), np.array([3.0, -4.0, 12.0]) / 13.0, rtol=1e-6)


def test_unit_on_integer_kind_is_unsupported() -> None:
    with pytest.raises(UnsupportedKindError):
        Vector.filled([3, 4]).unit()


def test_unit_of_zero_vector_is_nan() -> None:
    u = Vector.zero(2, ElementKind.FLOAT64).unit()
    assert all(math.isnan(c) for c in u)


def test_equal_is_exact() -> None:
    a = Vector.filled([0.1 + 0.2])
    assert not a.equal(Vector.filled([0.3]))
    assert a.equal(Vector.filled([0.1 + 0.2]))
    with pytest.raises(KindMismatchError):
        a.equal(Vector.filled([1]))


def test_random_vector_kind_and_dimension() -> None:
    v = Vector.random(16, ElementKind.INT16)
    assert v.kind is ElementKind.INT16 and v.dimension == 16
    w = Vector.random(16, "float32", rng=np.random.default_rng(1))
    assert w.as_array().dtype == np.float32


def test_str_formats_like_list() -> None:
    assert str(Vector.filled([1, 2, 3])) == "[1, 2, 3]"


def test_unit_when_magnitude_overflows_storage_is_silent() -> None:
    import warnings

    v = Vector(np.array([3e38, 3e38], dtype=np.float32), ElementKind.FLOAT32)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        u = v.unit()
    # |v| ≈ 4.24e38 は float32 で inf になるため各成分は 0
    assert u.kind is ElementKind.FLOAT32
    assert [float(c) for c in u] == [0.0, 0.0]


def test_cast_overflow_is_silent() -> None:
    import warnings

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert np.isinf(ElementKind.FLOAT32.cast(1e39))


@pytest.mark.skipif(np.dtype(np.intp) != np.dtype(np.int64), reason="INT と INT64 の格納型が同じ環境のみ")
def test_int_round_trip_through_elements_infers_sized_kind() -> None:
    v = Vector.filled([1, 2])
    assert isinstance(v.get(0), np.int64)
    w = Vector.filled(list(v))
    assert w.kind is ElementKind.INT64
    with pytest.raises(KindMismatchError):
        v.equal(w)
    # set は格納 dtype で照合するので INT64 の値も受け付ける
    v.set(0, np.int64(5))
    assert v.get(0) == 5
    # 種別を保って作り直す
    assert Vector(v.as_array(), v.kind).equal(v)
