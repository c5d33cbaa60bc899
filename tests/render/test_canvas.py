from __future__ import annotations

import numpy as np
import pytest

from engine.render.canvas import Canvas
from engine.render.types import BLACK, RED, TRANSPARENT, WHITE, Color


def test_canvas_is_zeroed_rgba_buffer() -> None:
    c = Canvas(8, 4)
    px = c.pixels()
    assert px.shape == (4, 8, 4) and px.dtype == np.uint8
    assert not px.any()
    assert c.count(TRANSPARENT) == 32


def test_canvas_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        Canvas(0, 10)


def test_set_get_and_out_of_bounds_ignored() -> None:
    c = Canvas(4, 3)
    assert c.set(3, 2, RED) is True
    assert c.get(3, 2) == RED
    assert c.set(4, 0, RED) is False
    assert c.set(-1, 0, RED) is False
    assert c.set(0, 3, RED) is False
    assert c.count(RED) == 1
    with pytest.raises(IndexError):
        c.get(4, 0)


def test_clear_fills_color_and_pixels_view_is_read_only() -> None:
    c = Canvas(2, 2)
    c.clear(WHITE)
    assert c.count(WHITE) == 4
    with pytest.raises(ValueError):
        c.pixels()[0, 0, 0] = 1
    cp = c.pixels(copy=True)
    cp[...] = 0
    assert c.count(WHITE) == 4
    c.clear()
    assert c.count(BLACK) == 0 and c.count(TRANSPARENT) == 4


def test_color_validation() -> None:
    assert Color.from_seq([1, 2, 3]).as_tuple() == (1, 2, 3, 255)
    assert Color.from_seq((1, 2, 3, 4)).a == 4
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    with pytest.raises(ValueError):
        Color(True, 0, 0)
    with pytest.raises(ValueError):
        Color.from_seq([1, 2])
