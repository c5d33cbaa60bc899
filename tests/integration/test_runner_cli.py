from __future__ import annotations

from pathlib import Path

import pytest

from engine import runner
from engine.render.types import BLACK

# What this tests
# - CLI の引数解釈（終了コード 2）、投影ごとのフレーム描画、PNG 連番出力。


@pytest.mark.integration
def test_main_writes_numbered_frames(tmp_path: Path) -> None:
    out = tmp_path / "frames"
    code = runner.main(["--frames", "3", "--width", "160", "--height", "120", "--out", str(out)])
    assert code == 0
    names = sorted(p.name for p in out.glob("*.png"))
    assert names == ["frame_0000.png", "frame_0001.png", "frame_0002.png"]


@pytest.mark.integration
def test_main_no_save_writes_nothing(tmp_path: Path) -> None:
    out = tmp_path / "none"
    code = runner.main(["--frames", "2", "--no-save", "--out", str(out), "--log-level", "WARNING"])
    assert code == 0
    assert not out.exists() or not any(out.iterdir())


@pytest.mark.parametrize(
    "argv",
    [
        ["--frames", "0"],
        ["--width", "-5"],
        ["--projection", "fisheye"],
        ["--frames", "many"],
    ],
)
def test_invalid_arguments_exit_with_2(argv) -> None:
    with pytest.raises(SystemExit) as exc:
        runner.main(argv)
    assert exc.value.code == 2


@pytest.mark.parametrize("projection", list(runner.PROJECTIONS))
def test_render_frames_draws_box_for_each_projection(projection: str) -> None:
    opts, _ = runner.parse_options(["--frames", "2", "--projection", projection, "--no-save"])
    frames = []
    for i, canvas in runner.render_frames(opts):
        frames.append((i, canvas.count(opts.line_color), canvas.pixels(copy=True)))
    assert [i for i, _, _ in frames] == [0, 1]
    assert all(n > 50 for _, n, _ in frames)
    # 回転しているので 2 フレームは異なる
    assert (frames[0][2] != frames[1][2]).any()


def test_cli_overrides_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    from common import settings

    monkeypatch.setenv("WK_CANVAS_WIDTH", "320")
    monkeypatch.setenv("WK_FRAME_STEP_DEG", "10")
    settings.reload_from_env()
    try:
        opts, level = runner.parse_options(["--height", "100", "--log-level", "DEBUG"])
    finally:
        monkeypatch.delenv("WK_CANVAS_WIDTH")
        monkeypatch.delenv("WK_FRAME_STEP_DEG")
        settings.reload_from_env()
    assert opts.width == 320
    assert opts.height == 100
    assert opts.step_deg == 10.0
    assert level == "DEBUG"
    assert opts.save is True


def test_defaults_come_from_config() -> None:
    opts = runner.defaults_from_config()
    assert opts.line_color == BLACK
    assert opts.box == (100.0, 100.0, 100.0)
    assert opts.projection == "oblique"


def test_grid_env_overrides_config(monkeypatch: pytest.MonkeyPatch) -> None:
    from common import settings

    monkeypatch.setattr(runner, "config_section", lambda name, root=None: {"grid": True} if name == "render" else {})
    monkeypatch.setenv("WK_GRID", "off")
    settings.reload_from_env()
    try:
        assert runner.defaults_from_config().grid is False
    finally:
        monkeypatch.delenv("WK_GRID")
        settings.reload_from_env()
    assert runner.defaults_from_config().grid is True


def test_main_seeds_shared_rng_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    import numpy as np

    from common import settings
    from numkind import ElementKind
    from numkind import kinds as nk

    monkeypatch.setattr(settings.get(), "RANDOM_SEED", 7)
    assert runner.main(["--frames", "1", "--no-save", "--width", "40", "--height", "30"]) == 0
    got = nk.random_cells(ElementKind.INT32, 8)
    nk.reseed(7)
    np.testing.assert_array_equal(got, nk.random_cells(ElementKind.INT32, 8))
