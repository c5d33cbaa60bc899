from __future__ import annotations

from pathlib import Path

import pytest

from util.utils import config_section, load_config


@pytest.mark.integration
# What this tests
# - load_config merges configs/default.yaml (base) with root config.yaml (override, top-level only).
def test_load_config_merges_default_and_root(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "render:\n  frames: 3\ncamera:\n  focal_length: 10\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("render:\n  frames: 9\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg["render"] == {"frames": 9}
    assert cfg["camera"] == {"focal_length": 10}


@pytest.mark.integration
def test_load_config_is_fail_soft(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("render: [unclosed\n", encoding="utf-8")
    assert load_config(tmp_path) == {}
    assert config_section("render", tmp_path) == {}


@pytest.mark.integration
def test_repository_default_config_has_render_section() -> None:
    render = config_section("render")
    assert render.get("projection") in ("oblique", "orthographic", "perspective")
    assert len(render.get("box", [])) == 3


@pytest.mark.integration
# What this tests
# - 構成値の型が壊れていても defaults_from_config は既定値へ落ちる（CLI を落とさない）。
def test_render_defaults_survive_malformed_values(monkeypatch: pytest.MonkeyPatch) -> None:
    from engine import runner

    sections = {
        "render": {
            "frames": "abc",
            "oblique_angle_deg": "steep",
            "grid": "false",
            "box": "wide",
            "line_color": [300, 0, 0],
        },
        "camera": {"focal_length": float("nan"), "position": [1, 2]},
    }
    monkeypatch.setattr(runner, "config_section", lambda name, root=None: sections.get(name, {}))
    monkeypatch.delenv("WK_GRID", raising=False)
    base = runner.RenderOptions()
    opts = runner.defaults_from_config()
    assert opts.frames == base.frames
    assert opts.oblique_angle_deg == base.oblique_angle_deg
    assert opts.grid is False
    assert opts.box == base.box
    assert opts.line_color == base.line_color
    assert opts.focal_length == base.focal_length
    assert opts.camera_position == base.camera_position


@pytest.mark.integration
def test_render_defaults_accept_numeric_strings_and_yaml_bools(monkeypatch: pytest.MonkeyPatch) -> None:
    from engine import runner

    sections = {"render": {"frames": "4", "grid": True}, "camera": {"focal_length": "250"}}
    monkeypatch.setattr(runner, "config_section", lambda name, root=None: sections.get(name, {}))
    monkeypatch.delenv("WK_GRID", raising=False)
    opts = runner.defaults_from_config()
    assert opts.frames == 4
    assert opts.grid is True
    assert opts.focal_length == 250.0
