"""
どこで: `engine.runner`（CLI エントリ）。
何を: 回転する直方体を N フレーム分ラスタライズし、PNG として書き出す。
なぜ: ウィンドウ無しでコア（Vector/Matrix）から画素までの経路を一通り動かせるようにするため。

既定値の優先順（後勝ち）:
1) `configs/default.yaml` の `render:` / `camera:` 節（箱の寸法・色・配置）
2) 環境変数（`WK_CANVAS_WIDTH` など、`common.settings`）
3) コマンドライン引数

投影ごとの画面写像:
- oblique: 斜投影行列、raw 写像。箱は `render.position` に置く（既定は画面中央付近）。
- orthographic: 正投影行列、centered 写像。箱は原点。
- perspective: `Camera`、centered 写像。箱は原点。

使用例:
    wirekind --frames 90 --projection perspective --out data/frames/persp
    python main.py --frames 1 --no-save --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Sequence

from common.logging import setup_default_logging
from common.settings import get as get_settings
from engine.core.model import Box
from engine.core.transform_utils import oblique_projection, orthographic_projection, rotation_z, vec3
from engine.export.image import save_png
from engine.render.camera import Camera
from engine.render.canvas import Canvas
from engine.render.renderer import Projector, draw, matrix_projector
from engine.render.types import BLACK, WHITE, Color
from numkind.kinds import reseed
from util.utils import config_section

logger = logging.getLogger(__name__)

PROJECTIONS = ("oblique", "orthographic", "perspective")
_TWO_PI = 2.0 * math.pi


def _triple(value: Any, default: tuple[float, float, float]) -> tuple[float, float, float]:
    try:
        x, y, z = (float(v) for v in value)
    except (TypeError, ValueError):
        return default
    return x, y, z


def _int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        out = float(value)
    except (TypeError, ValueError):
        return default
    return out if math.isfinite(out) else default


def _bool(value: Any, default: bool) -> bool:
    # YAML の true/false のみ受け付ける（文字列 "false" は真にしない）
    return value if isinstance(value, bool) else default


def _color(value: Any, default: Color) -> Color:
    try:
        return Color.from_seq(value)
    except (TypeError, ValueError):
        return default


@dataclass
class RenderOptions:
    frames: int = 1
    width: int = 800
    height: int = 600
    step_deg: float = 2.0
    projection: str = "oblique"
    out_dir: Path | None = None
    save: bool = True
    oblique_angle_deg: float = 30.0
    box: tuple[float, float, float] = (100.0, 100.0, 100.0)
    position: tuple[float, float, float] = (400.0, 0.0, 300.0)
    background: Color = WHITE
    line_color: Color = BLACK
    grid: bool = False
    camera_position: tuple[float, float, float] = (0.0, -400.0, 150.0)
    camera_look_at: tuple[float, float, float] = (0.0, 0.0, 50.0)
    focal_length: float = 500.0

    @property
    def centered(self) -> bool:
        return self.projection != "oblique"


def defaults_from_config() -> RenderOptions:
    """YAML 構成と環境変数から既定の `RenderOptions` を作る（フェイルソフト）。"""
    render = config_section("render")
    camera = config_section("camera")
    s = get_settings()
    base = RenderOptions()

    projection = str(render.get("projection", base.projection))
    grid = _bool(render.get("grid"), base.grid)
    if s.GRID is not None:
        grid = s.GRID
    return RenderOptions(
        frames=_int(render.get("frames"), base.frames),
        width=s.CANVAS_WIDTH,
        height=s.CANVAS_HEIGHT,
        step_deg=s.FRAME_STEP_DEG,
        projection=projection if projection in PROJECTIONS else base.projection,
        out_dir=Path(s.OUTPUT_DIR) if s.OUTPUT_DIR else None,
        oblique_angle_deg=_float(render.get("oblique_angle_deg"), base.oblique_angle_deg),
        box=_triple(render.get("box"), base.box),
        position=_triple(render.get("position"), base.position),
        background=_color(render.get("background"), base.background),
        line_color=_color(render.get("line_color"), base.line_color),
        grid=grid,
        camera_position=_triple(camera.get("position"), base.camera_position),
        camera_look_at=_triple(camera.get("look_at"), base.camera_look_at),
        focal_length=_float(camera.get("focal_length"), base.focal_length),
    )


def build_parser(defaults: RenderOptions) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wirekind", description="Render frames of a rotating wireframe box to PNG."
    )
    parser.add_argument("--frames", type=int, default=defaults.frames, help="Number of frames")
    parser.add_argument("--width", type=int, default=defaults.width, help="Canvas width [px]")
    parser.add_argument("--height", type=int, default=defaults.height, help="Canvas height [px]")
    parser.add_argument(
        "--step-deg", type=float, default=defaults.step_deg, help="Rotation per frame [deg]"
    )
    parser.add_argument("--projection", choices=PROJECTIONS, default=defaults.projection)
    parser.add_argument("--out", type=Path, default=defaults.out_dir, help="Output directory")
    parser.add_argument("--no-save", action="store_true", help="Rasterize only; do not write PNGs")
    parser.add_argument("--grid", action="store_true", default=defaults.grid, help="Draw axes")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WK_LOG_LEVEL)")
    return parser


def parse_options(argv: Sequence[str] | None = None) -> tuple[RenderOptions, str]:
    """引数を解釈して `(options, log_level)` を返す。不正値は argparse の終了コード 2。"""
    defaults = defaults_from_config()
    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    if args.frames < 1:
        parser.error(f"--frames must be >= 1: {args.frames}")
    if args.width < 1 or args.height < 1:
        parser.error(f"canvas size must be positive: {args.width}x{args.height}")
    if not math.isfinite(args.step_deg):
        parser.error(f"--step-deg must be finite: {args.step_deg}")

    defaults.frames = args.frames
    defaults.width = args.width
    defaults.height = args.height
    defaults.step_deg = args.step_deg
    defaults.projection = args.projection
    defaults.out_dir = args.out
    defaults.save = not args.no_save
    defaults.grid = bool(args.grid)
    level = args.log_level or get_settings().LOG_LEVEL
    return defaults, level


def make_projector(opts: RenderOptions) -> Projector:
    if opts.projection == "oblique":
        return matrix_projector(oblique_projection(opts.oblique_angle_deg))
    if opts.projection == "orthographic":
        return matrix_projector(orthographic_projection())
    camera = Camera(
        vec3(*opts.camera_position), vec3(*opts.camera_look_at), opts.focal_length
    )
    return camera.project


def render_frames(opts: RenderOptions) -> Iterator[tuple[int, Canvas]]:
    """各フレームを描画して `(index, canvas)` を返す。キャンバスはフレーム間で再利用する。"""
    box = Box(*opts.box)
    if opts.projection == "oblique":
        box.set_position(vec3(*opts.position))
    project = make_projector(opts)
    canvas = Canvas(opts.width, opts.height)
    step = math.radians(opts.step_deg)

    angle = 0.0
    for i in range(opts.frames):
        box.set_rotation(rotation_z(angle))
        draw(
            box.meshes(),
            project,
            canvas,
            color=opts.line_color,
            background=opts.background,
            grid=opts.grid,
            centered=opts.centered,
        )
        yield i, canvas
        angle += step
        if angle > _TWO_PI:
            angle -= _TWO_PI


def run(opts: RenderOptions) -> list[Path]:
    """全フレームを描画し、保存したパスを返す（`save=False` なら空）。"""
    saved: list[Path] = []
    for i, canvas in render_frames(opts):
        drawn = canvas.count(opts.line_color)
        logger.info("frame %d/%d: %d line pixels", i + 1, opts.frames, drawn)
        if opts.save:
            saved.append(save_png(canvas, directory=opts.out_dir, index=i))
    return saved


def main(argv: Sequence[str] | None = None) -> int:
    opts, level = parse_options(argv)
    setup_default_logging(level)
    seed = get_settings().RANDOM_SEED
    if seed is not None:
        reseed(seed)
    logger.info(
        "rendering %d frame(s) %dx%d projection=%s",
        opts.frames,
        opts.width,
        opts.height,
        opts.projection,
    )
    try:
        run(opts)
    except RuntimeError as e:
        logger.error("%s", e)
        return 1
    return 0


__all__ = [
    "RenderOptions",
    "PROJECTIONS",
    "defaults_from_config",
    "build_parser",
    "parse_options",
    "make_projector",
    "render_frames",
    "run",
    "main",
]


if __name__ == "__main__":
    raise SystemExit(main())
