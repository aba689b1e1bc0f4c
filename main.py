from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from mafs_core.core import GestureDecoder, InputEvent
from mafs_view import (
    AspectPolicy,
    CanvasConfig,
    MathCanvas,
    ResolvedViewport,
    ViewBox,
    ZoomLimits,
    load_canvas_config,
    load_view_box,
)
from mafs_view.canvas import TapHandler

LOGGER = logging.getLogger("mafs")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mafs")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    resolve = sub.add_parser("resolve", help="Print the resolved viewport as JSON.")
    _add_viewport_args(resolve)

    to_math = sub.add_parser("to-math", help="Convert a screen pixel position to math coordinates.")
    _add_viewport_args(to_math)
    to_math.add_argument("px", type=float)
    to_math.add_argument("py", type=float)

    to_screen = sub.add_parser("to-screen", help="Convert a math point to screen pixels.")
    _add_viewport_args(to_screen)
    to_screen.add_argument("mx", type=float)
    to_screen.add_argument("my", type=float)

    panes = sub.add_parser("panes", help="Print the pane tiling of the resolved viewport.")
    _add_viewport_args(panes)

    replay = sub.add_parser("replay", help="Replay a JSONL file of pointer events and print the final viewport.")
    _add_viewport_args(replay)
    replay.add_argument("events", type=Path)
    replay.add_argument("--tap-slop", type=float, default=4.0)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    taps: list[list[float]] = []
    canvas = _build_canvas(args, on_tap=lambda point: taps.append(list(point)))

    if args.command == "resolve":
        _print_json(_viewport_payload(canvas.viewport))
        return 0

    if args.command == "to-math":
        point = canvas.screen_to_math((args.px, args.py))
        _print_json({"math": None if point is None else list(point)})
        return 0

    if args.command == "to-screen":
        point = canvas.math_to_screen((args.mx, args.my))
        _print_json({"screen": None if point is None else list(point)})
        return 0

    if args.command == "panes":
        layout = canvas.panes()
        _print_json(
            {
                "x_panes": [list(p) for p in layout.x_panes],
                "y_panes": [list(p) for p in layout.y_panes],
                "x_pane_range": list(layout.x_pane_range),
                "y_pane_range": list(layout.y_pane_range),
            }
        )
        return 0

    if args.command == "replay":
        decoder = GestureDecoder(canvas, tap_slop_px=args.tap_slop)
        for event in _read_events(args.events):
            decoder.handle(event)
        payload = _viewport_payload(canvas.viewport)
        payload["cumulative_zoom"] = canvas.camera.cumulative_zoom
        payload["taps"] = taps
        _print_json(payload)
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_viewport_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="TOML file with [canvas] and [view_box] tables.")
    parser.add_argument("--width", type=float, default=500.0)
    parser.add_argument("--height", type=float, default=500.0)
    parser.add_argument("--x", type=float, nargs=2, metavar=("MIN", "MAX"), default=None)
    parser.add_argument("--y", type=float, nargs=2, metavar=("MIN", "MAX"), default=None)
    parser.add_argument("--padding", type=float, default=None)
    parser.add_argument("--aspect", choices=[p.value for p in AspectPolicy], default=None)
    parser.add_argument("--zoom", type=float, nargs=2, metavar=("MIN", "MAX"), default=None)
    parser.add_argument("--no-pan", action="store_true")


def _build_canvas(args: argparse.Namespace, on_tap: TapHandler | None = None) -> MathCanvas:
    config = CanvasConfig()
    view_box = ViewBox()
    if args.config is not None:
        config = load_canvas_config(args.config)
        view_box = load_view_box(args.config) or view_box

    view_box = ViewBox(
        x=tuple(args.x) if args.x is not None else view_box.x,
        y=tuple(args.y) if args.y is not None else view_box.y,
        padding=args.padding if args.padding is not None else view_box.padding,
    )
    config = CanvasConfig(
        pan=config.pan and not args.no_pan,
        zoom=ZoomLimits(min=args.zoom[0], max=args.zoom[1]) if args.zoom is not None else config.zoom,
        aspect_policy=AspectPolicy.parse(args.aspect) if args.aspect is not None else config.aspect_policy,
        padding=config.padding if args.padding is None else None,
    )
    LOGGER.debug("canvas %sx%s view_box=%s config=%s", args.width, args.height, view_box, config)
    return MathCanvas(view_box, args.width, args.height, config, on_tap=on_tap)


def _read_events(path: Path) -> list[InputEvent]:
    if not path.exists():
        raise FileNotFoundError(f"event file not found: {path}")
    events: list[InputEvent] = []
    with path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            raw = json.loads(line)
            try:
                events.append(
                    InputEvent(
                        event_type=raw["event_type"],
                        timestamp=float(raw.get("timestamp", 0.0)),
                        x=float(raw["x"]),
                        y=float(raw["y"]),
                        pointer_id=int(raw.get("pointer_id", 0)),
                        delta_x=raw.get("delta_x"),
                        delta_y=raw.get("delta_y"),
                    )
                )
            except KeyError as exc:
                raise ValueError(f"{path}:{line_no}: event missing required field: {exc.args[0]}") from exc
    return events


def _viewport_payload(viewport: ResolvedViewport | None) -> dict[str, object]:
    if viewport is None:
        return {"viewport": None}
    m = viewport.math_to_pixel
    return {
        "viewport": {
            "x": [viewport.x_min, viewport.x_max],
            "y": [viewport.y_min, viewport.y_max],
            "pixel_size": [viewport.pixel_width, viewport.pixel_height],
            "math_to_pixel": [m.a, m.b, m.c, m.d, m.tx, m.ty],
            "base_span": [viewport.base_x_span, viewport.base_y_span],
            "pixel_offset": list(viewport.pixel_offset),
        }
    }


def _print_json(payload: dict[str, object]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


if __name__ == "__main__":
    raise SystemExit(main())
