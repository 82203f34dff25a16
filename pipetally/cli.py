"""Command line: count pipe ends in an image and report the corrected total."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PIL import Image

from .detection import HoughParams, TooManyCirclesError, detect_circles, edge_map, load_image
from .overlay import render_overlay
from .tally import DuplicateMarkError, Tally


def _point(text: str) -> tuple[float, float]:
    try:
        x, y = (float(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {text!r}") from None
    return x, y


def _build_parser() -> argparse.ArgumentParser:
    defaults = HoughParams()
    parser = argparse.ArgumentParser(
        prog="pipetally", description="Count pipe ends in an image by circle detection."
    )
    parser.add_argument("image", help="image file to analyse")
    parser.add_argument("--center-dist", type=float, default=defaults.center_dist)
    parser.add_argument("--canny", type=float, default=defaults.canny)
    parser.add_argument("--roundness", type=float, default=defaults.roundness)
    parser.add_argument("--min-radius", type=int, default=defaults.min_radius)
    parser.add_argument("--max-radius", type=int, default=defaults.max_radius)
    parser.add_argument("--plus", type=_point, action="append", default=[], metavar="X,Y",
                        help="add a missed pipe at image coordinates")
    parser.add_argument("--minus", type=_point, action="append", default=[], metavar="X,Y",
                        help="remove a false detection at image coordinates")
    parser.add_argument("--edges", metavar="PATH", help="write the edge map here")
    parser.add_argument("--overlay", metavar="PATH", help="write the annotated view here as JPEG")
    parser.add_argument("--force", action="store_true", help="overwrite existing output files")
    return parser


def _error(message: object) -> None:
    print(f"pipetally: {message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        params = HoughParams(
            center_dist=args.center_dist,
            canny=args.canny,
            roundness=args.roundness,
            min_radius=args.min_radius,
            max_radius=args.max_radius,
        )
    except ValueError as exc:
        _error(exc)
        return 2

    for output in (args.edges, args.overlay):
        if output and Path(output).is_file() and not args.force:
            _error(f"{output} already exists; use --force to overwrite")
            return 1

    try:
        image = load_image(args.image)
    except (OSError, ValueError) as exc:
        _error(exc)
        return 1

    tally = Tally()
    try:
        tally.set_detected(detect_circles(image, params))
    except TooManyCirclesError as exc:
        _error(exc)
        tally.set_detected([])

    for add, points in ((tally.add_plus, args.plus), (tally.add_minus, args.minus)):
        for x, y in points:
            try:
                add(x, y)
            except DuplicateMarkError as exc:
                _error(exc)

    try:
        if args.edges:
            Image.fromarray(edge_map(image, params.canny)).save(args.edges)
        if args.overlay:
            render_overlay(image, tally).save(args.overlay, format="JPEG")
    except (OSError, ValueError) as exc:
        _error(exc)
        return 1

    print(f"detected: {tally.detected_count()}")
    print(f"plus: +{tally.plus_count()}")
    print(f"minus: -{tally.minus_count()}")
    print(f"total: {tally.total()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())