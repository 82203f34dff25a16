"""Drawing detected circles and correction marks over an image."""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw

from .tally import VIEW_SIZE, Tally

RED = (255, 0, 0)
GREEN = (0, 255, 0)
YELLOW = (255, 255, 0)
PEN_WIDTH = 3
PLUS_RADIUS = 5

_CROSS_POINTS = (
    (-3, 0),
    (-7, 3),
    (-3, 7),
    (0, 3),
    (3, 7),
    (7, 3),
    (3, 0),
    (7, -3),
    (3, -7),
    (0, -3),
    (-3, -7),
    (-7, -3),
    (-3, 0),
)


def cross_polygon(x: float, y: float) -> list[tuple[float, float]]:
    """Closed outline of the cross used for a minus mark centred on (x, y)."""
    return [(x + px, y + py) for px, py in _CROSS_POINTS]


def render_overlay(
    image: np.ndarray | Image.Image, tally: Tally, size: float = VIEW_SIZE
) -> Image.Image:
    """Scale the image so its longer side is ``size`` and draw the tally on it.

    Detected circles are red, plus marks green, minus marks yellow crosses,
    and detected circles holding a minus mark are redrawn yellow.
    """
    if size <= 0:
        raise ValueError("size must be positive")
    if isinstance(image, Image.Image):
        base = image.convert("RGB")
    else:
        base = Image.fromarray(np.asarray(image, dtype=np.uint8)).convert("RGB")
    width, height = base.size
    longest = max(width, height)
    if longest == 0:
        raise ValueError("image is empty")
    scale = size / longest
    canvas = base.resize((max(1, round(width * scale)), max(1, round(height * scale))))
    draw = ImageDraw.Draw(canvas)
    pen = max(1, round(PEN_WIDTH * scale))

    def ring(cx: float, cy: float, radius: float, colour: tuple[int, int, int]) -> None:
        box = [(cx - radius) * scale, (cy - radius) * scale, (cx + radius) * scale, (cy + radius) * scale]
        draw.ellipse(box, outline=colour, width=pen)

    for circle in tally.detected:
        ring(circle.x, circle.y, circle.radius, RED)
    for point in tally.plus:
        ring(point.x, point.y, PLUS_RADIUS, GREEN)
    for point in tally.minus:
        outline = [(px * scale, py * scale) for px, py in cross_polygon(point.x, point.y)]
        draw.polygon(outline, outline=YELLOW, width=pen)
    for circle in tally.crossed_out():
        ring(circle.x, circle.y, circle.radius, YELLOW)
    return canvas