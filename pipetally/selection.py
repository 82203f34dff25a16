"""Rubber-band selection of a rectangular screen region."""

from __future__ import annotations

from dataclasses import dataclass


def _half(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    return -((-value) // 2) if value < 0 else value // 2


@dataclass(frozen=True)
class Rect:
    """A rectangle given by inclusive corner coordinates."""

    left: int
    top: int
    right: int
    bottom: int

    def width(self) -> int:
        return self.right - self.left + 1

    def height(self) -> int:
        return self.bottom - self.top + 1

    def center(self) -> tuple[int, int]:
        return _half(self.left + self.right), _half(self.top + self.bottom)


class RegionSelector:
    """Tracks a press-drag-release gesture and yields the selected region.

    A region is accepted only when the release point lies more than
    ``min_size`` pixels right of and below the press point. The accepted
    corners are multiplied by ``factor`` to map view pixels to screen pixels.
    """

    def __init__(self, min_size: int = 16, factor: int = 2) -> None:
        self.min_size = min_size
        self.factor = factor
        self.dragging = False
        self.start = (0, 0)
        self.position = (0, 0)
        self.region: Rect | None = None

    def press(self, x: int, y: int) -> None:
        self.dragging = True
        self.start = (x, y)

    def move(self, x: int, y: int) -> None:
        self.position = (x, y)

    def release(self, x: int, y: int) -> Rect | None:
        """Finish the drag; return the accepted region or None if it is too small."""
        self.dragging = False
        sx, sy = self.start
        if x > sx + self.min_size and y > sy + self.min_size:
            f = self.factor
            self.region = Rect(sx * f, sy * f, x * f, y * f)
            return self.region
        return None

    def label(self) -> str | None:
        """Size text for the rectangle being dragged, or None when not dragging."""
        if not self.dragging:
            return None
        rect = Rect(*self.start, *self.position)
        return f"{rect.width()}x{rect.height()}"