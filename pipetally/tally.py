"""Counting state: detected circles plus manual corrections."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

#: Side length, in pixels, of the square view the overlay is drawn into.
VIEW_SIZE = 421.0


@dataclass(frozen=True)
class Circle:
    """A detected circle in image coordinates."""

    x: float
    y: float
    radius: float

    def contains(self, point: Point) -> bool:
        """Return True if the point lies inside or on the circle."""
        dx = point.x - self.x
        dy = point.y - self.y
        return dx * dx + dy * dy <= self.radius * self.radius


@dataclass(frozen=True)
class Point:
    """A correction mark in image coordinates."""

    x: float
    y: float


class MarkKind(enum.Enum):
    """Which way a correction mark changes the count."""

    PLUS = 1
    MINUS = -1


class DuplicateMarkError(ValueError):
    """Raised when a mark of the same kind already sits at that position."""


def display_scale(adjust: float) -> float:
    """Return the factor that maps an image whose longer side is ``adjust`` onto the view."""
    if adjust <= 0:
        raise ValueError(f"image size must be positive, got {adjust!r}")
    return VIEW_SIZE / adjust


class Tally:
    """Detected circles together with the user's added and removed marks.

    The detected count is recorded when circles are set; :meth:`clear` drops
    the circles and marks but leaves that count until the next detection.
    """

    def __init__(self) -> None:
        self.detected: list[Circle] = []
        self.plus: list[Point] = []
        self.minus: list[Point] = []
        self._history: list[MarkKind] = []
        self._detected_count = 0

    def set_detected(self, circles: Iterable[Circle | tuple[float, float, float]]) -> None:
        """Replace the detected circles."""
        self.detected = [c if isinstance(c, Circle) else Circle(*c) for c in circles]
        self._detected_count = len(self.detected)

    def _add(self, kind: MarkKind, marks: list[Point], x: float, y: float) -> Point:
        point = Point(x, y)
        if point in marks:
            raise DuplicateMarkError(f"a {kind.name.lower()} mark already exists at ({x}, {y})")
        marks.append(point)
        self._history.append(kind)
        return point

    def add_plus(self, x: float, y: float) -> Point:
        """Mark a pipe the detector missed."""
        return self._add(MarkKind.PLUS, self.plus, x, y)

    def add_minus(self, x: float, y: float) -> Point:
        """Mark a detection that is not a pipe."""
        return self._add(MarkKind.MINUS, self.minus, x, y)

    def undo(self) -> MarkKind | None:
        """Remove the most recent mark and return its kind, or None if there is none."""
        if not self._history:
            return None
        kind = self._history.pop()
        (self.plus if kind is MarkKind.PLUS else self.minus).pop()
        return kind

    def clear(self) -> None:
        """Drop all marks and detected circles."""
        self.plus.clear()
        self.minus.clear()
        self.detected.clear()
        self._history.clear()

    def plus_count(self) -> int:
        return len(self.plus)

    def minus_count(self) -> int:
        return len(self.minus)

    def detected_count(self) -> int:
        return self._detected_count

    def total(self) -> int:
        """Detected count corrected by the marks."""
        return self._detected_count + self.plus_count() - self.minus_count()

    def crossed_out(self) -> list[Circle]:
        """Detected circles that contain at least one minus mark, in detection order."""
        return [c for c in self.detected if any(c.contains(p) for p in self.minus)]