"""Edge maps and gradient Hough circle detection on RGB images."""

from __future__ import annotations

import os
from dataclasses import dataclass

import numpy as np
from PIL import Image, UnidentifiedImageError
from scipy import ndimage

from .tally import Circle

#: Detections beyond this many are treated as a failed parameter choice.
MAX_CIRCLES = 1000

_SMOOTH_3 = np.array([0.25, 0.5, 0.25])
_CROSS = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)
_GRAY_WEIGHTS = np.array([0.299, 0.587, 0.114])


@dataclass(frozen=True)
class HoughParams:
    """Tuning of the circle detector.

    ``canny`` is the upper edge threshold (the lower one is half of it),
    ``roundness`` the number of accumulator votes a centre needs and
    ``center_dist`` the smallest allowed distance between two centres.
    """

    center_dist: float = 10
    canny: float = 100
    roundness: float = 30
    min_radius: int = 15
    max_radius: int = 50

    def __post_init__(self) -> None:
        if self.center_dist <= 0:
            raise ValueError("center_dist must be positive")
        if self.canny <= 0:
            raise ValueError("canny must be positive")
        if self.roundness <= 0:
            raise ValueError("roundness must be positive")
        if self.min_radius < 0:
            raise ValueError("min_radius must not be negative")
        if self.max_radius < max(self.min_radius, 1):
            raise ValueError("max_radius must be at least min_radius and positive")


class TooManyCirclesError(RuntimeError):
    """Raised when the detector finds more circles than is plausible."""

    def __init__(self, limit: int = MAX_CIRCLES) -> None:
        super().__init__(f"more than {limit} circles detected; consider adjusting the parameters")
        self.limit = limit


def load_image(path: str | os.PathLike[str]) -> np.ndarray:
    """Read an image file as an RGB ``uint8`` array of shape (height, width, 3)."""
    try:
        with Image.open(path) as img:
            rgb = img.convert("RGB")
    except UnidentifiedImageError as exc:
        raise ValueError(f"not a readable image: {os.fspath(path)}") from exc
    return np.array(rgb, dtype=np.uint8)


def to_gray(image: np.ndarray) -> np.ndarray:
    """Convert an RGB(A) or grey image to an 8-bit grey image."""
    arr = np.asarray(image)
    if arr.ndim == 2:
        return arr.astype(np.uint8, copy=True)
    if arr.ndim == 3 and arr.shape[2] in (3, 4):
        gray = arr[..., :3].astype(np.float64) @ _GRAY_WEIGHTS
        return np.clip(np.rint(gray), 0, 255).astype(np.uint8)
    raise ValueError(f"unsupported image shape {arr.shape}")


def _blur3(arr: np.ndarray) -> np.ndarray:
    out = arr.astype(np.float64)
    for axis in (0, 1):
        out = ndimage.correlate1d(out, _SMOOTH_3, axis=axis, mode="mirror")
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)


def _median3(arr: np.ndarray) -> np.ndarray:
    size = (3, 3) if arr.ndim == 2 else (3, 3, 1)
    return ndimage.median_filter(arr, size=size, mode="nearest")


def _gradients(gray: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    data = gray.astype(np.float64)
    gx = ndimage.sobel(data, axis=1, mode="mirror")
    gy = ndimage.sobel(data, axis=0, mode="mirror")
    return gx, gy


def _suppress(mag: np.ndarray, gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """Keep only magnitudes that peak across the gradient direction."""
    h, w = mag.shape
    padded = np.pad(mag, 1)

    def shifted(dy: int, dx: int) -> np.ndarray:
        return padded[1 + dy : 1 + dy + h, 1 + dx : 1 + dx + w]

    angle = np.rad2deg(np.arctan2(gy, gx)) % 180.0
    sectors = (
        ((angle < 22.5) | (angle >= 157.5), (0, 1)),
        ((angle >= 67.5) & (angle < 112.5), (1, 0)),
        ((angle >= 22.5) & (angle < 67.5), (1, 1)),
        ((angle >= 112.5) & (angle < 157.5), (1, -1)),
    )
    keep = np.zeros(mag.shape, dtype=bool)
    for mask, (dy, dx) in sectors:
        keep |= mask & (mag > shifted(-dy, -dx)) & (mag >= shifted(dy, dx))
    return np.where(keep, mag, 0.0)


def _canny(gray: np.ndarray, low: float, high: float) -> np.ndarray:
    gx, gy = _gradients(gray)
    thin = _suppress(np.abs(gx) + np.abs(gy), gx, gy)
    weak = thin > low
    labels, count = ndimage.label(weak, structure=np.ones((3, 3), dtype=bool))
    if count == 0:
        return np.zeros(gray.shape, dtype=bool)
    keep = np.zeros(count + 1, dtype=bool)
    keep[np.unique(labels[thin > high])] = True
    keep[0] = False
    return keep[labels]


def edge_map(image: np.ndarray, canny: float) -> np.ndarray:
    """Blurred, thresholded and dilated edges as a 0/255 ``uint8`` grey image."""
    if canny < 0:
        raise ValueError("canny must not be negative")
    gray = to_gray(_blur3(np.asarray(image)))
    edges = _canny(gray, canny // 2, canny)
    dilated = ndimage.binary_dilation(edges, structure=_CROSS)
    return np.where(dilated, 255, 0).astype(np.uint8)


def _estimate_radius(
    ex: np.ndarray, ey: np.ndarray, x: float, y: float, lo: int, hi: int
) -> float | None:
    dist = np.hypot(ex - x, ey - y)
    dist = dist[(dist >= lo) & (dist <= hi)]
    if dist.size == 0:
        return None
    bins = np.rint(dist).astype(np.int64)
    counts = np.bincount(bins)
    best = int(np.argmax(counts[lo:])) + lo
    return float(dist[bins == best].mean())


def _hough(gray: np.ndarray, params: HoughParams) -> list[Circle]:
    h, w = gray.shape
    edges = _canny(gray, params.canny / 2, params.canny)
    edge_y, edge_x = np.nonzero(edges)
    if edge_x.size == 0:
        return []
    gx, gy = _gradients(gray)
    dx = gx[edge_y, edge_x]
    dy = gy[edge_y, edge_x]
    norm = np.hypot(dx, dy)
    valid = norm > 0
    xs = edge_x[valid].astype(np.float64)
    ys = edge_y[valid].astype(np.float64)
    ux = dx[valid] / norm[valid]
    uy = dy[valid] / norm[valid]

    lo = max(params.min_radius, 1)
    radii = np.arange(lo, params.max_radius + 1, dtype=np.float64)
    acc = np.zeros(h * w, dtype=np.int64)
    for sign in (1.0, -1.0):
        cx = np.rint(xs[:, None] + sign * radii[None, :] * ux[:, None]).astype(np.int64)
        cy = np.rint(ys[:, None] + sign * radii[None, :] * uy[:, None]).astype(np.int64)
        inside = (cx >= 0) & (cx < w) & (cy >= 0) & (cy < h)
        acc += np.bincount(cy[inside] * w + cx[inside], minlength=h * w)
    acc = acc.reshape(h, w)

    padded = np.pad(acc, 1)

    def neighbour(oy: int, ox: int) -> np.ndarray:
        return padded[1 + oy : 1 + oy + h, 1 + ox : 1 + ox + w]

    peaks = (
        (acc > params.roundness)
        & (acc > neighbour(0, -1))
        & (acc >= neighbour(0, 1))
        & (acc > neighbour(-1, 0))
        & (acc >= neighbour(1, 0))
    )
    py, px = np.nonzero(peaks)
    votes = acc[py, px]
    order = np.lexsort((px, py, -votes))

    ex = edge_x.astype(np.float64)
    ey = edge_y.astype(np.float64)
    centers = np.empty((MAX_CIRCLES + 1, 2))
    circles: list[Circle] = []
    min_d2 = float(params.center_dist) ** 2
    for index in order:
        x, y = float(px[index]), float(py[index])
        taken = centers[: len(circles)]
        if taken.size and np.min((taken[:, 0] - x) ** 2 + (taken[:, 1] - y) ** 2) < min_d2:
            continue
        radius = _estimate_radius(ex, ey, x, y, lo, params.max_radius)
        if radius is None:
            continue
        centers[len(circles)] = (x, y)
        circles.append(Circle(x, y, radius))
        if len(circles) > MAX_CIRCLES:
            raise TooManyCirclesError()
    return circles


def detect_circles(image: np.ndarray, params: HoughParams | None = None) -> list[Circle]:
    """Find circles in an image, strongest first.

    Raises :class:`TooManyCirclesError` when more than ``MAX_CIRCLES`` are found.
    """
    params = params or HoughParams()
    gray = to_gray(_median3(np.asarray(image)))
    return _hough(gray, params)