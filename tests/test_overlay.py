import numpy as np
import pytest
from PIL import Image

from pipetally.overlay import GREEN, RED, YELLOW, cross_polygon, render_overlay
from pipetally.tally import Tally


def _black(width, height):
    return np.zeros((height, width, 3), dtype=np.uint8)


def test_cross_polygon_is_closed_with_thirteen_points():
    points = cross_polygon(0, 0)
    assert len(points) == 13
    assert points[0] == points[-1] == (-3, 0)


def test_cross_polygon_is_translated():
    base = cross_polygon(0, 0)
    moved = cross_polygon(10, -4)
    assert moved == [(x + 10, y - 4) for x, y in base]


def test_render_overlay_view_size():
    out = render_overlay(_black(842, 842), Tally())
    assert out.size == (421, 421)


def test_render_overlay_keeps_aspect():
    out = render_overlay(_black(200, 100), Tally(), size=100)
    assert out.size == (100, 50)


def test_render_overlay_rejects_bad_size():
    with pytest.raises(ValueError):
        render_overlay(_black(10, 10), Tally(), size=0)


def test_render_overlay_draws_detected_and_plus():
    tally = Tally()
    tally.set_detected([(50, 50, 20)])
    tally.add_plus(20, 20)
    out = render_overlay(_black(100, 100), tally, size=100)
    assert out.getpixel((69, 50)) == RED
    assert out.getpixel((16, 20)) == GREEN
    assert out.getpixel((50, 50)) == (0, 0, 0)


def test_render_overlay_crossed_out_circle_turns_yellow():
    tally = Tally()
    tally.set_detected([(50, 50, 20)])
    tally.add_minus(50, 50)
    out = render_overlay(_black(100, 100), tally, size=100)
    assert out.getpixel((69, 50)) == YELLOW
    colours = set(out.getdata())
    assert RED not in colours


def test_render_overlay_accepts_pil_image_and_leaves_it_alone():
    source = Image.new("RGB", (50, 50), (0, 0, 0))
    tally = Tally()
    tally.add_minus(25, 25)
    out = render_overlay(source, tally, size=50)
    assert YELLOW in set(out.getdata())
    assert set(source.getdata()) == {(0, 0, 0)}