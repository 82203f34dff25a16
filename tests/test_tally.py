import pytest

from pipetally.tally import (
    VIEW_SIZE,
    Circle,
    DuplicateMarkError,
    MarkKind,
    Point,
    Tally,
    display_scale,
)


def test_display_scale_full_size_is_identity():
    assert display_scale(VIEW_SIZE) == 1.0


def test_display_scale_halves_for_double_size():
    assert display_scale(VIEW_SIZE * 2) == pytest.approx(0.5)


@pytest.mark.parametrize("bad", [0, -5])
def test_display_scale_rejects_non_positive(bad):
    with pytest.raises(ValueError):
        display_scale(bad)


def test_add_plus_records_point_and_count():
    tally = Tally()
    point = tally.add_plus(1.5, 2.5)
    assert point == Point(1.5, 2.5)
    assert tally.plus == [Point(1.5, 2.5)]
    assert tally.plus_count() == 1


def test_duplicate_plus_is_rejected():
    tally = Tally()
    tally.add_plus(3, 4)
    with pytest.raises(DuplicateMarkError):
        tally.add_plus(3, 4)
    assert tally.plus_count() == 1


def test_duplicate_minus_is_rejected():
    tally = Tally()
    tally.add_minus(3, 4)
    with pytest.raises(DuplicateMarkError):
        tally.add_minus(3, 4)
    assert tally.minus_count() == 1


def test_plus_and_minus_at_same_place_are_independent():
    tally = Tally()
    tally.add_plus(3, 4)
    tally.add_minus(3, 4)
    assert (tally.plus_count(), tally.minus_count()) == (1, 1)


def test_undo_reverses_in_order():
    tally = Tally()
    tally.add_plus(1, 1)
    tally.add_minus(2, 2)
    assert tally.undo() is MarkKind.MINUS
    assert tally.minus == []
    assert tally.plus == [Point(1, 1)]
    assert tally.undo() is MarkKind.PLUS
    assert tally.plus == []


def test_undo_on_empty_returns_none():
    assert Tally().undo() is None


def test_total_combines_detection_and_marks():
    tally = Tally()
    tally.set_detected([(0, 0, 5), (10, 10, 5), (20, 20, 5)])
    tally.add_plus(50, 50)
    tally.add_plus(60, 60)
    tally.add_minus(0, 0)
    assert tally.total() == 4


def test_set_detected_accepts_tuples_and_circles():
    tally = Tally()
    tally.set_detected([(1, 2, 3), Circle(4, 5, 6)])
    assert tally.detected == [Circle(1, 2, 3), Circle(4, 5, 6)]
    assert tally.detected_count() == len(tally.detected)


def test_crossed_out_includes_boundary():
    tally = Tally()
    tally.set_detected([Circle(0, 0, 5), Circle(20, 20, 3)])
    tally.add_minus(3, 4)
    assert tally.crossed_out() == [Circle(0, 0, 5)]


def test_crossed_out_ignores_points_outside():
    tally = Tally()
    tally.set_detected([Circle(0, 0, 5)])
    tally.add_minus(4, 4)
    assert tally.crossed_out() == []


def test_clear_drops_marks_but_keeps_detected_count():
    tally = Tally()
    tally.set_detected([(0, 0, 5), (10, 10, 5)])
    tally.add_plus(1, 1)
    tally.add_minus(0, 0)
    tally.clear()
    assert tally.plus_count() == 0
    assert tally.minus_count() == 0
    assert tally.detected == []
    assert tally.undo() is None
    assert tally.detected_count() == 2