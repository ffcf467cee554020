import pytest

from meshscan.crack import CrackLayout, parse_distribution


def test_two_points_text():
    layout = CrackLayout.from_point_count(2)
    assert layout.length_text() == "0, 0.33, 0.66, 1"
    assert layout.width_text() == "0.5, 0.5, 0.5, 0.5"


@pytest.mark.parametrize("n", [0, 1, 3, 7])
def test_lengths_span_zero_to_one_increasing(n):
    layout = CrackLayout.from_point_count(n)
    assert len(layout.lengths) == n + 2
    assert len(layout.widths) == n + 2
    assert layout.lengths[0] == 0.0
    assert layout.lengths[-1] == 1.0
    assert all(a < b for a, b in zip(layout.lengths, layout.lengths[1:]))
    assert all(w == 0.5 for w in layout.widths)


def test_no_intermediate_points():
    layout = CrackLayout.from_point_count(0)
    assert layout.lengths == [0.0, 1.0]
    assert layout.length_text() == "0, 1"


def test_negative_count_raises():
    with pytest.raises(ValueError):
        CrackLayout.from_point_count(-1)


def test_width_text_round_trip():
    layout = CrackLayout.from_point_count(4)
    assert parse_distribution(layout.width_text()) == layout.widths


def test_length_text_round_trip_for_plain_layout():
    layout = CrackLayout(lengths=[0.0, 0.25, 1.0], widths=[0.5, 0.75, 0.5])
    assert parse_distribution(layout.length_text()) == layout.lengths


def test_parse_ignores_spaces():
    assert parse_distribution("0, 0.5 ,1") == [0.0, 0.5, 1.0]


def test_parse_bad_entries_are_zero():
    assert parse_distribution("abc,1") == [0.0, 1.0]
    assert parse_distribution("0,1,") == [0.0, 1.0, 0.0]
    assert parse_distribution("") == [0.0]


def test_polyline_uses_layout():
    layout = CrackLayout(lengths=[0.3, 0.5, 1.0], widths=[0.25, 0.75, 0.5])
    points = layout.polyline(1, w_max=200.0, l_max=100.0)
    assert points == [(0.0, 25.0), (100.0, 75.0), (200.0, 50.0)]


def test_polyline_default_extent():
    layout = CrackLayout.from_point_count(3)
    points = layout.polyline(3)
    assert len(points) == 5
    assert points[0][0] == 0.0
    assert points[-1][0] == 1800.0
    assert all(y == 500.0 for _, y in points)


def test_polyline_too_few_points_raises():
    layout = CrackLayout.from_point_count(1)
    with pytest.raises(ValueError):
        layout.polyline(5)