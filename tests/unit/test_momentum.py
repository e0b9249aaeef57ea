from interview_timeline.analysis.momentum import build_momentum_points, normalize_score


def test_normalize_score():
    assert normalize_score(1) == 0
    assert normalize_score(3) == 50
    assert normalize_score(5) == 100


def test_three_point_moving_average(segment_factory):
    segments = [segment_factory(i, avg) for i, avg in enumerate([5.0, 1.0, 3.0])]
    points = build_momentum_points(segments)
    assert [p.value for p in points] == [50.0, 50.0, 25.0]
    assert [p.segment_index for p in points] == [0, 1, 2]
    assert [p.event_turn_index for p in points] == [1, 3, 5]


def test_single_segment_uses_own_score(segment_factory):
    assert [p.value for p in build_momentum_points([segment_factory(0, 4.0)])] == [75.0]


def test_values_have_one_decimal(segment_factory):
    segments = [segment_factory(i, avg) for i, avg in enumerate([4.1, 2.3, 3.7, 1.9])]
    for point in build_momentum_points(segments):
        assert 0.0 <= point.value <= 100.0
        assert round(point.value, 1) == point.value


def test_no_segments():
    assert build_momentum_points([]) == []
