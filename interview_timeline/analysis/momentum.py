"""
Interview Timeline Analysis: Momentum

Turns per-segment average scores into a smoothed 0-100 series for the
timeline sparkline.
"""

from typing import List, Sequence

from ..core.models import MomentumPoint, Segment
from ..core.utils import clamp, round_half_up


def normalize_score(average: float) -> float:
    """Map a 1-5 score linearly onto 0-100."""
    return (average - 1) / 4 * 100


def build_momentum_points(segments: Sequence[Segment]) -> List[MomentumPoint]:
    """
    3-point moving average of normalized segment scores.

    Edge points average over the neighbours that exist, so a single segment
    yields its own normalized score.

    Example:
        >>> [p.value for p in build_momentum_points(segments)]  # scores 5, 1, 3
        [50.0, 50.0, 25.0]
    """
    raw = [normalize_score(segment.average_score) for segment in segments]
    points: List[MomentumPoint] = []

    for index, segment in enumerate(segments):
        window = raw[max(0, index - 1):index + 2]
        smoothed = sum(window) / len(window)
        points.append(MomentumPoint(
            segment_index=index,
            event_turn_index=segment.center_turn_index,
            value=round_half_up(clamp(smoothed, 0.0, 100.0), 1),
        ))

    return points
