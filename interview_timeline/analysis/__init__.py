"""
Interview Timeline Analysis Module

Segmentation, answer scoring, marker detection and pruning, momentum and
transcript delivery metrics.
"""

from .segmenter import segment_transcript, count_follow_ups, is_follow_up
from .scoring import score_answer, average_score
from .markers import MarkerCandidate, MarkerDetector, detect_markers, filter_markers, MARKER_VIEWS
from .pruner import prune_markers
from .momentum import build_momentum_points, normalize_score
from .assembler import TimelineAnalyzer, build_timeline_analysis, build_transcript_hash, get_timeline_analyzer
from .metrics import TranscriptMetrics, ResponseMetric, compute_transcript_metrics

__all__ = [
    # Segmentation
    'segment_transcript',
    'count_follow_ups',
    'is_follow_up',

    # Scoring
    'score_answer',
    'average_score',

    # Markers
    'MarkerCandidate',
    'MarkerDetector',
    'detect_markers',
    'filter_markers',
    'MARKER_VIEWS',
    'prune_markers',

    # Momentum
    'build_momentum_points',
    'normalize_score',

    # Assembly
    'TimelineAnalyzer',
    'build_timeline_analysis',
    'build_transcript_hash',
    'get_timeline_analyzer',

    # Delivery metrics
    'TranscriptMetrics',
    'ResponseMetric',
    'compute_transcript_metrics'
]
