"""
Interview Timeline Analysis: Marker Pruning

Greedy top-k-per-type selection: markers are admitted by severity (earlier
events win ties) until their type's cap is reached, then returned in
chronological order.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..utils.config import MarkerConfig
from .markers import MarkerCandidate

logger = logging.getLogger(__name__)


def prune_markers(candidates: Sequence[MarkerCandidate],
                  limits: Optional[Dict[str, int]] = None) -> List[MarkerCandidate]:
    """
    Cap markers per type and restore chronological order.

    A lower-severity early marker loses to a higher-severity later marker of
    the same type even when that reduces temporal spread.

    Args:
        candidates: Unpruned marker candidates
        limits: Per-type caps (defaults from ``MarkerConfig``)

    Returns:
        Kept markers sorted by event turn, then severity descending

    Example:
        >>> kept = prune_markers(candidates)
        >>> all(a.event_turn_index <= b.event_turn_index for a, b in zip(kept, kept[1:]))
        True
    """
    limits = limits if limits is not None else MarkerConfig().limits
    counts: Dict[str, int] = {marker_type: 0 for marker_type in limits}

    ranked = sorted(candidates, key=lambda m: (-m.severity, m.event_turn_index))

    kept: List[MarkerCandidate] = []
    for candidate in ranked:
        if counts.get(candidate.type, 0) >= limits.get(candidate.type, 0):
            continue
        counts[candidate.type] = counts.get(candidate.type, 0) + 1
        kept.append(candidate)

    if len(kept) < len(candidates):
        logger.debug(f"Pruned markers: kept {len(kept)} of {len(candidates)}")

    return sorted(kept, key=lambda m: (m.event_turn_index, -m.severity))
