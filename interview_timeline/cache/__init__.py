"""Timeline result cache."""

from .storage import (
    TimelineStore,
    InMemoryTimelineStore,
    JsonFileTimelineStore,
    create_timeline_store,
    get_or_compute_timeline,
)

__all__ = [
    'TimelineStore',
    'InMemoryTimelineStore',
    'JsonFileTimelineStore',
    'create_timeline_store',
    'get_or_compute_timeline'
]
