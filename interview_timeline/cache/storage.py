"""
Interview Timeline Result Cache

Keyed store mapping ``session_id -> {transcriptHash, result}``. Results are
validated on the way in and on the way out; anything that fails validation
is treated as absent rather than raised to the caller.
"""

from abc import ABC, abstractmethod
import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import structlog

from ..analysis.assembler import TimelineAnalyzer, build_transcript_hash, get_timeline_analyzer
from ..core.models import TimelineAnalysisResult, TranscriptTurn
from ..core.schemas import analysis_result_errors, validate_analysis_result
from ..utils.config import CacheConfig

logger = structlog.get_logger(__name__)

TIMELINE_CACHE_KEY = "interview_timeline_analysis_v1"

TimelineCache = Dict[str, Dict[str, Any]]


class TimelineStore(ABC):
    """
    Base class for timeline result stores.

    Subclasses only move raw cache dictionaries; hash matching and schema
    validation live here so every backend behaves the same.
    """

    @abstractmethod
    def _load(self) -> TimelineCache:
        """Return the whole cache, or an empty mapping when unavailable."""

    @abstractmethod
    def _persist(self, cache: TimelineCache) -> None:
        """Store the whole cache."""

    def read(self, session_id: str, transcript_hash: str) -> Optional[TimelineAnalysisResult]:
        """
        Return the cached result for ``session_id`` on an exact hash match.

        Returns:
            The validated result, or None on miss, hash mismatch or invalid data
        """
        entry = self._load().get(session_id)
        if not isinstance(entry, dict) or entry.get("transcriptHash") != transcript_hash:
            logger.debug("timeline.cache.miss", session_id=session_id, transcript_hash=transcript_hash)
            return None

        result = validate_analysis_result(entry.get("result"))
        if result is None:
            logger.debug("timeline.cache.invalid_entry", session_id=session_id)
            return None

        logger.debug("timeline.cache.hit", session_id=session_id, transcript_hash=transcript_hash)
        return result

    def write(self, result: TimelineAnalysisResult) -> None:
        """
        Upsert ``result`` under its session id.

        Results that fail validation are logged and dropped.
        """
        payload = result.to_dict()
        errors = analysis_result_errors(payload)
        if errors:
            logger.warning("timeline.cache.skipped_invalid_result",
                           session_id=result.session_id, issues=errors)
            return

        cache = self._load()
        cache.pop(result.session_id, None)
        cache[result.session_id] = {
            "transcriptHash": result.transcript_hash,
            "result": payload,
        }
        self._persist(cache)

    def clear(self, session_id: Optional[str] = None) -> None:
        """Drop one session, or everything when ``session_id`` is None."""
        if session_id is None:
            self._persist({})
            return
        cache = self._load()
        if cache.pop(session_id, None) is not None:
            self._persist(cache)


class InMemoryTimelineStore(TimelineStore):
    """
    Process-local store; entries are kept as serialized dictionaries.

    At most ``max_entries`` sessions are kept (0 keeps everything); the
    least recently written session is evicted first.
    """

    def __init__(self, max_entries: int = 1000):
        self.max_entries = max_entries
        self._cache: TimelineCache = {}

    def _load(self) -> TimelineCache:
        return dict(self._cache)

    def _persist(self, cache: TimelineCache) -> None:
        self._cache = dict(cache)
        if self.max_entries:
            while len(self._cache) > self.max_entries:
                evicted = next(iter(self._cache))
                del self._cache[evicted]
                logger.debug("timeline.cache.evicted", session_id=evicted)


class JsonFileTimelineStore(TimelineStore):
    """
    Store backed by a single JSON document.

    The document maps ``TIMELINE_CACHE_KEY`` to the session cache. Unreadable
    or corrupted files behave as an empty cache; write failures are logged.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> TimelineCache:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("timeline.cache.load_failed", path=str(self.path), message=str(e))
            return {}

        cache = document.get(TIMELINE_CACHE_KEY) if isinstance(document, dict) else None
        return cache if isinstance(cache, dict) else {}

    def _persist(self, cache: TimelineCache) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump({TIMELINE_CACHE_KEY: cache}, f, ensure_ascii=False)
        except OSError as e:
            logger.warning("timeline.cache.persist_failed", path=str(self.path), message=str(e))


def create_timeline_store(config: Optional[CacheConfig] = None) -> TimelineStore:
    """Build the store selected by ``config.backend``."""
    config = config or CacheConfig()
    if config.backend == "file":
        return JsonFileTimelineStore(config.path)
    return InMemoryTimelineStore(config.max_entries)


def get_or_compute_timeline(store: TimelineStore,
                            session_id: str,
                            turns: Sequence[TranscriptTurn],
                            analyzer: Optional[TimelineAnalyzer] = None) -> Tuple[TimelineAnalysisResult, bool]:
    """
    Serve a cached analysis when the transcript is unchanged, else recompute.

    Returns:
        Tuple of (result, served_from_cache)
    """
    transcript_hash = build_transcript_hash(turns)
    cached = store.read(session_id, transcript_hash)
    if cached is not None:
        return cached, True

    result = (analyzer or get_timeline_analyzer()).analyze(session_id, turns)
    store.write(result)
    return result, False
