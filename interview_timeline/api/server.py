"""
HTTP tool server exposing the timeline engine and its result cache.
"""

from functools import lru_cache
from typing import List

import structlog
from fastapi import Depends, FastAPI, HTTPException, Query

from .. import __version__
from ..analysis.assembler import TimelineAnalyzer
from ..analysis.markers import filter_markers
from ..analysis.metrics import compute_transcript_metrics
from ..cache.storage import TimelineStore, create_timeline_store, get_or_compute_timeline
from ..core.models import TranscriptTurn
from ..core.schemas import TranscriptTurnSchema
from ..utils.config import TimelineConfig, load_config
from ..utils.logger import setup_logging

from .schemas.requests import AnalyzeTimelineRequest, TranscriptMetricsRequest
from .schemas.responses import (
    AnalyzeTimelineResponse,
    HealthResponse,
    TimelineLookupResponse,
    TranscriptMetricsResponse,
)

logger = structlog.get_logger(__name__)

app = FastAPI(title="Interview Timeline Tool Server", version=__version__)


@lru_cache()
def get_settings() -> TimelineConfig:
    # Load config and initialize logging once per process
    cfg = load_config("default")
    setup_logging(cfg.logging)
    return cfg


@lru_cache()
def get_analyzer() -> TimelineAnalyzer:
    return TimelineAnalyzer(get_settings().analysis)


@lru_cache()
def get_store() -> TimelineStore:
    return create_timeline_store(get_settings().cache)


def _to_turns(turns: List[TranscriptTurnSchema]) -> List[TranscriptTurn]:
    return [turn.to_turn() for turn in turns]


@app.get("/health", response_model=HealthResponse)
def health(settings: TimelineConfig = Depends(get_settings)):
    return HealthResponse(status="ok", version=__version__, cache_backend=settings.cache.backend)


@app.post("/tools/analyze_timeline", response_model=AnalyzeTimelineResponse)
def analyze_timeline(req: AnalyzeTimelineRequest,
                     analyzer: TimelineAnalyzer = Depends(get_analyzer),
                     store: TimelineStore = Depends(get_store)):
    turns = _to_turns(req.turns)

    if req.use_cache:
        result, cached = get_or_compute_timeline(store, req.session_id, turns, analyzer)
    else:
        result, cached = analyzer.analyze(req.session_id, turns), False

    payload = result.to_dict()
    payload['markers'] = [marker.to_dict() for marker in filter_markers(result.markers, req.view)]

    logger.info("timeline.api.analyzed", session_id=req.session_id,
                transcript_hash=result.transcript_hash, cached=cached, view=req.view)

    return AnalyzeTimelineResponse(
        session_id=result.session_id,
        transcript_hash=result.transcript_hash,
        cached=cached,
        result=payload,
    )


@app.get("/tools/timeline/{session_id}", response_model=TimelineLookupResponse)
def get_cached_timeline(session_id: str,
                        transcript_hash: str = Query(..., min_length=1),
                        store: TimelineStore = Depends(get_store)):
    result = store.read(session_id, transcript_hash)
    if result is None:
        raise HTTPException(
            status_code=404,
            detail=f"No cached timeline for session {session_id} with hash {transcript_hash}",
        )
    return TimelineLookupResponse(
        session_id=result.session_id,
        transcript_hash=result.transcript_hash,
        result=result.to_dict(),
    )


@app.post("/tools/transcript_metrics", response_model=TranscriptMetricsResponse)
def transcript_metrics(req: TranscriptMetricsRequest):
    metrics = compute_transcript_metrics(_to_turns(req.turns))
    return TranscriptMetricsResponse(metrics=metrics.to_dict())
