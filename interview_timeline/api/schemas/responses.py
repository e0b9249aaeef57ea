from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeTimelineResponse(_CamelResponse):
    session_id: str
    transcript_hash: str
    cached: bool
    result: Dict[str, Any]


class TimelineLookupResponse(_CamelResponse):
    session_id: str
    transcript_hash: str
    result: Dict[str, Any]


class TranscriptMetricsResponse(_CamelResponse):
    metrics: Dict[str, Any]


class HealthResponse(_CamelResponse):
    status: str
    version: str
    cache_backend: str
