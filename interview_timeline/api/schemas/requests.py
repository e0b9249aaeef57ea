from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...core.schemas import TranscriptTurnSchema


class AnalyzeTimelineRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str = Field(..., min_length=1, description="Opaque session key")
    turns: List[TranscriptTurnSchema] = Field(..., description="Transcript turns in display order")
    use_cache: bool = Field(True, description="Serve and store the result through the cache")
    view: Literal["all", "highlights", "weak_points", "follow_ups", "pacing"] = Field(
        "all", description="Marker view to return"
    )


class TranscriptMetricsRequest(BaseModel):
    turns: List[TranscriptTurnSchema] = Field(..., description="Transcript turns in display order")
