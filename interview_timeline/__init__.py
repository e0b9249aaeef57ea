"""
Interview Timeline - Deterministic Interview Transcript Analysis

Segments an interview transcript into question/answer exchanges, scores each
answer, detects notable moments and builds a momentum series, with a
hash-keyed result cache in front of the engine.
"""

__version__ = "0.1.0"
__author__ = "Interview Timeline Team"

# Core imports
from .utils.config import ConfigManager, TimelineConfig, AnalysisConfig, get_config, load_config
from .utils.logger import TimelineLogger, get_logger, setup_logging
from .core.models import TranscriptTurn, Segment, Marker, MomentumPoint, TimelineAnalysisResult
from .core.schemas import parse_transcript, validate_analysis_result
from .analysis.assembler import TimelineAnalyzer, build_timeline_analysis, build_transcript_hash
from .cache.storage import TimelineStore, create_timeline_store, get_or_compute_timeline

__all__ = [
    "ConfigManager", "TimelineConfig", "AnalysisConfig", "get_config", "load_config",
    "TimelineLogger", "get_logger", "setup_logging",
    "TranscriptTurn", "Segment", "Marker", "MomentumPoint", "TimelineAnalysisResult",
    "parse_transcript", "validate_analysis_result",
    "TimelineAnalyzer", "build_timeline_analysis", "build_transcript_hash",
    "TimelineStore", "create_timeline_store", "get_or_compute_timeline",
]
