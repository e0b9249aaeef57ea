"""
Interview Timeline Configuration Management

Handles loading, validation, and management of configuration settings
from YAML files with .env loading and environment variable overrides.
"""

import os
import re
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


MARKER_TYPES = (
    "strong_answer",
    "weak_answer",
    "deep_follow_up",
    "confidence_dip",
    "pause_latency",
    "standout_quote",
)


def _default_stop_words() -> List[str]:
    return [
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "had", "has", "have", "i", "in", "is", "it", "of", "on", "or",
        "that", "the", "to", "was", "we", "with", "you", "your",
    ]


class VocabularyConfig(BaseModel):
    """
    Word tables driving the text heuristics.

    Every entry except stop words is a regular-expression fragment; entries
    are joined into one alternation per table.
    """
    stop_words: List[str] = Field(default_factory=_default_stop_words)
    follow_up_cues: List[str] = Field(default_factory=lambda: [
        r"follow\s*up", "can you", "walk me through", "specifically",
        "what exactly", "why", "how did", "how do you", "dig deeper", "clarify",
    ])
    uncertainty_phrases: List[str] = Field(default_factory=lambda: [
        "not sure", "i think", "maybe", "kind of", "sort of", "probably",
        "i guess", "um", "uh", "not certain", "i hope", "i'm not sure",
    ])
    impact_verbs: List[str] = Field(default_factory=lambda: [
        "increase", "decrease", "improve", "improved", "reduced", "reduce",
        "saved", "delivered", "launched", "shipped", "grew", "boosted",
        "cut", "lifted", "won",
    ])
    detail_keywords: List[str] = Field(default_factory=lambda: [
        "metric", "kpi", "deadline", "sprint", "incident", "latency",
        "revenue", "conversion", "retention", "stakeholder", "roadmap",
        "experiment", "a/b", "ab test", "users?",
    ])
    sequence_words: List[str] = Field(default_factory=lambda: [
        "first", "then", "after", "before", "finally", "because",
        "therefore", "result",
    ])
    star_words: List[str] = Field(default_factory=lambda: [
        "situation", "task", "action", "result",
    ])

    @field_validator(
        'follow_up_cues', 'uncertainty_phrases', 'impact_verbs',
        'detail_keywords', 'sequence_words', 'star_words'
    )
    @classmethod
    def validate_patterns(cls, v):
        if not v:
            raise ValueError("Pattern list must not be empty")
        for fragment in v:
            try:
                re.compile(fragment)
            except re.error as e:
                raise ValueError(f"Invalid pattern '{fragment}': {e}")
        return v

    @field_validator('stop_words')
    @classmethod
    def normalize_stop_words(cls, v):
        return [word.lower() for word in v]


class ScoringConfig(BaseModel):
    """Segment scoring and follow-up chain settings."""
    follow_up_similarity: float = Field(default=0.30, ge=0.0, le=1.0)
    snippet_max_length: int = Field(default=160, ge=20)
    question_snippet_length: int = Field(default=140, ge=20)
    sentence_snippet_length: int = Field(default=170, ge=20)


class MarkerConfig(BaseModel):
    """Marker detection thresholds and per-type caps."""
    strong_min_average: float = Field(default=4.1, ge=1.0, le=5.0)
    strong_min_specificity: float = Field(default=4.0, ge=1.0, le=5.0)
    weak_max_score: float = Field(default=2.0, ge=1.0, le=5.0)
    follow_up_min_depth: int = Field(default=2, ge=1)
    confidence_dip_max_specificity: float = Field(default=2.8, ge=1.0, le=5.0)
    pause_min_latency_sec: float = Field(default=8.0, ge=0.0)
    pause_moderate_latency_sec: float = Field(default=15.0, ge=0.0)
    pause_severe_latency_sec: float = Field(default=25.0, ge=0.0)
    limits: Dict[str, int] = Field(default_factory=lambda: {
        "strong_answer": 4,
        "weak_answer": 4,
        "deep_follow_up": 3,
        "confidence_dip": 3,
        "pause_latency": 3,
        "standout_quote": 3,
    })

    @field_validator('limits')
    @classmethod
    def validate_limits(cls, v):
        if set(v) != set(MARKER_TYPES):
            raise ValueError(f"Marker limits must name exactly: {list(MARKER_TYPES)}")
        for marker_type, limit in v.items():
            if limit < 0:
                raise ValueError(f"Marker limit for '{marker_type}' must be >= 0")
        return v


class AnalysisConfig(BaseModel):
    """Everything the analysis engine reads."""
    vocabulary: VocabularyConfig = VocabularyConfig()
    scoring: ScoringConfig = ScoringConfig()
    markers: MarkerConfig = MarkerConfig()


class CacheConfig(BaseModel):
    """Timeline result cache settings."""
    backend: str = Field(default="memory")
    path: str = Field(default="cache/timeline_analysis_v1.json")
    max_entries: int = Field(default=1000, ge=0)  # memory backend; 0 = unbounded

    @field_validator('backend')
    @classmethod
    def validate_backend(cls, v):
        valid_backends = ["memory", "file"]
        if v not in valid_backends:
            raise ValueError(f"Invalid cache backend. Must be one of: {valid_backends}")
        return v


class LoggingConfig(BaseModel):
    """Logging system configuration."""
    level: str = Field(default="INFO")
    console_format: str = Field(default="rich")
    file_format: str = Field(default="detailed")
    log_to_file: bool = False
    log_dir: str = "logs"
    max_log_files: int = Field(default=10, ge=1)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @field_validator('console_format')
    @classmethod
    def validate_console_format(cls, v):
        valid_formats = ["rich", "simple", "json"]
        if v not in valid_formats:
            raise ValueError(f"Invalid console format. Must be one of: {valid_formats}")
        return v


class ServerConfig(BaseModel):
    """HTTP tool server settings."""
    host: str = "127.0.0.1"
    port: int = Field(default=8765, ge=1, le=65535)


class TimelineConfig(BaseModel):
    """Main interview timeline configuration model."""
    analysis: AnalysisConfig = AnalysisConfig()
    cache: CacheConfig = CacheConfig()
    logging: LoggingConfig = LoggingConfig()
    server: ServerConfig = ServerConfig()


class ConfigManager:
    """
    Configuration manager for the interview timeline engine.

    Handles loading configuration from YAML files, environment variables,
    and provides validation and access to configuration settings.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files
        """
        self.config_dir = config_dir or Path(__file__).parent.parent.parent / "config"
        self._config: Optional[TimelineConfig] = None

    def load_config(self,
                    config_name: str = "default",
                    overrides: Optional[Dict[str, Any]] = None) -> TimelineConfig:
        """
        Load configuration from YAML file with optional overrides.

        Args:
            config_name: Name of config file (without .yaml extension)
            overrides: Dictionary of configuration overrides

        Returns:
            Validated timeline configuration

        Raises:
            FileNotFoundError: If a non-default config file doesn't exist
            ValueError: If configuration is invalid
        """
        config_file = self.config_dir / f"{config_name}.yaml"

        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        elif config_name == "default":
            config_data = {}
        else:
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        env_file = self.config_dir.parent / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        config_data = self._apply_env_overrides(config_data)

        if overrides:
            config_data = self._merge_config(config_data, overrides)

        try:
            self._config = TimelineConfig(**config_data)
            return self._config
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}")

    def get_config(self) -> TimelineConfig:
        """
        Get current configuration.

        Raises:
            RuntimeError: If no configuration is loaded
        """
        if self._config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self._config

    def save_config(self, config: TimelineConfig, filename: str):
        """Save configuration to ``<config_dir>/<filename>.yaml``."""
        output_file = self.config_dir / f"{filename}.yaml"
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.model_dump(), f, default_flow_style=False, indent=2)

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'TIMELINE_LOG_LEVEL': ('logging', 'level'),
            'TIMELINE_CACHE_BACKEND': ('cache', 'backend'),
            'TIMELINE_CACHE_PATH': ('cache', 'path'),
            'TIMELINE_SERVER_PORT': ('server', 'port'),
            'TIMELINE_FOLLOW_UP_SIMILARITY': ('analysis.scoring', 'follow_up_similarity'),
        }

        for env_var, (section, key) in env_mappings.items():
            if env_var not in os.environ:
                continue
            value: Any = os.environ[env_var]

            if key == 'port':
                value = int(value)
            elif key == 'follow_up_similarity':
                value = float(value)

            target = config_data
            for part in section.split('.'):
                if not isinstance(target.get(part), dict):
                    target[part] = {}
                target = target[part]
            target[key] = value

        return config_data

    def _merge_config(self, base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries."""
        result = base.copy()

        for key, value in overrides.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result


# Global configuration manager instance
config_manager = ConfigManager()


def get_config() -> TimelineConfig:
    """Get the global configuration instance."""
    return config_manager.get_config()


def load_config(config_name: str = "default", **overrides) -> TimelineConfig:
    """Load configuration with the global manager."""
    return config_manager.load_config(config_name, overrides)
