import pytest
import yaml

from interview_timeline.utils.config import AnalysisConfig, ConfigManager, TimelineConfig

ENV_VARS = [
    "TIMELINE_LOG_LEVEL",
    "TIMELINE_CACHE_BACKEND",
    "TIMELINE_CACHE_PATH",
    "TIMELINE_FOLLOW_UP_SIMILARITY",
    "TIMELINE_SERVER_PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def write_config(directory, name, data):
    (directory / f"{name}.yaml").write_text(yaml.safe_dump(data), encoding="utf-8")


def test_defaults_without_config_file(tmp_path):
    config = ConfigManager(tmp_path).load_config()
    assert config == TimelineConfig()
    assert config.analysis.markers.limits["strong_answer"] == 4


def test_shipped_default_yaml_matches_builtin_defaults():
    config = ConfigManager().load_config("default")
    assert config.analysis == AnalysisConfig()
    assert config.cache.backend == "memory"


def test_missing_named_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path).load_config("production")


@pytest.mark.parametrize("data", [
    {"analysis": {"markers": {"limits": {"strong_answer": 1}}}},
    {"analysis": {"vocabulary": {"follow_up_cues": ["("]}}},
    {"cache": {"backend": "redis"}},
    {"logging": {"level": "LOUD"}},
])
def test_invalid_config(tmp_path, data):
    write_config(tmp_path, "bad", data)
    with pytest.raises(ValueError):
        ConfigManager(tmp_path).load_config("bad")


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("TIMELINE_FOLLOW_UP_SIMILARITY", "0.5")
    monkeypatch.setenv("TIMELINE_SERVER_PORT", "9000")
    monkeypatch.setenv("TIMELINE_CACHE_BACKEND", "file")
    config = ConfigManager(tmp_path).load_config()
    assert config.analysis.scoring.follow_up_similarity == 0.5
    assert config.server.port == 9000
    assert config.cache.backend == "file"


def test_manual_overrides_merge(tmp_path):
    write_config(tmp_path, "custom", {"analysis": {"scoring": {"snippet_max_length": 120}}})
    config = ConfigManager(tmp_path).load_config(
        "custom", {"analysis": {"scoring": {"follow_up_similarity": 0.4}}}
    )
    assert config.analysis.scoring.snippet_max_length == 120
    assert config.analysis.scoring.follow_up_similarity == 0.4


def test_save_and_reload(tmp_path):
    manager = ConfigManager(tmp_path)
    config = manager.load_config(overrides={"logging": {"level": "debug"}})
    manager.save_config(config, "saved")
    assert manager.load_config("saved") == config
    assert manager.get_config().logging.level == "DEBUG"


def test_get_config_before_load(tmp_path):
    with pytest.raises(RuntimeError):
        ConfigManager(tmp_path).get_config()
