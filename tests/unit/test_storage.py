import dataclasses
import json

import structlog
from structlog.testing import capture_logs

from interview_timeline.analysis.assembler import build_timeline_analysis, build_transcript_hash
from interview_timeline.cache import storage
from interview_timeline.cache.storage import (
    TIMELINE_CACHE_KEY,
    InMemoryTimelineStore,
    JsonFileTimelineStore,
    create_timeline_store,
    get_or_compute_timeline,
)
from interview_timeline.utils.config import CacheConfig

from conftest import make_turns


def invalid_copy(result):
    marker = dataclasses.replace(result.markers[0], severity=9.0)
    return dataclasses.replace(result, markers=[marker] + list(result.markers[1:]))


def test_memory_store_requires_matching_hash(mixed_turns):
    store = InMemoryTimelineStore()
    result = build_timeline_analysis("s1", mixed_turns)
    store.write(result)

    assert store.read("s1", result.transcript_hash) == result
    assert store.read("s1", "tl_deadbeef") is None
    assert store.read("other", result.transcript_hash) is None


def test_invalid_result_is_not_stored(monkeypatch, mixed_turns):
    store = InMemoryTimelineStore()
    result = invalid_copy(build_timeline_analysis("s1", mixed_turns))

    with capture_logs() as logs:
        monkeypatch.setattr(storage, "logger", structlog.get_logger())
        store.write(result)

    assert store.read("s1", result.transcript_hash) is None
    skipped = [entry for entry in logs if entry["event"] == "timeline.cache.skipped_invalid_result"]
    assert len(skipped) == 1
    assert skipped[0]["log_level"] == "warning"
    assert skipped[0]["session_id"] == "s1"
    assert skipped[0]["issues"]


def test_file_store_persists_between_instances(tmp_path, mixed_turns):
    path = tmp_path / "cache" / "timeline.json"
    result = build_timeline_analysis("s1", mixed_turns)
    JsonFileTimelineStore(path).write(result)

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document[TIMELINE_CACHE_KEY]["s1"]["transcriptHash"] == result.transcript_hash

    assert JsonFileTimelineStore(path).read("s1", result.transcript_hash) == result


def test_file_store_tolerates_corrupted_file(tmp_path, mixed_turns):
    path = tmp_path / "timeline.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileTimelineStore(path)
    result = build_timeline_analysis("s1", mixed_turns)

    assert store.read("s1", result.transcript_hash) is None
    store.write(result)
    assert store.read("s1", result.transcript_hash) == result


def test_file_store_tolerates_unwritable_path(tmp_path, mixed_turns):
    store = JsonFileTimelineStore(tmp_path)
    result = build_timeline_analysis("s1", mixed_turns)
    store.write(result)
    assert store.read("s1", result.transcript_hash) is None


def test_cached_entry_failing_validation_is_a_miss(tmp_path, mixed_turns):
    path = tmp_path / "timeline.json"
    result = build_timeline_analysis("s1", mixed_turns)
    payload = result.to_dict()
    payload["momentumPoints"][0]["value"] = 250
    path.write_text(json.dumps({TIMELINE_CACHE_KEY: {
        "s1": {"transcriptHash": result.transcript_hash, "result": payload},
    }}), encoding="utf-8")

    assert JsonFileTimelineStore(path).read("s1", result.transcript_hash) is None


def test_get_or_compute_timeline():
    store = InMemoryTimelineStore()
    turns = make_turns(("Why Go?", "Fast builds."))

    first, cached = get_or_compute_timeline(store, "s1", turns)
    assert cached is False
    assert first.transcript_hash == build_transcript_hash(turns)

    second, cached = get_or_compute_timeline(store, "s1", turns)
    assert cached is True
    assert second == first

    edited = make_turns(("Why Go?", "Fast builds and simple deploys."))
    third, cached = get_or_compute_timeline(store, "s1", edited)
    assert cached is False
    assert third.transcript_hash != first.transcript_hash


def test_clear(mixed_turns):
    store = InMemoryTimelineStore()
    result = build_timeline_analysis("s1", mixed_turns)
    store.write(result)
    store.clear("s1")
    assert store.read("s1", result.transcript_hash) is None


def test_create_timeline_store(tmp_path):
    assert isinstance(create_timeline_store(), InMemoryTimelineStore)
    store = create_timeline_store(CacheConfig(backend="file", path=str(tmp_path / "t.json")))
    assert isinstance(store, JsonFileTimelineStore)


def test_memory_store_evicts_least_recently_written():
    store = InMemoryTimelineStore(max_entries=2)
    results = {
        sid: build_timeline_analysis(sid, make_turns(("Why Go?", "Fast builds.")))
        for sid in ("a", "b", "c")
    }
    store.write(results["a"])
    store.write(results["b"])
    store.write(results["a"])
    store.write(results["c"])

    assert store.read("a", results["a"].transcript_hash) is not None
    assert store.read("b", results["b"].transcript_hash) is None
    assert store.read("c", results["c"].transcript_hash) is not None

    unbounded = InMemoryTimelineStore(max_entries=0)
    for sid, result in results.items():
        unbounded.write(result)
    assert all(unbounded.read(sid, r.transcript_hash) is not None for sid, r in results.items())


def test_create_timeline_store_applies_entry_cap():
    store = create_timeline_store(CacheConfig(max_entries=5))
    assert store.max_entries == 5
