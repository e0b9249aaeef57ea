from interview_timeline.analysis.metrics import compute_transcript_metrics, count_fillers
from interview_timeline.core.models import TranscriptTurn


def test_count_fillers():
    assert count_fillers("Um, you know, I basically like it") == 4
    assert count_fillers("We shipped the feature on time.") == 0


def test_transcript_metrics():
    turns = [
        TranscriptTurn("t1", "assistant", "Tell me about yourself please", timestamp_ms=0),
        TranscriptTurn("t2", "user", "Um I built things you know", timestamp_ms=3000, answer_duration_sec=3),
        TranscriptTurn("t3", "assistant", "And then?", timestamp_ms=10_000),
        TranscriptTurn("t4", "user", "Basically we shipped it", timestamp_ms=10_000),
    ]
    metrics = compute_transcript_metrics(turns)

    assert metrics.user_word_count == 10
    assert metrics.assistant_word_count == 7
    assert metrics.talk_ratio_user == 10 / 17
    assert metrics.avg_response_words == 5
    assert metrics.total_filler_count == 3
    assert metrics.filler_rate == 30.0
    assert metrics.response_count == 2
    assert metrics.is_too_short is False
    assert metrics.has_speech_data is True

    first, second = metrics.per_response
    assert first.question_snippet == "Tell me about yourself please"
    assert (first.wpm, first.latency_sec, first.filler_count) == (120, 3, 2)
    assert (second.wpm, second.latency_sec) == (None, None)

    assert (metrics.avg_wpm, metrics.avg_duration_sec, metrics.avg_latency_sec) == (120, 3, 3)


def test_metrics_serialize_camel_case():
    turns = [TranscriptTurn("t1", "assistant", "Q?"), TranscriptTurn("t2", "user", "A.")]
    payload = compute_transcript_metrics(turns).to_dict()
    assert payload["isTooShort"] is True
    assert payload["perResponse"][0]["questionIndex"] == 1
    assert payload["avgWpm"] is None


def test_empty_transcript_metrics():
    metrics = compute_transcript_metrics([])
    assert metrics.response_count == 0
    assert metrics.talk_ratio_user == 0.0
    assert metrics.per_response == []
