from interview_timeline.analysis.segmenter import count_follow_ups, is_follow_up, segment_transcript
from interview_timeline.core.models import TranscriptTurn

from conftest import make_turns

PROBES = [
    "Describe the migration project timeline and budget.",
    "Describe the migration project budget constraints.",
    "Describe the migration project budget approvals.",
]


def test_segments_pair_questions_with_user_turns():
    turns = [
        TranscriptTurn("t0", "user", "Hello there"),
        TranscriptTurn("t1", "assistant", "   "),
        TranscriptTurn("t2", "assistant", "Why did you pick Postgres?"),
        TranscriptTurn("t3", "user", "We needed strong consistency."),
        TranscriptTurn("t4", "system", "note"),
        TranscriptTurn("t5", "user", "And  ACID."),
        TranscriptTurn("t6", "assistant", "Can you clarify the tradeoffs?"),
    ]
    segments = segment_transcript(turns)

    assert [s.question_turn_index for s in segments] == [2, 6]

    first, second = segments
    assert first.id == "segment-0"
    assert first.answer == "We needed strong consistency. And ACID."
    assert (first.answer_turn_start_index, first.answer_turn_end_index) == (3, 5)
    assert (first.start_turn_index, first.end_turn_index) == (2, 5)
    assert first.center_turn_index == 4
    assert first.evidence_snippet == first.answer

    assert second.answer == ""
    assert (second.answer_turn_start_index, second.answer_turn_end_index) == (6, 6)
    assert second.evidence_snippet == "Can you clarify the tradeoffs?"
    assert second.follow_up_count == 1


def test_turns_belong_to_at_most_one_segment():
    turns = make_turns(*[(q, "Some answer about it.") for q in PROBES])
    turns.insert(0, TranscriptTurn("t0", "user", "Before the first question"))
    seen = set()
    for segment in segment_transcript(turns):
        span = set(range(segment.question_turn_index, segment.answer_turn_end_index + 1))
        assert not span & seen
        seen |= span
    assert 0 not in seen


def test_follow_up_chain():
    turns = make_turns(*[(q, "Answer.") for q in PROBES], ("Tell me about your hobbies.", "Chess."))
    assert [s.follow_up_count for s in segment_transcript(turns)] == [0, 1, 2, 0]


def test_is_follow_up():
    assert is_follow_up("Why?", "Completely unrelated topic")
    assert is_follow_up(PROBES[1], PROBES[0])
    assert not is_follow_up("Tell me about your hobbies.", PROBES[0])
    assert not is_follow_up(PROBES[1], PROBES[0], similarity_threshold=0.9)


def test_count_follow_ups_is_uncapped():
    segments = segment_transcript(make_turns(*[("Why was that?", "Because.")] * 7))
    assert [s.follow_up_count for s in count_follow_ups(segments)] == [0, 1, 2, 3, 4, 5, 6]


def test_empty_transcript():
    assert segment_transcript([]) == []
    assert segment_transcript([TranscriptTurn("t1", "assistant", " \n ")]) == []


def test_latency_attached_to_segment():
    turns = make_turns(("What did you build?", "A queue."), start_ms=0, step_ms=9000)
    assert segment_transcript(turns)[0].latency_sec == 9.0
