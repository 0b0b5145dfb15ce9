from problems import OperationMode, Operator, Problem
from session import (
    START_TIME,
    FeedbackKind,
    GameSession,
    Phase,
    parse_answer,
)


class FixedGenerator:
    """Always hands out 3 + 4."""

    def __init__(self):
        self.calls = 0
        self.modes = []

    def generate(self, mode):
        self.calls += 1
        self.modes.append(mode)
        return Problem(operand_a=3, operand_b=4, operator=Operator.ADD, answer=7)


def _state(s):
    return (s.phase, s.score, s.time_remaining, s.current_problem, s.mode, s.feedback)


def _playing(time_remaining=START_TIME):
    s = GameSession(FixedGenerator())
    s.start(OperationMode.ADDITION)
    for _ in range(START_TIME - time_remaining):
        s.tick()
    assert s.time_remaining == time_remaining
    return s


def test_new_session_is_idle():
    s = GameSession()
    assert s.phase is Phase.IDLE
    assert s.score == 0 and s.time_remaining == START_TIME
    assert s.current_problem is None
    assert s.mode is OperationMode.RANDOM


def test_start_yields_fresh_round():
    gen = FixedGenerator()
    s = GameSession(gen)
    s.start(OperationMode.DIVISION)
    assert s.phase is Phase.PLAYING
    assert s.score == 0 and s.time_remaining == 60
    assert s.current_problem is not None
    assert s.mode is OperationMode.DIVISION
    assert gen.modes == [OperationMode.DIVISION]


def test_start_without_mode_keeps_selected_mode():
    gen = FixedGenerator()
    s = GameSession(gen, mode=OperationMode.SUBTRACTION)
    s.start()
    assert gen.modes == [OperationMode.SUBTRACTION]


def test_restart_mid_round_resets_score_and_time():
    s = _playing()
    s.submit_answer("7")
    s.tick()
    s.start()
    assert (s.score, s.time_remaining, s.feedback) == (0, 60, None)


def test_tick_decrements():
    s = _playing()
    s.tick()
    assert s.time_remaining == 59 and s.phase is Phase.PLAYING


def test_last_tick_ends_round():
    s = _playing(time_remaining=1)
    s.tick()
    assert s.phase is Phase.OVER
    assert s.time_remaining == 0
    assert s.current_problem is None


def test_correct_answer():
    s = _playing()
    gen = s.generator
    before = gen.calls
    event = s.submit_answer("7")
    assert event.kind is FeedbackKind.CORRECT
    assert s.score == 1 and s.time_remaining == 90
    assert s.current_problem is not None
    assert gen.calls == before + 1
    assert s.feedback == event


def test_correct_answer_with_whitespace_and_sign():
    s = _playing()
    assert s.submit_answer("  +7 ").kind is FeedbackKind.CORRECT


def test_incorrect_answer_deducts_time():
    s = _playing()
    event = s.submit_answer("8")
    assert event.kind is FeedbackKind.INCORRECT
    assert event.correct_answer == 7
    assert "The answer was 7" in event.message
    assert s.score == 0 and s.time_remaining == 50
    assert s.phase is Phase.PLAYING


def test_incorrect_answer_can_end_round_immediately():
    s = _playing(time_remaining=5)
    event = s.submit_answer("1")
    assert event.kind is FeedbackKind.INCORRECT and event.correct_answer == 7
    assert s.time_remaining == 0
    assert s.phase is Phase.OVER
    assert s.current_problem is None


def test_incorrect_answer_at_exactly_ten_seconds_ends_round():
    s = _playing(time_remaining=10)
    s.submit_answer("0")
    assert s.phase is Phase.OVER and s.time_remaining == 0


def test_unparsable_answer_counts_as_incorrect():
    for raw in ("", "abc", "7.5", "7.01", ".0", "3+4", None, "7" * 101):
        s = _playing()
        event = s.submit_answer(raw)
        assert event.kind is FeedbackKind.INCORRECT
        assert s.time_remaining == 50


def test_calls_outside_playing_change_nothing():
    idle = GameSession(FixedGenerator())
    over = _playing(time_remaining=1)
    over.tick()
    for s in (idle, over):
        before = _state(s)
        s.tick()
        assert s.submit_answer("7").kind is FeedbackKind.IGNORED
        assert _state(s) == before


def test_reset_from_any_phase():
    idle = GameSession(FixedGenerator())
    playing = _playing()
    playing.submit_answer("7")
    over = _playing(time_remaining=1)
    over.tick()
    for s in (idle, playing, over):
        s.reset()
        assert s.phase is Phase.IDLE
        assert s.score == 0 and s.time_remaining == 60
        assert s.current_problem is None and s.feedback is None


def test_reset_keeps_selected_mode():
    s = _playing()
    s.reset()
    assert s.mode is OperationMode.ADDITION


def test_select_mode_only_between_rounds():
    s = _playing()
    assert s.select_mode(OperationMode.DIVISION) is False
    assert s.mode is OperationMode.ADDITION
    s.reset()
    assert s.select_mode(OperationMode.DIVISION) is True
    assert s.mode is OperationMode.DIVISION


def test_score_never_decreases():
    s = _playing()
    last = 0
    for raw in ("7", "1", "7", "x", "7"):
        s.submit_answer(raw)
        assert s.score >= last
        last = s.score
    assert s.score == 3


def test_snapshot_reflects_state():
    s = _playing()
    s.submit_answer("2")
    snap = s.snapshot()
    assert snap.phase is Phase.PLAYING
    assert snap.time_remaining == 50
    assert snap.current_problem == s.current_problem
    assert snap.feedback.kind is FeedbackKind.INCORRECT


def test_whole_number_with_zero_fraction_is_correct():
    for raw in ("7.0", "7.", " 7.00 "):
        s = _playing()
        event = s.submit_answer(raw)
        assert event.kind is FeedbackKind.CORRECT
        assert s.score == 1 and s.time_remaining == 90


def test_parse_answer():
    assert parse_answer("7.0") == 7
    assert parse_answer("-3.") == -3
    assert parse_answer("7.5") is None
    assert parse_answer("12") == 12
    assert parse_answer(" -3 ") == -3
    assert parse_answer("1e3") is None
    assert parse_answer("") is None
