# math-challenge/session.py
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from problems import DEFAULT_MODE, OperationMode, Problem, ProblemGenerator

logger = logging.getLogger(__name__)

# --- Game rules -------------------------------------------------------------------
START_TIME = 60
CORRECT_BONUS = 30
INCORRECT_PENALTY = 10

LEN_LIMIT = 100
# whole numbers, optionally written with a zero fraction ("7.0", "7.")
_INT_RE = re.compile(r"^\s*([+-]?\d+)(?:\.0*)?\s*$")


class Phase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    OVER = "over"


class FeedbackKind(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    IGNORED = "ignored"


class FeedbackEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FeedbackKind
    correct_answer: Optional[int] = None
    message: str = ""

    @classmethod
    def correct(cls) -> "FeedbackEvent":
        return cls(kind=FeedbackKind.CORRECT, message=f"Correct! +{CORRECT_BONUS}s")

    @classmethod
    def incorrect(cls, correct_answer: int) -> "FeedbackEvent":
        return cls(
            kind=FeedbackKind.INCORRECT,
            correct_answer=correct_answer,
            message=f"Incorrect! -{INCORRECT_PENALTY}s. The answer was {correct_answer}",
        )

    @classmethod
    def ignored(cls) -> "FeedbackEvent":
        return cls(kind=FeedbackKind.IGNORED)


class SessionSnapshot(BaseModel):
    """Read-only view of a session for rendering."""

    model_config = ConfigDict(frozen=True)

    phase: Phase
    score: int
    time_remaining: int
    mode: OperationMode
    current_problem: Optional[Problem] = None
    feedback: Optional[FeedbackEvent] = None


def parse_answer(raw: Optional[str]) -> Optional[int]:
    """Return the integer typed by the player, or None if it isn't one."""
    if raw is None or not isinstance(raw, str) or len(raw) > LEN_LIMIT:
        return None
    m = _INT_RE.fullmatch(raw)
    if m is None:
        return None
    return int(m.group(1))


class GameSession:
    """
    Single-player round state: idle -> playing -> over.

    Every transition is total. Calls that make no sense for the current
    phase are ignored and leave the session untouched. The session never
    owns a timer; a clock collaborator calls tick() once per second while
    ``phase`` is PLAYING.
    """

    def __init__(
        self,
        generator: Optional[ProblemGenerator] = None,
        mode: OperationMode = DEFAULT_MODE,
    ) -> None:
        self.generator = generator if generator is not None else ProblemGenerator()
        self.mode = OperationMode(mode)
        self.phase = Phase.IDLE
        self.score = 0
        self.time_remaining = START_TIME
        self.current_problem: Optional[Problem] = None
        self.feedback: Optional[FeedbackEvent] = None

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    # --- Transitions ------------------------------------------------------------------

    def start(self, mode: Optional[OperationMode] = None) -> None:
        if mode is not None:
            self.mode = OperationMode(mode)
        self.score = 0
        self.time_remaining = START_TIME
        self.feedback = None
        self.phase = Phase.PLAYING
        self.current_problem = self.generator.generate(self.mode)
        logger.info("round started mode=%s", self.mode.value)

    def tick(self) -> None:
        if not self.is_playing:
            logger.debug("tick ignored in phase=%s", self.phase.value)
            return
        self.time_remaining -= 1
        if self.time_remaining <= 0:
            self._end()

    def submit_answer(self, raw_input: Optional[str]) -> FeedbackEvent:
        if not self.is_playing or self.current_problem is None:
            logger.debug("answer ignored in phase=%s", self.phase.value)
            return FeedbackEvent.ignored()

        expected = self.current_problem.answer
        # Unparsable input still resolves the turn, as a wrong answer.
        if parse_answer(raw_input) == expected:
            self.score += 1
            self.time_remaining += CORRECT_BONUS
            event = FeedbackEvent.correct()
        else:
            self.time_remaining = max(0, self.time_remaining - INCORRECT_PENALTY)
            event = FeedbackEvent.incorrect(expected)

        self.feedback = event
        if self.time_remaining == 0:
            self._end()
        else:
            self.current_problem = self.generator.generate(self.mode)
        return event

    def reset(self) -> None:
        self.phase = Phase.IDLE
        self.score = 0
        self.time_remaining = START_TIME
        self.current_problem = None
        self.feedback = None
        logger.info("session reset")

    def select_mode(self, mode: OperationMode) -> bool:
        """Choose the mode for the next round. Not allowed mid-round."""
        if self.is_playing:
            logger.debug("mode change ignored while playing")
            return False
        self.mode = OperationMode(mode)
        return True

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.phase,
            score=self.score,
            time_remaining=self.time_remaining,
            mode=self.mode,
            current_problem=self.current_problem,
            feedback=self.feedback,
        )

    def _end(self) -> None:
        self.time_remaining = 0
        self.current_problem = None
        self.phase = Phase.OVER
        logger.info("round over score=%d", self.score)
