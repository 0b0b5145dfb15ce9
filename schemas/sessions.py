# math-challenge/schemas/sessions.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from problems import OperationMode
from session import FeedbackKind, Phase, SessionSnapshot

# ---------- Requests ----------


class CreateSessionRequest(BaseModel):
    mode: Optional[OperationMode] = None
    # fixed seed gives a reproducible problem sequence
    seed: Optional[int] = None


class StartRequest(BaseModel):
    mode: Optional[OperationMode] = None


class ModeRequest(BaseModel):
    mode: OperationMode


class AnswerRequest(BaseModel):
    answer: str = Field(default="")


# ---------- Responses ----------


class ProblemOut(BaseModel):
    # the answer never leaves the server
    operand_a: int
    operand_b: int
    operator: str
    display: str


class FeedbackOut(BaseModel):
    kind: FeedbackKind
    correct_answer: Optional[int] = None
    message: str = ""


class SnapshotOut(BaseModel):
    phase: Phase
    score: int
    time_remaining: int
    mode: OperationMode
    problem: Optional[ProblemOut] = None
    feedback: Optional[FeedbackOut] = None

    @classmethod
    def from_snapshot(cls, snap: SessionSnapshot) -> "SnapshotOut":
        problem = None
        if snap.current_problem is not None:
            p = snap.current_problem
            problem = ProblemOut(
                operand_a=p.operand_a,
                operand_b=p.operand_b,
                operator=p.operator.symbol,
                display=p.display,
            )
        feedback = None
        if snap.feedback is not None:
            feedback = FeedbackOut(**snap.feedback.model_dump())
        return cls(
            phase=snap.phase,
            score=snap.score,
            time_remaining=snap.time_remaining,
            mode=snap.mode,
            problem=problem,
            feedback=feedback,
        )


class SessionCreated(BaseModel):
    id: str
    snapshot: SnapshotOut


class ModeResponse(BaseModel):
    ok: bool
    snapshot: SnapshotOut


class AnswerResponse(BaseModel):
    feedback: FeedbackOut
    snapshot: SnapshotOut


class ModesOut(BaseModel):
    modes: List[OperationMode]
    default: OperationMode
