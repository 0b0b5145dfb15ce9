# math-challenge/problems.py
from __future__ import annotations

import random
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

# Operands are drawn from this closed range.
OPERAND_MIN = 1
OPERAND_MAX = 10


class Operator(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS: Dict[Operator, str] = {
    Operator.ADD: "+",
    Operator.SUB: "-",
    Operator.MUL: "*",
    Operator.DIV: "/",
}


class OperationMode(str, Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"
    RANDOM = "random"


DEFAULT_MODE = OperationMode.RANDOM

_MODE_OPERATORS: Dict[OperationMode, List[Operator]] = {
    OperationMode.ADDITION: [Operator.ADD],
    OperationMode.SUBTRACTION: [Operator.SUB],
    OperationMode.MULTIPLICATION: [Operator.MUL],
    OperationMode.DIVISION: [Operator.DIV],
    OperationMode.RANDOM: [Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV],
}


def operators_for(mode: OperationMode) -> List[Operator]:
    return list(_MODE_OPERATORS[OperationMode(mode)])


class Problem(BaseModel):
    """A single arithmetic problem, operands as shown to the player."""

    model_config = ConfigDict(frozen=True)

    operand_a: int
    operand_b: int
    operator: Operator
    answer: int

    @property
    def display(self) -> str:
        return f"{self.operand_a} {self.operator.symbol} {self.operand_b} = ?"


# --- Construction -----------------------------------------------------------------


def build_problem(a: int, b: int, op: Operator) -> Problem:
    """
    Turn two raw operands into a problem with a whole, non-negative answer:
      - SUB swaps the operands so the larger one comes first
      - DIV shows the product a*b as the dividend, so the quotient is a
    """
    if op is Operator.ADD:
        return Problem(operand_a=a, operand_b=b, operator=op, answer=a + b)
    if op is Operator.SUB:
        if a < b:
            a, b = b, a
        return Problem(operand_a=a, operand_b=b, operator=op, answer=a - b)
    if op is Operator.MUL:
        return Problem(operand_a=a, operand_b=b, operator=op, answer=a * b)
    # DIV
    return Problem(operand_a=a * b, operand_b=b, operator=op, answer=a)


class ProblemGenerator:
    """Draws problems from an injected random source.

    Pass ``seed`` (or a ready ``random.Random``) to get a reproducible stream.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, mode: OperationMode) -> Problem:
        a = self.rng.randint(OPERAND_MIN, OPERAND_MAX)
        b = self.rng.randint(OPERAND_MIN, OPERAND_MAX)
        op = self.rng.choice(operators_for(mode))
        return build_problem(a, b, op)
