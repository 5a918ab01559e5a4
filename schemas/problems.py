# schemas/problems.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

Difficulty = Literal["Easy", "Medium", "Hard"]


class ProblemRequest(BaseModel):
    difficulty: Difficulty = "Medium"


class GeneratedProblem(BaseModel):
    """Structured output requested from the generation service."""

    problem_text: str = Field(description="The complete text of the math word problem.")
    final_answer: float = Field(
        description="The correct numerical answer to the problem.", allow_inf_nan=False
    )

    @field_validator("problem_text")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("problem_text is empty")
        return v


class ProblemResponse(BaseModel):
    problem_text: str
    final_answer: float
    sessionId: str
    difficulty: Difficulty
