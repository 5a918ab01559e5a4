# schemas/submissions.py
from __future__ import annotations

from pydantic import BaseModel, Field


class SubmissionRequest(BaseModel):
    # strict: "12" or true must not be coerced into an answer
    sessionId: str = Field(strict=True, min_length=1)
    userAnswer: float = Field(strict=True, allow_inf_nan=False)


class SubmissionResponse(BaseModel):
    isCorrect: bool
    feedback: str
    correctAnswer: float
    detailedSolution: str = ""
