# routers/submissions.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from errors import FeedbackError, GenerationError, NotFoundError
from generation import GenerationService, get_generation_service
from grading import check_solution_steps, is_answer_correct
from models import ProblemSession, Submission
from prompts import build_feedback_prompt, build_solution_prompt
from schemas.submissions import SubmissionRequest, SubmissionResponse

logger = logging.getLogger("math-practice")

router = APIRouter(tags=["submissions"])

SOLUTION_PLACEHOLDER = "Error generating steps."


def _detailed_solution(ai: GenerationService, problem_text: str, correct_answer: float) -> str:
    """Step-by-step working for an incorrect answer; optional, so failures degrade."""
    try:
        steps = ai.generate_text(build_solution_prompt(problem_text, correct_answer))
    except GenerationError as e:
        logger.error("solution_generation_failed: %s", e)
        return SOLUTION_PLACEHOLDER

    check = check_solution_steps(steps, correct_answer)
    if not check.ok:
        logger.warning("solution_steps_unverified issues=%s", "; ".join(check.issues))
    return steps


def _feedback(
    ai: GenerationService,
    session: ProblemSession,
    user_answer: float,
    is_correct: bool,
) -> str:
    try:
        return ai.generate_text(
            build_feedback_prompt(
                session.problem_text, session.correct_answer, user_answer, is_correct
            )
        )
    except GenerationError as e:
        raise FeedbackError(str(e)) from e


def _record_submission(db: Session, **fields) -> None:
    # Audit trail only: a failed write must not fail the request.
    try:
        db.add(Submission(**fields))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("submission_insert_failed session=%s: %s", fields.get("session_id"), e)


@router.post("/submission", response_model=SubmissionResponse)
def submit_answer(
    req: SubmissionRequest,
    db: Session = Depends(get_db),
    ai: GenerationService = Depends(get_generation_service),
):
    session = db.get(ProblemSession, req.sessionId)
    if session is None:
        raise NotFoundError(f"unknown session id {req.sessionId!r}")

    correct = is_answer_correct(req.userAnswer, session.correct_answer)

    detailed_solution = ""
    if not correct:
        detailed_solution = _detailed_solution(ai, session.problem_text, session.correct_answer)

    feedback = _feedback(ai, session, req.userAnswer, correct)

    _record_submission(
        db,
        session_id=session.id,
        user_answer=req.userAnswer,
        is_correct=correct,
        feedback_text=feedback,
        detailed_solution=detailed_solution,
    )

    return {
        "isCorrect": correct,
        "feedback": feedback,
        "correctAnswer": session.correct_answer,
        "detailedSolution": detailed_solution,
    }
