# routers/problems.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from errors import PersistenceError
from generation import GenerationService, get_generation_service
from models import ProblemSession
from prompts import DEFAULT_DIFFICULTY, PROBLEM_SYSTEM_INSTRUCTION, build_problem_prompt
from schemas.problems import GeneratedProblem, ProblemRequest, ProblemResponse

logger = logging.getLogger("math-practice")

router = APIRouter(tags=["problems"])


def _save_session(db: Session, generated: GeneratedProblem, difficulty: str) -> ProblemSession:
    # No compensation on failure: the generated problem is simply lost.
    try:
        session = ProblemSession(
            problem_text=generated.problem_text,
            correct_answer=generated.final_answer,
            difficulty=difficulty,
        )
        db.add(session)
        db.commit()
        db.refresh(session)
        return session
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"session insert failed: {type(e).__name__}: {e}") from e


@router.post("/problem", response_model=ProblemResponse)
def generate_problem(
    req: Optional[ProblemRequest] = None,
    db: Session = Depends(get_db),
    ai: GenerationService = Depends(get_generation_service),
):
    difficulty = req.difficulty if req is not None else DEFAULT_DIFFICULTY

    generated = ai.generate_json(
        build_problem_prompt(difficulty),
        GeneratedProblem,
        system_instruction=PROBLEM_SYSTEM_INSTRUCTION,
    )
    session = _save_session(db, generated, difficulty)
    logger.info("problem_created session=%s difficulty=%s", session.id, difficulty)

    return {
        "problem_text": session.problem_text,
        "final_answer": session.correct_answer,
        "sessionId": session.id,
        "difficulty": session.difficulty,
    }
