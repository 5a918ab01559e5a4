import os
import tempfile

# Point the app at a throwaway SQLite file before db.py builds its engine.
_DB_DIR = tempfile.mkdtemp(prefix="math-practice-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"

import pytest  # noqa: E402

import models  # noqa: E402,F401
from db import Base, SessionLocal, engine  # noqa: E402
from errors import GenerationError  # noqa: E402
from generation import get_generation_service  # noqa: E402
from main import app  # noqa: E402
from models import Submission  # noqa: E402
from schemas.problems import GeneratedProblem  # noqa: E402

Base.metadata.create_all(engine)


class FakeGenerationService:
    """Stands in for Gemini; records every prompt it receives."""

    def __init__(self):
        self.problem = GeneratedProblem(
            problem_text="Sam has 3 apples and buys 4 more. How many apples does he have?",
            final_answer=7,
        )
        self.solution = "1. 3 + 4 = 7"
        self.feedback = "Great work, keep it up!"
        self.fail_problem = False
        self.fail_solution = False
        self.fail_feedback = False
        self.calls = []

    def generate_json(self, prompt, schema, system_instruction=None):
        self.calls.append(("problem", prompt))
        if self.fail_problem:
            raise GenerationError("upstream down")
        return self.problem

    def generate_text(self, prompt):
        kind = "solution" if prompt.startswith("You are a math solver") else "feedback"
        self.calls.append((kind, prompt))
        if getattr(self, f"fail_{kind}"):
            raise GenerationError("upstream down")
        return self.solution if kind == "solution" else self.feedback

    def kinds(self):
        return [k for k, _ in self.calls]


@pytest.fixture
def fake_ai():
    fake = FakeGenerationService()
    app.dependency_overrides[get_generation_service] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_generation_service, None)


def submissions_for(session_id):
    with SessionLocal() as db:
        return db.query(Submission).filter(Submission.session_id == session_id).all()


@pytest.fixture
def submissions():
    return submissions_for
