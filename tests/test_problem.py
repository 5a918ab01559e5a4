from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from db import SessionLocal
from main import app
from models import ProblemSession
from prompts import DIFFICULTY_PROFILES, PROBLEM_SYSTEM_INSTRUCTION

client = TestClient(app)


def test_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_generate_problem_returns_session(fake_ai):
    r = client.post("/problem", json={"difficulty": "Easy"})
    assert r.status_code == 200
    body = r.json()
    assert body["problem_text"].startswith("Sam has 3 apples")
    assert body["final_answer"] == 7
    assert body["difficulty"] == "Easy"
    assert isinstance(body["sessionId"], str) and body["sessionId"]


def test_generate_problem_persists_session(fake_ai):
    r = client.post("/problem", json={"difficulty": "Hard"})
    session_id = r.json()["sessionId"]

    with SessionLocal() as db:
        s = db.get(ProblemSession, session_id)
        assert s is not None
        assert s.difficulty == "Hard"
        assert s.correct_answer == 7
        assert s.problem_text == fake_ai.problem.problem_text
        assert s.created_at is not None


def test_generate_problem_defaults_to_medium(fake_ai):
    r = client.post("/problem")
    assert r.status_code == 200
    assert r.json()["difficulty"] == "Medium"
    assert DIFFICULTY_PROFILES["Medium"] in fake_ai.calls[-1][1]


def test_generate_problem_empty_body_defaults_to_medium(fake_ai):
    r = client.post("/problem", json={})
    assert r.status_code == 200
    assert r.json()["difficulty"] == "Medium"


def test_generate_problem_prompt_follows_difficulty(fake_ai):
    client.post("/problem", json={"difficulty": "Hard"})
    kind, prompt = fake_ai.calls[-1]
    assert kind == "problem"
    assert DIFFICULTY_PROFILES["Hard"] in prompt
    assert DIFFICULTY_PROFILES["Easy"] not in prompt


def test_generate_problem_invalid_difficulty(fake_ai):
    r = client.post("/problem", json={"difficulty": "Extreme"})
    assert r.status_code == 400
    assert set(r.json()) == {"error"}
    assert fake_ai.calls == []


def test_generate_problem_upstream_failure(fake_ai):
    fake_ai.fail_problem = True
    r = client.post("/problem", json={"difficulty": "Easy"})
    assert r.status_code == 500
    assert r.json() == {"error": "An error occurred during problem generation or processing."}


def test_generate_problem_persistence_failure(fake_ai, monkeypatch):
    def _broken(**kwargs):
        raise SQLAlchemyError("db down")

    monkeypatch.setattr("routers.problems.ProblemSession", _broken)
    r = client.post("/problem", json={"difficulty": "Easy"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to save problem to database."}
    # generation already happened; nothing is rolled back upstream
    assert fake_ai.kinds() == ["problem"]


def test_system_instruction_asks_for_json():
    assert "JSON" in PROBLEM_SYSTEM_INSTRUCTION
