# routers/health.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException
from sqlalchemy import inspect, text

from alembic.config import Config
from alembic.script import ScriptDirectory
from db import engine
from models import ProblemSession, Submission

router = APIRouter(prefix="/health", tags=["health"])

_ROOT = Path(__file__).resolve().parent.parent
_REQUIRED_TABLES = (ProblemSession.__tablename__, Submission.__tablename__)


@router.get("/db")
def health_db():
    """Connectivity plus presence of the session and submission tables."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            existing = set(inspect(conn).get_table_names())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")

    missing = [t for t in _REQUIRED_TABLES if t not in existing]
    if missing:
        names = ", ".join(missing)
        raise HTTPException(status_code=500, detail=f"db_error: missing tables: {names}")
    return {"ok": True}


def _alembic_heads() -> list[str]:
    # resolve against the project root so the check works from any CWD
    cfg = Config(str(_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(_ROOT / "alembic"))
    return list(ScriptDirectory.from_config(cfg).get_heads())


def _db_revision() -> Optional[str]:
    with engine.connect() as conn:
        if not inspect(conn).has_table("alembic_version"):
            return None
        return conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()


@router.get("/migrations")
def health_migrations():
    heads: list[str] = []
    try:
        heads = _alembic_heads()
    except Exception:
        pass

    try:
        db_ver = _db_revision()
    except Exception as e:
        return {
            "ok": False,
            "error": f"db_connect_failed: {e}",
            "code_heads": heads,
            "db_version": None,
        }

    synced = (db_ver in heads) if heads else False
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}
