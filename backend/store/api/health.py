from fastapi import APIRouter
from sqlalchemy import text

from store.db import engine
from store.utils.logs import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        log.exception("Database health check failed")

    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
    }
