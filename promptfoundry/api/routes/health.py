from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.orm import Session

from promptfoundry.db.session import get_db


router = APIRouter()


@router.get("/healthz")
def health() -> dict:
    """Liveness probe - always returns 200 if app is running."""
    return {"ok": True}


@router.get("/ready")
def readiness(response: Response, db: Session = Depends(get_db)) -> dict:
    """Readiness probe - returns 503 if the store is unavailable."""
    try:
        db.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception as e:
        response.status_code = 503
        return {"ok": False, "error": str(e)}
