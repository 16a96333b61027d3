"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session

from ..db.session import get_session

router = APIRouter()


@router.get("/health")
def health_check():
    """
    Liveness probe. Returns 200 OK if the service is running.
    """
    return {"status": "healthy", "service": "task-manager"}


@router.get("/ready")
def readiness_check(session: Session = Depends(get_session)):
    """
    Readiness probe. Returns 200 OK once the database answers a trivial query.
    """
    session.connection().execute(text("SELECT 1"))
    return {"status": "ready", "service": "task-manager"}
