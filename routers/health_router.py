import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import settings
from core.database import database_version, get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Liveness plus database reachability; answers 503 instead of failing when the database is down."""
    body = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "database": {"status": "unknown", "version": None},
    }
    try:
        version = database_version(db)
    except SQLAlchemyError:
        logger.exception("Health check database query failed")
        body["status"] = "degraded"
        body["database"]["status"] = "disconnected"
        body["error"] = "Database unavailable"
        return JSONResponse(status_code=503, content=body)

    body["database"] = {"status": "connected", "version": version}
    return body
