# expense_backend/routers/system.py
# Bootstrap and health check endpoints

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import __version__, bootstrap, models, schemas
from ..dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/init", response_model=schemas.MessageResponse)
def init_database(db: Session = Depends(get_db)):
    """Create tables and seed demo data. Safe to call repeatedly."""
    result = bootstrap.initialize(db)
    db.commit()
    logger.info("Database initialized: %s", result)
    return schemas.MessageResponse(message="Database initialized successfully")


@router.get("/health", response_model=schemas.HealthResponse)
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        db.rollback()
        database = "unavailable"

    return schemas.HealthResponse(
        status="healthy" if database == "connected" else "degraded",
        timestamp=models.server_now(),
        version=__version__,
        database=database,
    )
