import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sheetapi.database.session import get_db
from sheetapi.schemas.health import HealthCheckResponse

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request, db: Session = Depends(get_db)) -> HealthCheckResponse:
    """Health check endpoint."""
    response = HealthCheckResponse()

    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Health check database ping failed: {e}")
        response.status = "degraded"
        response.database = "unavailable"

    scheduler = getattr(request.app.state, "weekly_reward_scheduler", None)
    if scheduler is not None and scheduler.running:
        response.weekly_reward_scheduler = "running"

    return response
