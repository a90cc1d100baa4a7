"""
Health check endpoint for the application.

Description:
This module defines a FastAPI route for checking the health status of the
application and its database connection.

Arguments:
- request: An instance of Request, required for rate limiting.

Returns:
- A JSON response such as {"status": "ok", "database": "ok"}. A failing
  database ping reports status "degraded" instead of raising.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- sqlalchemy: For the database ping.
- app.core.route_limiters: For rate limiting functionality.
- app.schemas.health_response: For defining the response model.
- loguru: For logging information about the health check endpoint.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.route_limiters import limiter
from app.database import get_db_session
from app.schemas.health_response import HealthResponse
from loguru import logger

router = APIRouter(
    prefix="/api",
    tags=["health"],
    responses={404: {"description": "Not found"}}
)

@router.get("/health", response_model=HealthResponse)
@limiter.limit("10/minute")
async def health(request: Request, db: Session = Depends(get_db_session)):
    """
    Request parameter is required for rate limiting.
    """
    logger.info("Health check endpoint called")
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database ping failed: {e}")
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "ok", "database": "ok"}
