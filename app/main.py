"""
Application entry point.

Builds the FastAPI app: table creation on startup, CORS, centralized error
handlers, the rate limiter and its middleware, the per-session lock registry
shared by answer submissions, and the health, interview and resume review
routers.

Run with: uvicorn app.main:app
"""
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import IntegrityError
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY

from app.core.cors_middleware import add_cors_middleware
from app.core.route_limiters import limiter
from app.core.session_locks import SessionLockRegistry
from app.database import create_tables
from app.errors.handlers import http_exception_handler, generic_exception_handler, database_integrity_handler
from app.routes.health import router as health_router
from app.routes.interview_sessions import router as interview_sessions_router
from app.routes.resume_reviews import router as resume_reviews_router

load_dotenv()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup; nothing to release on shutdown."""
    try:
        create_tables()
    except Exception as e:
        logger.error(f"Error during application startup: {e}")
        raise
    logger.info("Interview coach service started")
    yield
    logger.info("Interview coach service stopped")

app = FastAPI(
    title="Interview Coach AI Service",
    description="Interview practice sessions and resume assessment backed by a generative model",
    version="0.1.0",
    lifespan=lifespan
)
app.state.session_locks = SessionLockRegistry()
app.state.limiter = limiter

app.add_middleware(SlowAPIMiddleware)
add_cors_middleware(app)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(IntegrityError, database_integrity_handler)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(Exception, generic_exception_handler)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )

for router in (health_router, interview_sessions_router, resume_reviews_router):
    app.include_router(router)
