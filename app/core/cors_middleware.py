"""
Description:
CORS setup for the FastAPI app. Allowed origins come from CORS_ORIGINS, a
comma separated list; the local frontend dev servers are allowed when it is
unset.

Dependencies:
- fastapi.middleware.cors: For CORS middleware functionality.
- loguru: For logging the configured origins.
"""
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

DEFAULT_ORIGINS = "http://localhost:3000,http://localhost:5173"


def allowed_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_ORIGINS)
    return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]


def add_cors_middleware(app: FastAPI):
    origins = allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS enabled for: {', '.join(origins)}")
