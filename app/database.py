"""Database Engine and Session Module

Builds the SQLAlchemy engine from DATABASE_URL and hands out one session per
request. PostgreSQL is used when DATABASE_URL points at it; without it the
service falls back to a SQLite file in the working directory, which is enough
for local development.

Dependencies:
- sqlalchemy: For database ORM and connection management.
- dotenv: For environment variable loading.
- loguru: For logging operations.
- app.models.interview_models: For the table metadata.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv
import os
from loguru import logger
from app.models.interview_models import Base
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./database.db")
# Hosted Postgres providers still issue the legacy "postgres://" scheme
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql+psycopg2://", 1)


def build_engine(database_url: str):
    """Create an engine tuned for the target backend.

    SQLite connections are shared across FastAPI's worker threads; server
    databases get a pool that checks and recycles connections.
    """
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=300
    )


engine = build_engine(DATABASE_URL)
# Records are converted to pydantic models after commit, so attributes must stay loaded
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db_session():
    """Yield a request-scoped database session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def create_tables():
    """Create the interviews and resume_reviews tables if they are missing.

    Called once from the application lifespan on startup.
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Database ready ({engine.url.get_backend_name()})")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise
