"""
Shared pytest fixtures.

The environment is configured before any application module is imported so
that the rate limiter starts disabled and token verification has a secret.
Every test gets its own in-memory SQLite database and a scripted generative
client that replays canned completions instead of calling the network.
"""

import asyncio
import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-for-signing-bearer-tokens")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.models.interview_models import Base
from app.services.session_store import SqlSessionStore


class StubGenerativeClient:
    """
    GenerativeClient replaying scripted completions.

    Each entry is either a completion string or an exception instance to
    raise. The last entry repeats once the script runs out.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [""]
        self.calls = []

    async def complete(self, system_prompt, user_prompt, max_tokens=512, temperature=0.7):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        # Yield to the event loop like a real network call would
        await asyncio.sleep(0)
        index = min(len(self.calls) - 1, len(self.responses) - 1)
        response = self.responses[index]
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_session):
    return SqlSessionStore(db_session)


@pytest.fixture
def scripted_client():
    """Factory fixture: scripted_client("1. Q?", UpstreamUnavailable()) -> StubGenerativeClient."""
    return StubGenerativeClient
