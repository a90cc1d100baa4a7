"""
Session Summary Module

Read-side views of interview sessions: the end-of-session summary with its
verdict, the full session detail and the caller's session list. Nothing here
calls the generative model.

Dependencies:
- app.services.session_store: For reading sessions.
- app.schemas.interview_schemas: For response models.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List
from app.errors.exceptions import SessionNotFound
from app.schemas.interview_schemas import (
    InterviewSessionRecord,
    SessionSummaryResponse,
    SessionDetailResponse,
    SessionListItem,
)
from app.services.session_store import SessionStore

STRONG_THRESHOLD = 7
AVERAGE_THRESHOLD = 5


def verdict_for(average_score: float) -> str:
    """Map an average score to its verdict label."""
    if average_score >= STRONG_THRESHOLD:
        return "Strong performance"
    if average_score >= AVERAGE_THRESHOLD:
        return "Average performance"
    return "Needs improvement"


def average_of(scores: List[int]) -> float:
    """Mean score rounded half up to one decimal, 0 when nothing was scored."""
    if not scores:
        return 0.0
    mean = Decimal(sum(scores)) / len(scores)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class SessionSummaryService:
    def __init__(self, store: SessionStore):
        self.store = store

    def _require_session(self, owner_id: str, session_id: str) -> InterviewSessionRecord:
        session = self.store.get_session(session_id, owner_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def summarize(self, owner_id: str, session_id: str) -> SessionSummaryResponse:
        """
        Summarize a session's scores.

        Raises:
            SessionNotFound: If the caller owns no session with that id
        """
        session = self._require_session(owner_id, session_id)
        average = average_of(session.scores)
        return SessionSummaryResponse(
            role=session.role_title,
            totalQuestions=len(session.questions),
            averageScore=average,
            scores=session.scores,
            verdict=verdict_for(average),
        )

    def get_detail(self, owner_id: str, session_id: str) -> SessionDetailResponse:
        session = self._require_session(owner_id, session_id)
        return SessionDetailResponse(
            id=session.id,
            role=session.role_title,
            type=session.session_type,
            date=session.created_at,
            questions=session.questions,
            answers=session.answers,
            scores=session.scores,
            feedbacks=session.feedback,
        )

    def list_sessions(self, owner_id: str) -> List[SessionListItem]:
        return [
            SessionListItem(
                id=session.id,
                role=session.role_title,
                type=session.session_type,
                date=session.created_at,
                questions=session.questions,
                scores=session.scores,
            )
            for session in self.store.list_sessions(owner_id)
        ]
