from .session_records import Difficulty, SessionType, InterviewSessionRecord, ResumeReviewRecord
from .start_session import StartSessionRequest, StartSessionResponse
from .answer_feedback import AnswerSubmission, AnswerFeedbackResponse
from .session_views import (
    SessionSummaryResponse,
    IdealAnswerPair,
    IdealAnswersResponse,
    SessionDetailResponse,
    SessionListItem,
    Verdict
)

__all__ = [
    "Difficulty",
    "SessionType",
    "InterviewSessionRecord",
    "ResumeReviewRecord",
    "StartSessionRequest",
    "StartSessionResponse",
    "AnswerSubmission",
    "AnswerFeedbackResponse",
    "SessionSummaryResponse",
    "IdealAnswerPair",
    "IdealAnswersResponse",
    "SessionDetailResponse",
    "SessionListItem",
    "Verdict"
]
