"""Interview Session Routes Module

This module defines FastAPI routes for interview practice sessions: opening a
session, submitting answers, and reading back the summary, ideal answers and
session history. Every route is scoped to the authenticated owner.

Dependencies:
- fastapi: For API routing and dependency injection.
- loguru: For logging operations.
- app.core.route_limiters: For rate limiting.
- app.core.dependencies: For per-request service assembly.
- app.services.auth.token_auth: For caller identity.
- app.errors.exceptions: For custom exception handling.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from app.core.route_limiters import limiter
from app.core.dependencies import (
    get_question_generator,
    get_answer_evaluator,
    get_ideal_answer_synthesizer,
    get_session_summary_service,
)
from app.errors.exceptions import InternalServerError
from app.schemas.interview_schemas import (
    StartSessionRequest,
    StartSessionResponse,
    AnswerSubmission,
    AnswerFeedbackResponse,
    SessionSummaryResponse,
    IdealAnswersResponse,
    SessionDetailResponse,
    SessionListItem,
)
from app.services.auth.token_auth import get_current_owner_id
from app.services.interview.question_generator import QuestionGenerator
from app.services.interview.answer_evaluator import AnswerEvaluator
from app.services.interview.ideal_answer_synthesizer import IdealAnswerSynthesizer
from app.services.interview.session_summary import SessionSummaryService

router = APIRouter(
    prefix="/api/interviews",
    tags=["interviews"],
    responses={404: {"description": "Not found"}}
)

@router.post("", response_model=StartSessionResponse)
@limiter.limit("10/minute")
async def start_session_route(
    request: Request,
    body: StartSessionRequest,
    owner_id: str = Depends(get_current_owner_id),
    generator: QuestionGenerator = Depends(get_question_generator)
):
    """Open an interview session with generated or supplied questions.

    Raises:
        InvalidInput: If the request parameters are invalid
        UpstreamUnavailable: If the AI service could not be reached
        InternalServerError: If session creation fails unexpectedly
    """
    try:
        return await generator.start_session(
            owner_id=owner_id,
            role=body.role,
            difficulty=body.difficulty,
            question_count=body.questionCount,
            resume_context=body.resumeContext,
            passed_questions=body.passedQuestions,
            session_type=body.type,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in start interview endpoint")
        raise InternalServerError("An unexpected error occurred while starting the interview.") from e

@router.get("", response_model=List[SessionListItem])
async def list_sessions_route(
    request: Request,
    owner_id: str = Depends(get_current_owner_id),
    summaries: SessionSummaryService = Depends(get_session_summary_service)
):
    """List the caller's interview sessions, newest first."""
    try:
        return summaries.list_sessions(owner_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in list interviews endpoint")
        raise InternalServerError("An unexpected error occurred while retrieving interviews.") from e

@router.get("/{session_id}", response_model=SessionDetailResponse)
async def get_session_route(
    request: Request,
    session_id: str,
    owner_id: str = Depends(get_current_owner_id),
    summaries: SessionSummaryService = Depends(get_session_summary_service)
):
    """Return one session with its full answer, score and feedback history."""
    try:
        return summaries.get_detail(owner_id, session_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in get interview endpoint")
        raise InternalServerError("An unexpected error occurred while retrieving the interview.") from e

@router.post("/{session_id}/answers", response_model=AnswerFeedbackResponse)
@limiter.limit("20/minute")
async def submit_answer_route(
    request: Request,
    session_id: str,
    body: AnswerSubmission,
    owner_id: str = Depends(get_current_owner_id),
    evaluator: AnswerEvaluator = Depends(get_answer_evaluator)
):
    """Score one answer and append it to the session.

    Raises:
        SessionNotFound: If the caller owns no such session
        InvalidInput: If the answer is empty or the session is complete
        UpstreamUnavailable: If the AI service could not be reached
    """
    try:
        return await evaluator.submit_answer(owner_id, session_id, body.question, body.answer)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in answer endpoint")
        raise InternalServerError("An unexpected error occurred while scoring the answer.") from e

@router.get("/{session_id}/summary", response_model=SessionSummaryResponse)
async def session_summary_route(
    request: Request,
    session_id: str,
    owner_id: str = Depends(get_current_owner_id),
    summaries: SessionSummaryService = Depends(get_session_summary_service)
):
    """Summarize the session's scores with a verdict."""
    try:
        return summaries.summarize(owner_id, session_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in interview summary endpoint")
        raise InternalServerError("An unexpected error occurred while summarizing the interview.") from e

@router.post("/{session_id}/ideal-answers", response_model=IdealAnswersResponse)
@limiter.limit("10/minute")
async def ideal_answers_route(
    request: Request,
    session_id: str,
    owner_id: str = Depends(get_current_owner_id),
    synthesizer: IdealAnswerSynthesizer = Depends(get_ideal_answer_synthesizer)
):
    """Generate reference answers for every question in the session.

    Only an unknown session is reported as an error; model failures fall
    back to placeholder answers.
    """
    try:
        return await synthesizer.synthesize(owner_id, session_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in ideal answers endpoint")
        raise InternalServerError("An unexpected error occurred while generating ideal answers.") from e
