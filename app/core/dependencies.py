"""
Description:
FastAPI dependencies that assemble the services for one request. Each request
gets a store bound to its own database session; the generative client, the
file storage and the per-session lock registry are shared.

Dependencies:
- fastapi: For dependency injection.
- sqlalchemy: For the request-scoped database session.
"""
from functools import lru_cache
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from app.core.ai_client_manager import GenerativeClient, get_generative_client
from app.core.session_locks import SessionLockRegistry
from app.database import get_db_session
from app.services.session_store import SessionStore, SqlSessionStore
from app.services.interview.question_generator import QuestionGenerator
from app.services.interview.answer_evaluator import AnswerEvaluator
from app.services.interview.ideal_answer_synthesizer import IdealAnswerSynthesizer
from app.services.interview.session_summary import SessionSummaryService
from app.services.resume.file_storage import FileStorage, LocalFileStorage
from app.services.resume.resume_analyzer import ResumeAnalyzer
from app.services.resume.review_service import ResumeReviewService


def get_session_store(db: Session = Depends(get_db_session)) -> SessionStore:
    return SqlSessionStore(db)

def get_session_locks(request: Request) -> SessionLockRegistry:
    return request.app.state.session_locks

@lru_cache
def get_file_storage() -> FileStorage:
    return LocalFileStorage()

def get_question_generator(store: SessionStore = Depends(get_session_store), client: GenerativeClient = Depends(get_generative_client)) -> QuestionGenerator:
    return QuestionGenerator(store, client)

def get_answer_evaluator(
    store: SessionStore = Depends(get_session_store),
    client: GenerativeClient = Depends(get_generative_client),
    locks: SessionLockRegistry = Depends(get_session_locks)
) -> AnswerEvaluator:
    return AnswerEvaluator(store, client, locks)

def get_ideal_answer_synthesizer(store: SessionStore = Depends(get_session_store), client: GenerativeClient = Depends(get_generative_client)) -> IdealAnswerSynthesizer:
    return IdealAnswerSynthesizer(store, client)

def get_session_summary_service(store: SessionStore = Depends(get_session_store)) -> SessionSummaryService:
    return SessionSummaryService(store)

def get_review_service(store: SessionStore = Depends(get_session_store), file_storage: FileStorage = Depends(get_file_storage)) -> ResumeReviewService:
    return ResumeReviewService(store, file_storage)

def get_resume_upload_service(
    store: SessionStore = Depends(get_session_store),
    file_storage: FileStorage = Depends(get_file_storage),
    client: GenerativeClient = Depends(get_generative_client)
) -> ResumeReviewService:
    return ResumeReviewService(store, file_storage, analyzer=ResumeAnalyzer(store, client))
