"""Session Store Module

This module provides the durable record of interview sessions and resume
reviews. Services receive a SessionStore explicitly instead of reaching for a
process-wide database handle, which keeps them testable against an in-memory
database.

The store exposes create, owner-scoped read and a full write of a session's
answer histories. It refuses any write that would break the alignment
invariant `len(answers) == len(scores) == len(feedback) <= len(questions)`.

Dependencies:
- sqlalchemy: For database operations and session management.
- loguru: For logging operations.
- app.models.interview_models: For InterviewSession and ResumeReview database models.
- app.schemas.interview_schemas: For detached record types.
"""

import time
import uuid
from typing import List, Optional, Protocol
from sqlalchemy import select
from sqlalchemy.orm import Session
from loguru import logger
from app.models.interview_models import InterviewSession, ResumeReview
from app.schemas.interview_schemas import InterviewSessionRecord, ResumeReviewRecord, SessionType


def new_record_id() -> str:
    """Generate a time-ordered opaque record id."""
    return f"{time.time_ns()}-{uuid.uuid4().hex[:8]}"


class SessionStore(Protocol):
    def create_session(self, owner_id: str, role_title: str, questions: List[str], session_type: str = SessionType.STANDARD.value) -> InterviewSessionRecord: ...

    def get_session(self, session_id: str, owner_id: str) -> Optional[InterviewSessionRecord]: ...

    def list_sessions(self, owner_id: str) -> List[InterviewSessionRecord]: ...

    def write_histories(self, session_id: str, answers: List[str], scores: List[int], feedback: List[str]) -> InterviewSessionRecord: ...

    def create_review(self, owner_id: str, target_role: str, ats_score: int, keywords_matched: List[str], missing_skills: List[str], formatting_issues: List[str], stored_file_ref: Optional[str]) -> ResumeReviewRecord: ...

    def get_review(self, review_id: str, owner_id: str) -> Optional[ResumeReviewRecord]: ...

    def list_reviews(self, owner_id: str) -> List[ResumeReviewRecord]: ...

    def delete_review(self, review_id: str, owner_id: str) -> Optional[ResumeReviewRecord]: ...


class SqlSessionStore:
    """SessionStore backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def create_session(self, owner_id: str, role_title: str, questions: List[str], session_type: str = SessionType.STANDARD.value) -> InterviewSessionRecord:
        """Open a new interview session with empty histories.

        Args:
            owner_id (str): Identifier of the creating user
            role_title (str): Job role the session targets
            questions (List[str]): Ordered interview questions
            session_type (str): "standard" or "resume-based"

        Returns:
            InterviewSessionRecord: The persisted session
        """
        session = InterviewSession(
            id=new_record_id(),
            owner_id=str(owner_id),
            role_title=role_title,
            session_type=session_type,
            questions=list(questions),
            answers=[],
            scores=[],
            feedback=[],
        )
        try:
            self.db.add(session)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(session)
        logger.info(f"Created interview session {session.id} with {len(session.questions)} questions")
        return InterviewSessionRecord.model_validate(session)

    def _find_session(self, session_id: str, owner_id: str) -> Optional[InterviewSession]:
        stmt = select(InterviewSession).where(
            InterviewSession.id == session_id,
            InterviewSession.owner_id == str(owner_id),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_session(self, session_id: str, owner_id: str) -> Optional[InterviewSessionRecord]:
        session = self._find_session(session_id, owner_id)
        if session is None:
            return None
        return InterviewSessionRecord.model_validate(session)

    def list_sessions(self, owner_id: str) -> List[InterviewSessionRecord]:
        stmt = (
            select(InterviewSession)
            .where(InterviewSession.owner_id == str(owner_id))
            .order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc())
        )
        return [InterviewSessionRecord.model_validate(row) for row in self.db.execute(stmt).scalars()]

    def write_histories(self, session_id: str, answers: List[str], scores: List[int], feedback: List[str]) -> InterviewSessionRecord:
        """Replace a session's answer, score and feedback histories.

        This is a full write: the caller passes the complete recomputed
        lists, not a delta.

        Args:
            session_id (str): Session to update
            answers (List[str]): Complete answers history
            scores (List[int]): Complete scores history
            feedback (List[str]): Complete feedback history

        Returns:
            InterviewSessionRecord: The updated session

        Raises:
            LookupError: If the session does not exist
            ValueError: If the histories are not aligned with each other or
                outnumber the questions
        """
        session = self.db.get(InterviewSession, session_id)
        if session is None:
            raise LookupError(f"Interview session {session_id} does not exist")
        if not (len(answers) == len(scores) == len(feedback)):
            raise ValueError("answers, scores and feedback must have the same length")
        if len(answers) > len(session.questions):
            raise ValueError("Cannot record more answers than questions")

        # JSON columns are only flagged dirty on reassignment
        session.answers = list(answers)
        session.scores = [int(score) for score in scores]
        session.feedback = list(feedback)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(session)
        return InterviewSessionRecord.model_validate(session)

    def create_review(self, owner_id: str, target_role: str, ats_score: int, keywords_matched: List[str], missing_skills: List[str], formatting_issues: List[str], stored_file_ref: Optional[str]) -> ResumeReviewRecord:
        if not 0 <= ats_score <= 100:
            raise ValueError("ats_score must be between 0 and 100")
        review = ResumeReview(
            id=new_record_id(),
            owner_id=str(owner_id),
            target_role=target_role,
            ats_score=ats_score,
            keywords_matched=list(keywords_matched),
            missing_skills=list(missing_skills),
            formatting_issues=list(formatting_issues),
            stored_file_ref=stored_file_ref,
        )
        try:
            self.db.add(review)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(review)
        logger.info(f"Created resume review {review.id} (ATS score {review.ats_score})")
        return ResumeReviewRecord.model_validate(review)

    def _find_review(self, review_id: str, owner_id: str) -> Optional[ResumeReview]:
        stmt = select(ResumeReview).where(
            ResumeReview.id == review_id,
            ResumeReview.owner_id == str(owner_id),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_review(self, review_id: str, owner_id: str) -> Optional[ResumeReviewRecord]:
        review = self._find_review(review_id, owner_id)
        if review is None:
            return None
        return ResumeReviewRecord.model_validate(review)

    def list_reviews(self, owner_id: str) -> List[ResumeReviewRecord]:
        stmt = (
            select(ResumeReview)
            .where(ResumeReview.owner_id == str(owner_id))
            .order_by(ResumeReview.created_at.desc(), ResumeReview.id.desc())
        )
        return [ResumeReviewRecord.model_validate(row) for row in self.db.execute(stmt).scalars()]

    def delete_review(self, review_id: str, owner_id: str) -> Optional[ResumeReviewRecord]:
        """Delete a review as a whole record.

        Returns:
            Optional[ResumeReviewRecord]: The deleted review, or None if no
                review with that id belongs to the owner
        """
        review = self._find_review(review_id, owner_id)
        if review is None:
            return None
        record = ResumeReviewRecord.model_validate(review)
        try:
            self.db.delete(review)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Deleted resume review {review_id}")
        return record
