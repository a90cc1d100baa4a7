"""Interview Models Module

This module defines SQLAlchemy models for interview practice sessions and
resume reviews. It provides the complete data model structure persisted by
the session store.

The module contains model classes that define the database schema for
interview sessions (with their index-aligned question, answer, score and
feedback histories) and for ATS-style resume reviews.

Dependencies:
- sqlalchemy: For ORM functionality and database modeling.
- datetime: For timestamp handling.
- typing: For type annotations.
"""

from typing import List
from sqlalchemy import String, DateTime, Integer, Text, JSON, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from datetime import datetime

ROLE_MAX_LENGTH = 200

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Provides the foundation for all database models in the application.
    """
    pass

class InterviewSession(Base):
    """Interview practice session record.

    Holds the questions asked in one interview run together with three
    histories that are aligned by index with the questions: the submitted
    answers, their integer scores (0-10) and the raw feedback text returned
    by the model.

    Attributes:
        id (str): Primary key, time-ordered opaque token
        owner_id (str): Identifier of the user who created the session
        role_title (str): Job role the questions were generated for
        session_type (str): "standard" or "resume-based"
        questions (List[str]): Ordered interview questions
        answers (List[str]): Submitted answers, one per answered question
        scores (List[int]): Score per submitted answer
        feedback (List[str]): Raw model feedback per submitted answer
        created_at (datetime): Timestamp when the session was opened
    """
    __tablename__ = "interviews"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(128), index=True)
    role_title: Mapped[str] = mapped_column(String(ROLE_MAX_LENGTH))
    session_type: Mapped[str] = mapped_column(String(50), default="standard")
    questions: Mapped[List[str]] = mapped_column(JSON, default=list)
    answers: Mapped[List[str]] = mapped_column(JSON, default=list)
    scores: Mapped[List[int]] = mapped_column(JSON, default=list)
    feedback: Mapped[List[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    def __repr__(self):
        return f"InterviewSession(id={self.id}, role={self.role_title}, type={self.session_type})"

class ResumeReview(Base):
    """Resume assessment record.

    Created once per successful resume analysis and never mutated. The
    uploaded file itself is owned by the file storage; only its reference is
    kept here so it can be removed together with the review.

    Attributes:
        id (str): Primary key, time-ordered opaque token
        owner_id (str): Identifier of the user who uploaded the resume
        target_role (str): Role the resume was assessed against
        ats_score (int): ATS compatibility estimate between 0 and 100
        keywords_matched (List[str]): Relevant skills/keywords found
        missing_skills (List[str]): Critical skills missing for the role
        formatting_issues (List[str]): Formatting, structure and writing issues
        stored_file_ref (str): Opaque handle of the uploaded artifact
        created_at (datetime): Timestamp when the review was created
    """
    __tablename__ = "resume_reviews"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(128), index=True)
    target_role: Mapped[str] = mapped_column(String(ROLE_MAX_LENGTH))
    ats_score: Mapped[int] = mapped_column(Integer)
    keywords_matched: Mapped[List[str]] = mapped_column(JSON, default=list)
    missing_skills: Mapped[List[str]] = mapped_column(JSON, default=list)
    formatting_issues: Mapped[List[str]] = mapped_column(JSON, default=list)
    stored_file_ref: Mapped[str] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    def __repr__(self):
        return f"ResumeReview(id={self.id}, role={self.target_role}, ats_score={self.ats_score})"
