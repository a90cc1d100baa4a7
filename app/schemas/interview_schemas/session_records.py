"""
Session Record Schemas

This module defines the typed records the session store hands out. They are
detached from the ORM so services never hold a live database row.

Dependencies:
- pydantic: For data validation and ORM conversion.
- typing: For type hints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class Difficulty(str, Enum):
    """Question difficulty level."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class SessionType(str, Enum):
    """Kind of interview session."""
    STANDARD = "standard"
    RESUME_BASED = "resume-based"


class InterviewSessionRecord(BaseModel):
    """One interview run with its index-aligned histories."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    role_title: str
    session_type: str = SessionType.STANDARD.value
    questions: List[str] = Field(default_factory=list)
    answers: List[str] = Field(default_factory=list)
    scores: List[int] = Field(default_factory=list)
    feedback: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    def answered_count(self) -> int:
        """Number of questions that already have an answer."""
        return len(self.answers)

    def is_complete(self) -> bool:
        """Check if every question has been answered."""
        return len(self.answers) >= len(self.questions)


class ResumeReviewRecord(BaseModel):
    """A persisted resume assessment."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    target_role: str
    ats_score: int = Field(..., ge=0, le=100)
    keywords_matched: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    formatting_issues: List[str] = Field(default_factory=list)
    stored_file_ref: Optional[str] = None
    created_at: Optional[datetime] = None
