"""
Description:
Schemas for opening an interview session.

Dependencies:
- pydantic: For data validation and settings management.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from app.models.interview_models import ROLE_MAX_LENGTH
from app.schemas.interview_schemas.session_records import Difficulty, SessionType

class StartSessionRequest(BaseModel):
    role: Optional[str] = Field(default=None, max_length=ROLE_MAX_LENGTH, description="Job role to interview for")
    difficulty: Difficulty = Field(default=Difficulty.BEGINNER)
    questionCount: int = Field(default=3, ge=1, description="Requested number of questions (a hint)")
    resumeContext: Optional[str] = Field(default=None, description="Resume text to tailor questions to")
    passedQuestions: Optional[List[str]] = Field(default=None, description="Questions to use verbatim")
    type: SessionType = Field(default=SessionType.STANDARD)

class StartSessionResponse(BaseModel):
    interviewId: str
    questions: List[str]
