"""
Description:
Response schemas for reading interview sessions back: summary, ideal answers
and the session detail/list views.

Dependencies:
- pydantic: For data validation and settings management.
"""
from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

Verdict = Literal["Strong performance", "Average performance", "Needs improvement"]

class SessionSummaryResponse(BaseModel):
    role: str
    totalQuestions: int
    averageScore: float
    scores: List[int]
    verdict: Verdict

class IdealAnswerPair(BaseModel):
    question: str
    idealAnswer: str

class IdealAnswersResponse(BaseModel):
    idealAnswers: List[IdealAnswerPair] = Field(default_factory=list)

class SessionDetailResponse(BaseModel):
    id: str
    role: str
    type: str
    date: Optional[datetime] = None
    questions: List[str]
    answers: List[str]
    scores: List[int]
    feedbacks: List[str]

class SessionListItem(BaseModel):
    id: str
    role: str
    type: str
    date: Optional[datetime] = None
    questions: List[str]
    scores: List[int]
