"""
Description:
Schemas for submitting an answer and receiving its score.

Dependencies:
- pydantic: For data validation and settings management.
"""
from pydantic import BaseModel, Field

class AnswerSubmission(BaseModel):
    question: str
    answer: str

class AnswerFeedbackResponse(BaseModel):
    feedback: str = Field(..., description="Raw feedback text returned by the model")
    score: int = Field(ge=0, le=10, description="Answer score between 0 and 10")
