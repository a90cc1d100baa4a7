"""
Description:
Schemas for ATS-style resume assessment. ResumeAssessment is the exact shape
the model is asked to produce; an attempt whose JSON does not validate against
it is discarded.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class ResumeAssessment(BaseModel):
    atsScore: int = Field(..., ge=0, le=100, description="ATS compatibility score between 0 and 100")
    keywordsMatched: List[str] = Field(..., description="Relevant skills/keywords found")
    missingSkills: List[str] = Field(..., description="Critical skills missing for the role")
    formattingIssues: List[str] = Field(..., description="Formatting, structure, ATS and grammatical issues")

class ResumeAnalysisResponse(ResumeAssessment):
    reviewId: str
    extractedText: str = Field(..., description="Normalized text that was analyzed")

class ResumeReviewResponse(ResumeAssessment):
    id: str
    role: str
    date: Optional[datetime] = None
    fileRef: Optional[str] = None
