from .resume_assessment import ResumeAssessment, ResumeAnalysisResponse, ResumeReviewResponse

__all__ = [
    "ResumeAssessment",
    "ResumeAnalysisResponse",
    "ResumeReviewResponse"
]
