"""
Resume Analyzer Module

This module produces a structured ATS-style assessment of a resume for a
target role and records it as a ResumeReview.

The extracted text is normalized and capped at 4000 characters before it is
sent. The model must answer with a JSON object holding atsScore (0-100) and
the keywordsMatched, missingSkills and formattingIssues lists; responses that
contain no such object, or whose object fails validation, are discarded and
the call is repeated, up to three attempts. When every attempt fails the
caller gets ValidationFailed. Unlike ideal answers there is no fallback.

Dependencies:
- loguru: For logging operations.
- app.core.ai_client_manager: For the GenerativeClient boundary.
- app.core.secure_prompt_manager: For the assessment prompt.
- app.helper.parse_model_output: For normalization and JSON validation.
- app.helper.retry: For the bounded retry fold.
- app.services.session_store: For persisting the review.
"""

from typing import Optional
from loguru import logger
from app.core.ai_client_manager import GenerativeClient
from app.core.secure_prompt_manager import secure_prompt_manager, RESUME_CONTEXT_LIMIT
from app.errors.exceptions import InvalidInput, UpstreamUnavailable
from app.helper.parse_model_output import normalize_resume_text, parse_resume_assessment
from app.helper.retry import retry_until_valid, MAX_ATTEMPTS
from app.schemas.model_output import RawText, ParseError
from app.schemas.resume_schemas import ResumeAnalysisResponse, ResumeAssessment
from app.services.session_store import SessionStore


class ResumeAnalyzer:
    """
    Assesses resume text against a target role and records the review.
    """

    def __init__(self, store: SessionStore, client: GenerativeClient, max_attempts: int = MAX_ATTEMPTS):
        self.store = store
        self.client = client
        self.max_attempts = max_attempts

    async def analyze(self, owner_id: str, extracted_text: str, target_role: str, stored_file_ref: Optional[str] = None) -> ResumeAnalysisResponse:
        """
        Analyze a resume and persist the assessment.

        Args:
            owner_id (str): Identifier of the uploading user
            extracted_text (str): Resume text from the extraction step
            target_role (str): Role to assess the resume against
            stored_file_ref (str, optional): Reference of the stored upload

        Returns:
            ResumeAnalysisResponse: The assessment, the new review id and the
                normalized text that was analyzed

        Raises:
            InvalidInput: If the target role or the text is blank
            ValidationFailed: If no attempt produced a valid assessment
        """
        if not target_role or not target_role.strip():
            raise InvalidInput("Target job role is required")
        target_role = target_role.strip()

        resume_text = normalize_resume_text(extracted_text, limit=RESUME_CONTEXT_LIMIT)
        if not resume_text:
            raise InvalidInput("Resume text is empty")
        logger.info(f"[Resume Analysis] Text cleaned. Final length: {len(resume_text)} characters")

        assessment = await self._assess(target_role, resume_text)

        review = self.store.create_review(
            owner_id=owner_id,
            target_role=target_role,
            ats_score=assessment.atsScore,
            keywords_matched=assessment.keywordsMatched,
            missing_skills=assessment.missingSkills,
            formatting_issues=assessment.formattingIssues,
            stored_file_ref=stored_file_ref,
        )
        return ResumeAnalysisResponse(
            **assessment.model_dump(),
            reviewId=review.id,
            extractedText=resume_text,
        )

    async def _assess(self, target_role: str, resume_text: str) -> ResumeAssessment:
        try:
            system_prompt, user_prompt = secure_prompt_manager.get_resume_analysis_prompt(target_role, resume_text)
        except ValueError as e:
            raise InvalidInput("Target job role and resume must contain readable text") from e

        async def attempt(n: int):
            try:
                text = await self.client.complete(system_prompt, user_prompt, max_tokens=1024, temperature=0.2)
            except UpstreamUnavailable as e:
                return ParseError(reason=str(e.detail))
            return parse_resume_assessment(RawText(text))

        return await retry_until_valid(attempt, self.max_attempts, label="Resume Analysis")
