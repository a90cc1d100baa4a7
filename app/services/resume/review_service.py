"""
Resume Review Service Module

Ties the resume upload flow together (extract text, store the file, analyze)
and serves the caller's stored reviews. Deleting a review also deletes the
stored file it points at.

Dependencies:
- loguru: For logging operations.
- app.services.resume.text_extraction: For extracting upload text.
- app.services.resume.file_storage: For the stored upload.
- app.services.resume.resume_analyzer: For the assessment.
- app.services.session_store: For review records.
"""

from typing import List, Optional
from loguru import logger
from app.errors.exceptions import InvalidInput, ReviewNotFound
from app.schemas.interview_schemas import ResumeReviewRecord
from app.schemas.resume_schemas import ResumeAnalysisResponse, ResumeReviewResponse
from app.services.resume.file_storage import FileStorage
from app.services.resume.resume_analyzer import ResumeAnalyzer
from app.services.resume.text_extraction import TextExtractionDispatcher
from app.services.session_store import SessionStore


def to_review_response(review: ResumeReviewRecord) -> ResumeReviewResponse:
    return ResumeReviewResponse(
        id=review.id,
        role=review.target_role,
        date=review.created_at,
        fileRef=review.stored_file_ref,
        atsScore=review.ats_score,
        keywordsMatched=review.keywords_matched,
        missingSkills=review.missing_skills,
        formattingIssues=review.formatting_issues,
    )


class ResumeReviewService:
    def __init__(self, store: SessionStore, file_storage: FileStorage, analyzer: Optional[ResumeAnalyzer] = None, extraction: Optional[TextExtractionDispatcher] = None):
        self.store = store
        self.file_storage = file_storage
        self.analyzer = analyzer
        self.extraction = extraction or TextExtractionDispatcher()

    async def analyze_upload(self, owner_id: str, content: bytes, filename: Optional[str], media_type: Optional[str], target_role: Optional[str]) -> ResumeAnalysisResponse:
        """
        Run the full upload flow for one resume file.

        The file is only kept when the analysis succeeds; on any failure the
        stored copy is removed again before the error propagates.

        Raises:
            InvalidInput: If the target role is missing or the text too short
            UnsupportedFileType: If the file type cannot be read
            TextExtractionFailed: If text extraction failed
            ValidationFailed: If the model never produced a valid assessment
        """
        if self.analyzer is None:
            raise RuntimeError("ResumeReviewService was built without an analyzer")
        if not target_role or not target_role.strip():
            raise InvalidInput("Target job role is required")

        extracted_text = self.extraction.extract(content, filename, media_type)
        file_ref = self.file_storage.save(content, filename or "")
        try:
            return await self.analyzer.analyze(owner_id, extracted_text, target_role, stored_file_ref=file_ref)
        except Exception:
            logger.warning(f"Resume analysis failed, removing stored upload {file_ref}")
            self.file_storage.delete(file_ref)
            raise

    def get_review(self, owner_id: str, review_id: str) -> ResumeReviewResponse:
        review = self.store.get_review(review_id, owner_id)
        if review is None:
            raise ReviewNotFound(review_id)
        return to_review_response(review)

    def list_reviews(self, owner_id: str) -> List[ResumeReviewResponse]:
        return [to_review_response(review) for review in self.store.list_reviews(owner_id)]

    def delete_review(self, owner_id: str, review_id: str) -> dict:
        """
        Delete a review together with its stored file.

        Raises:
            ReviewNotFound: If the caller owns no review with that id
        """
        review = self.store.delete_review(review_id, owner_id)
        if review is None:
            raise ReviewNotFound(review_id)
        file_deleted = False
        if review.stored_file_ref:
            file_deleted = self.file_storage.delete(review.stored_file_ref)
        return {"message": "Resume review deleted successfully", "fileDeleted": file_deleted}
