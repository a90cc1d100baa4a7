"""Resume Review Routes Module

This module defines FastAPI routes for resume assessment: uploading a resume
for ATS-style analysis, and listing, reading and deleting the caller's stored
reviews.

Dependencies:
- fastapi: For API routing, uploads and dependency injection.
- loguru: For logging operations.
- app.core.route_limiters: For rate limiting.
- app.core.dependencies: For per-request service assembly.
- app.services.auth.token_auth: For caller identity.
- app.errors.exceptions: For custom exception handling.
"""

from typing import List
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from loguru import logger
from app.core.route_limiters import limiter
from app.core.dependencies import get_review_service, get_resume_upload_service
from app.errors.exceptions import InternalServerError
from app.models.interview_models import ROLE_MAX_LENGTH
from app.schemas.resume_schemas import ResumeAnalysisResponse, ResumeReviewResponse
from app.services.auth.token_auth import get_current_owner_id
from app.services.resume.review_service import ResumeReviewService

router = APIRouter(
    prefix="/api/resume-reviews",
    tags=["resume-reviews"],
    responses={404: {"description": "Not found"}}
)

@router.post("", response_model=ResumeAnalysisResponse)
@limiter.limit("5/minute")
async def analyze_resume_route(
    request: Request,
    resume: UploadFile = File(...),
    targetRole: str = Form("", max_length=ROLE_MAX_LENGTH),
    owner_id: str = Depends(get_current_owner_id),
    service: ResumeReviewService = Depends(get_resume_upload_service)
):
    """Upload a resume and assess it against a target role.

    Raises:
        InvalidInput: If the target role is missing or the file unreadable
        UnsupportedFileType: If the file is not a PDF or plain text
        TextExtractionFailed: If text could not be extracted
        ValidationFailed: If the AI never returned a valid assessment
    """
    try:
        content = await resume.read()
        return await service.analyze_upload(
            owner_id=owner_id,
            content=content,
            filename=resume.filename,
            media_type=resume.content_type,
            target_role=targetRole,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in analyze resume endpoint")
        raise InternalServerError("An unexpected error occurred while analyzing the resume.") from e

@router.get("", response_model=List[ResumeReviewResponse])
async def list_reviews_route(
    request: Request,
    owner_id: str = Depends(get_current_owner_id),
    service: ResumeReviewService = Depends(get_review_service)
):
    """List the caller's resume reviews, newest first."""
    try:
        return service.list_reviews(owner_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in list resume reviews endpoint")
        raise InternalServerError("An unexpected error occurred while retrieving resume reviews.") from e

@router.get("/{review_id}", response_model=ResumeReviewResponse)
async def get_review_route(
    request: Request,
    review_id: str,
    owner_id: str = Depends(get_current_owner_id),
    service: ResumeReviewService = Depends(get_review_service)
):
    try:
        return service.get_review(owner_id, review_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in get resume review endpoint")
        raise InternalServerError("An unexpected error occurred while retrieving the resume review.") from e

@router.delete("/{review_id}")
async def delete_review_route(
    request: Request,
    review_id: str,
    owner_id: str = Depends(get_current_owner_id),
    service: ResumeReviewService = Depends(get_review_service)
):
    """Delete a review and its stored resume file."""
    try:
        return service.delete_review(owner_id, review_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled exception in delete resume review endpoint")
        raise InternalServerError("An unexpected error occurred while deleting the resume review.") from e
