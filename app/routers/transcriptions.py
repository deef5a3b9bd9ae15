"""Transcription load, review and overview endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from app.dependencies import get_gateway, unwrap
from app.gateway import Gateway
from app.schemas.transcription import (
    InterviewCountListResponse,
    LoadTranscriptionRequest,
    LoadTranscriptionResponse,
    ReviewRequest,
    ReviewResponse,
)
from app.services.csv_review import review_csv
from app.services.interview import get_interview_service
from app.services.transcription import get_transcription_service

router = APIRouter(prefix="/api/v1/transcriptions", tags=["Transcriptions"])


@router.get("/", response_model=InterviewCountListResponse)
def list_interviews_with_counts(gateway: Gateway = Depends(get_gateway)) -> InterviewCountListResponse:
    """List interviews with the number of loaded segments of each."""
    result = unwrap(get_transcription_service().list_interviews_with_counts(gateway))
    return InterviewCountListResponse(items=result.data, total=result.count)


@router.post("/load", response_model=LoadTranscriptionResponse)
def load_transcription(body: LoadTranscriptionRequest, gateway: Gateway = Depends(get_gateway)) -> LoadTranscriptionResponse:
    """Bulk-load CSV text as the segments of an existing interview."""
    unwrap(get_interview_service().get(gateway, body.interview_id))
    result = unwrap(get_transcription_service().load_csv(gateway, body.interview_id, body.csv_text))
    return LoadTranscriptionResponse(count=result.count, message=result.message)


@router.post("/review", response_model=ReviewResponse)
def review_transcription(body: ReviewRequest, gateway: Gateway = Depends(get_gateway)) -> ReviewResponse:
    """Check a transcription CSV before loading it. Nothing is stored."""
    result = unwrap(review_csv(gateway, body.csv_text, body.interviewee_id, body.researcher_id, body.idioma))
    return ReviewResponse.model_validate(asdict(result.data))
