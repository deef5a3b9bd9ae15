"""Pydantic schemas for transcription endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.interview import InterviewResponse


class LoadTranscriptionRequest(BaseModel):
    interview_id: int
    csv_text: str


class LoadTranscriptionResponse(BaseModel):
    success: bool = True
    count: int
    message: str


class SegmentResponse(BaseModel):
    id: int
    entrevista_id: int
    id_segmento: int
    timestamp: str | None = None
    rol: str
    texto_original: str
    texto_normalizado: str
    nivel_confianza: int
    fecha_creacion: datetime | None = None

    model_config = {"from_attributes": True}


class SegmentListResponse(BaseModel):
    items: list[SegmentResponse]
    total: int


class InterviewWithCount(BaseModel):
    entrevista: InterviewResponse
    cantidad_segmentos: int


class InterviewCountListResponse(BaseModel):
    items: list[InterviewWithCount]
    total: int


# --- Review ---


class ReviewRequest(BaseModel):
    csv_text: str
    interviewee_id: int | None = None
    researcher_id: int | None = None
    idioma: str = Field(default="es-ES", max_length=16)


class ReviewIssueResponse(BaseModel):
    type: str
    message: str
    details: str | None = None


class SegmentIssuesResponse(BaseModel):
    id: str
    row: dict[str, str]
    errors: list[str] = []
    warnings: list[str] = []


class ReviewStatsResponse(BaseModel):
    total_segments: int
    roles_distribution: dict[str, int]
    confidence_levels: dict[str, int]
    average_original_length: int
    average_normalized_length: int
    missing_timestamps: int


class ReviewResponse(BaseModel):
    is_valid: bool
    blocking_errors: list[ReviewIssueResponse]
    warnings: list[ReviewIssueResponse]
    stats: ReviewStatsResponse
    segments_with_issues: list[SegmentIssuesResponse]

    model_config = {"from_attributes": True}
