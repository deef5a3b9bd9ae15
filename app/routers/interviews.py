"""Interview API endpoints, including the per-interview transcription upload."""

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile
from fastapi.responses import PlainTextResponse

from app.config import get_settings
from app.dependencies import get_gateway, unwrap
from app.gateway import Gateway
from app.schemas.common import DeleteResponse
from app.schemas.interview import InterviewListResponse, InterviewRequest, InterviewResponse, NextNumberResponse
from app.schemas.transcription import LoadTranscriptionResponse, SegmentListResponse
from app.services.interview import get_interview_service
from app.services.transcription import get_transcription_service

router = APIRouter(prefix="/api/v1/interviews", tags=["Interviews"])

ALLOWED_CSV_EXTENSIONS = (".csv", ".txt")


@router.get("/", response_model=InterviewListResponse)
def list_interviews(gateway: Gateway = Depends(get_gateway)) -> InterviewListResponse:
    """List interviews, most recent first."""
    result = unwrap(get_interview_service().list_all(gateway))
    return InterviewListResponse(items=result.data, total=result.count)


@router.get("/next-number", response_model=NextNumberResponse)
def next_interview_number(
    code_base: str = Query(min_length=1, max_length=32),
    gateway: Gateway = Depends(get_gateway),
) -> NextNumberResponse:
    """Suggest the sequence number for a new interview code starting with ``code_base``."""
    result = unwrap(get_interview_service().next_number(gateway, code_base))
    return NextNumberResponse(**result.data)


@router.post("/", response_model=InterviewResponse, status_code=201)
def create_interview(body: InterviewRequest, gateway: Gateway = Depends(get_gateway)) -> InterviewResponse:
    result = unwrap(get_interview_service().create(gateway, body.model_dump()))
    return InterviewResponse.model_validate(result.data)


@router.get("/{interview_id}", response_model=InterviewResponse)
def get_interview(interview_id: int, gateway: Gateway = Depends(get_gateway)) -> InterviewResponse:
    result = unwrap(get_interview_service().get(gateway, interview_id))
    return InterviewResponse.model_validate(result.data)


@router.put("/{interview_id}", response_model=InterviewResponse)
def update_interview(
    interview_id: int,
    body: InterviewRequest,
    gateway: Gateway = Depends(get_gateway),
) -> InterviewResponse:
    result = unwrap(get_interview_service().update(gateway, interview_id, body.model_dump()))
    return InterviewResponse.model_validate(result.data)


@router.delete("/{interview_id}", response_model=DeleteResponse)
def delete_interview(interview_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    """Delete an interview that has no transcription segments."""
    result = unwrap(get_interview_service().delete(gateway, interview_id))
    return DeleteResponse(detail="Interview deleted", count=result.count)


# --- Transcriptions of one interview ---


@router.post("/{interview_id}/transcriptions", response_model=LoadTranscriptionResponse)
async def upload_transcription(
    interview_id: int,
    file: UploadFile,
    gateway: Gateway = Depends(get_gateway),
) -> LoadTranscriptionResponse:
    """Upload a transcription CSV file and load all of its segments."""
    unwrap(get_interview_service().get(gateway, interview_id))

    filename = (file.filename or "").lower()
    if filename and not filename.endswith(ALLOWED_CSV_EXTENSIONS):
        raise HTTPException(status_code=400, detail={"error": "Only CSV files are accepted", "kind": "validation_error"})

    max_bytes = get_settings().MAX_CSV_SIZE_MB * 1024 * 1024
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail={"error": f"File exceeds {get_settings().MAX_CSV_SIZE_MB}MB limit", "kind": "validation_error"},
        )
    try:
        csv_text = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=400, detail={"error": "The CSV file must be UTF-8 encoded", "kind": "parse_error"}
        ) from None

    result = unwrap(get_transcription_service().load_csv(gateway, interview_id, csv_text))
    return LoadTranscriptionResponse(count=result.count, message=result.message)


@router.get("/{interview_id}/transcriptions", response_model=SegmentListResponse)
def list_interview_transcriptions(interview_id: int, gateway: Gateway = Depends(get_gateway)) -> SegmentListResponse:
    """Get the segments of an interview ordered by segment number."""
    unwrap(get_interview_service().get(gateway, interview_id))
    result = unwrap(get_transcription_service().list_segments(gateway, interview_id))
    return SegmentListResponse(items=result.data, total=result.count)


@router.get("/{interview_id}/transcriptions/download")
def download_transcription(interview_id: int, gateway: Gateway = Depends(get_gateway)) -> PlainTextResponse:
    """Download the segments of an interview in the upload CSV format."""
    interview = unwrap(get_interview_service().get(gateway, interview_id)).data
    service = get_transcription_service()
    segments = unwrap(service.list_segments(gateway, interview_id)).data

    filename = f"{interview['codigo_entrevista']}.csv"
    return PlainTextResponse(
        content=service.export_csv(segments),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
