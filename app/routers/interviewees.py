"""Interviewee API endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_gateway, unwrap
from app.gateway import Gateway
from app.schemas.common import DeleteResponse
from app.schemas.interviewee import IntervieweeListResponse, IntervieweeRequest, IntervieweeResponse
from app.services.interviewee import get_interviewee_service

router = APIRouter(prefix="/api/v1/interviewees", tags=["Interviewees"])


@router.get("/", response_model=IntervieweeListResponse)
def list_interviewees(gateway: Gateway = Depends(get_gateway)) -> IntervieweeListResponse:
    """List interviewees with their institution."""
    result = unwrap(get_interviewee_service().list_all(gateway))
    return IntervieweeListResponse(items=result.data, total=result.count)


@router.post("/", response_model=IntervieweeResponse, status_code=201)
def create_interviewee(body: IntervieweeRequest, gateway: Gateway = Depends(get_gateway)) -> IntervieweeResponse:
    result = unwrap(get_interviewee_service().create(gateway, body.model_dump()))
    return IntervieweeResponse.model_validate(result.data)


@router.get("/{interviewee_id}", response_model=IntervieweeResponse)
def get_interviewee(interviewee_id: int, gateway: Gateway = Depends(get_gateway)) -> IntervieweeResponse:
    result = unwrap(get_interviewee_service().get(gateway, interviewee_id))
    return IntervieweeResponse.model_validate(result.data)


@router.put("/{interviewee_id}", response_model=IntervieweeResponse)
def update_interviewee(
    interviewee_id: int,
    body: IntervieweeRequest,
    gateway: Gateway = Depends(get_gateway),
) -> IntervieweeResponse:
    result = unwrap(get_interviewee_service().update(gateway, interviewee_id, body.model_dump()))
    return IntervieweeResponse.model_validate(result.data)


@router.delete("/{interviewee_id}", response_model=DeleteResponse)
def delete_interviewee(interviewee_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    result = unwrap(get_interviewee_service().delete(gateway, interviewee_id))
    return DeleteResponse(detail="Interviewee deleted", count=result.count)
