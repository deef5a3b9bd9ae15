"""Researcher API endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_gateway, unwrap
from app.gateway import Gateway
from app.schemas.common import DeleteResponse
from app.schemas.researcher import ResearcherListResponse, ResearcherRequest, ResearcherResponse
from app.services.researcher import get_researcher_service

router = APIRouter(prefix="/api/v1/researchers", tags=["Researchers"])


@router.get("/", response_model=ResearcherListResponse)
def list_researchers(gateway: Gateway = Depends(get_gateway)) -> ResearcherListResponse:
    result = unwrap(get_researcher_service().list_all(gateway))
    return ResearcherListResponse(items=result.data, total=result.count)


@router.post("/", response_model=ResearcherResponse, status_code=201)
def create_researcher(body: ResearcherRequest, gateway: Gateway = Depends(get_gateway)) -> ResearcherResponse:
    result = unwrap(get_researcher_service().create(gateway, body.model_dump()))
    return ResearcherResponse.model_validate(result.data)


@router.get("/{researcher_id}", response_model=ResearcherResponse)
def get_researcher(researcher_id: int, gateway: Gateway = Depends(get_gateway)) -> ResearcherResponse:
    result = unwrap(get_researcher_service().get(gateway, researcher_id))
    return ResearcherResponse.model_validate(result.data)


@router.put("/{researcher_id}", response_model=ResearcherResponse)
def update_researcher(
    researcher_id: int,
    body: ResearcherRequest,
    gateway: Gateway = Depends(get_gateway),
) -> ResearcherResponse:
    result = unwrap(get_researcher_service().update(gateway, researcher_id, body.model_dump()))
    return ResearcherResponse.model_validate(result.data)


@router.delete("/{researcher_id}", response_model=DeleteResponse)
def delete_researcher(researcher_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    """Delete a researcher who conducted no interview."""
    result = unwrap(get_researcher_service().delete(gateway, researcher_id))
    return DeleteResponse(detail="Researcher deleted", count=result.count)
