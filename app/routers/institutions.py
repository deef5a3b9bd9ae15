"""Institution API endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_gateway, unwrap
from app.gateway import Gateway
from app.schemas.common import DeleteResponse
from app.schemas.institution import InstitutionListResponse, InstitutionRequest, InstitutionResponse
from app.services.institution import get_institution_service

router = APIRouter(prefix="/api/v1/institutions", tags=["Institutions"])


@router.get("/", response_model=InstitutionListResponse)
def list_institutions(gateway: Gateway = Depends(get_gateway)) -> InstitutionListResponse:
    """List institutions ordered by name."""
    result = unwrap(get_institution_service().list_all(gateway))
    return InstitutionListResponse(items=result.data, total=result.count)


@router.post("/", response_model=InstitutionResponse, status_code=201)
def create_institution(body: InstitutionRequest, gateway: Gateway = Depends(get_gateway)) -> InstitutionResponse:
    """Create an institution. Codes are stored upper-case and must be unique."""
    result = unwrap(get_institution_service().create(gateway, body.model_dump()))
    return InstitutionResponse.model_validate(result.data)


@router.get("/{institution_id}", response_model=InstitutionResponse)
def get_institution(institution_id: int, gateway: Gateway = Depends(get_gateway)) -> InstitutionResponse:
    result = unwrap(get_institution_service().get(gateway, institution_id))
    return InstitutionResponse.model_validate(result.data)


@router.put("/{institution_id}", response_model=InstitutionResponse)
def update_institution(
    institution_id: int,
    body: InstitutionRequest,
    gateway: Gateway = Depends(get_gateway),
) -> InstitutionResponse:
    result = unwrap(get_institution_service().update(gateway, institution_id, body.model_dump()))
    return InstitutionResponse.model_validate(result.data)


@router.delete("/{institution_id}", response_model=DeleteResponse)
def delete_institution(institution_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    """Delete an institution no interviewee or interview refers to."""
    result = unwrap(get_institution_service().delete(gateway, institution_id))
    return DeleteResponse(detail="Institution deleted", count=result.count)
