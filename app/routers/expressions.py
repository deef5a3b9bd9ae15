"""Allowed-expression dictionary endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_gateway, unwrap
from app.gateway import Gateway
from app.schemas.common import DeleteResponse
from app.schemas.expression import ExpressionListResponse, ExpressionRequest, ExpressionResponse, SeedResponse
from app.services.expression import get_expression_service

router = APIRouter(prefix="/api/v1/expressions", tags=["Expressions"])


@router.get("/", response_model=ExpressionListResponse)
def list_expressions(idioma: str | None = None, gateway: Gateway = Depends(get_gateway)) -> ExpressionListResponse:
    """List expressions with their expected normalizations, optionally for one language."""
    result = unwrap(get_expression_service().list_for_language(gateway, idioma))
    return ExpressionListResponse(items=result.data, total=result.count)


@router.post("/", response_model=ExpressionResponse, status_code=201)
def create_expression(body: ExpressionRequest, gateway: Gateway = Depends(get_gateway)) -> ExpressionResponse:
    result = unwrap(get_expression_service().create(gateway, body.model_dump()))
    return ExpressionResponse.model_validate(result.data)


@router.post("/seed", response_model=SeedResponse)
def seed_expressions(gateway: Gateway = Depends(get_gateway)) -> SeedResponse:
    """Fill an empty dictionary with the built-in expressions."""
    result = unwrap(get_expression_service().seed_defaults(gateway))
    return SeedResponse(count=result.count, message=result.message)


@router.get("/{expression_id}", response_model=ExpressionResponse)
def get_expression(expression_id: int, gateway: Gateway = Depends(get_gateway)) -> ExpressionResponse:
    result = unwrap(get_expression_service().get(gateway, expression_id))
    return ExpressionResponse.model_validate(result.data)


@router.put("/{expression_id}", response_model=ExpressionResponse)
def update_expression(
    expression_id: int,
    body: ExpressionRequest,
    gateway: Gateway = Depends(get_gateway),
) -> ExpressionResponse:
    """Update an expression and replace its expected normalizations."""
    result = unwrap(get_expression_service().update(gateway, expression_id, body.model_dump()))
    return ExpressionResponse.model_validate(result.data)


@router.delete("/{expression_id}", response_model=DeleteResponse)
def delete_expression(expression_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    result = unwrap(get_expression_service().delete(gateway, expression_id))
    return DeleteResponse(detail="Expression deleted", count=result.count)
