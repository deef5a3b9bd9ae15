"""Analysis taxonomy endpoints: categories, subcategories and codes."""

from fastapi import APIRouter, Depends

from app.dependencies import get_gateway, unwrap
from app.gateway import Gateway
from app.schemas.common import DeleteResponse
from app.schemas.matrix import (
    CategoryListResponse,
    CategoryRequest,
    CategoryResponse,
    MatrixCodeListResponse,
    MatrixCodeRequest,
    MatrixCodeResponse,
    SubcategoryListResponse,
    SubcategoryRequest,
    SubcategoryResponse,
)
from app.services.matrix import get_category_service, get_matrix_code_service, get_subcategory_service

router = APIRouter(prefix="/api/v1/matrix", tags=["Matrix"])


# --- Categories ---


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(gateway: Gateway = Depends(get_gateway)) -> CategoryListResponse:
    result = unwrap(get_category_service().list_all(gateway))
    return CategoryListResponse(items=result.data, total=result.count)


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(body: CategoryRequest, gateway: Gateway = Depends(get_gateway)) -> CategoryResponse:
    result = unwrap(get_category_service().create(gateway, body.model_dump()))
    return CategoryResponse.model_validate(result.data)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, gateway: Gateway = Depends(get_gateway)) -> CategoryResponse:
    result = unwrap(get_category_service().get(gateway, category_id))
    return CategoryResponse.model_validate(result.data)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(category_id: int, body: CategoryRequest, gateway: Gateway = Depends(get_gateway)) -> CategoryResponse:
    result = unwrap(get_category_service().update(gateway, category_id, body.model_dump()))
    return CategoryResponse.model_validate(result.data)


@router.delete("/categories/{category_id}", response_model=DeleteResponse)
def delete_category(category_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    """Delete a category without subcategories or codes."""
    result = unwrap(get_category_service().delete(gateway, category_id))
    return DeleteResponse(detail="Category deleted", count=result.count)


# --- Subcategories ---


@router.get("/subcategories", response_model=SubcategoryListResponse)
def list_subcategories(gateway: Gateway = Depends(get_gateway)) -> SubcategoryListResponse:
    result = unwrap(get_subcategory_service().list_all(gateway))
    return SubcategoryListResponse(items=result.data, total=result.count)


@router.post("/subcategories", response_model=SubcategoryResponse, status_code=201)
def create_subcategory(body: SubcategoryRequest, gateway: Gateway = Depends(get_gateway)) -> SubcategoryResponse:
    result = unwrap(get_subcategory_service().create(gateway, body.model_dump()))
    return SubcategoryResponse.model_validate(result.data)


@router.get("/subcategories/{subcategory_id}", response_model=SubcategoryResponse)
def get_subcategory(subcategory_id: int, gateway: Gateway = Depends(get_gateway)) -> SubcategoryResponse:
    result = unwrap(get_subcategory_service().get(gateway, subcategory_id))
    return SubcategoryResponse.model_validate(result.data)


@router.put("/subcategories/{subcategory_id}", response_model=SubcategoryResponse)
def update_subcategory(
    subcategory_id: int,
    body: SubcategoryRequest,
    gateway: Gateway = Depends(get_gateway),
) -> SubcategoryResponse:
    result = unwrap(get_subcategory_service().update(gateway, subcategory_id, body.model_dump()))
    return SubcategoryResponse.model_validate(result.data)


@router.delete("/subcategories/{subcategory_id}", response_model=DeleteResponse)
def delete_subcategory(subcategory_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    result = unwrap(get_subcategory_service().delete(gateway, subcategory_id))
    return DeleteResponse(detail="Subcategory deleted", count=result.count)


# --- Codes ---


@router.get("/codes", response_model=MatrixCodeListResponse)
def list_codes(gateway: Gateway = Depends(get_gateway)) -> MatrixCodeListResponse:
    result = unwrap(get_matrix_code_service().list_all(gateway))
    return MatrixCodeListResponse(items=result.data, total=result.count)


@router.post("/codes", response_model=MatrixCodeResponse, status_code=201)
def create_code(body: MatrixCodeRequest, gateway: Gateway = Depends(get_gateway)) -> MatrixCodeResponse:
    """Create a code; its subcategory must belong to its category."""
    result = unwrap(get_matrix_code_service().create(gateway, body.model_dump()))
    return MatrixCodeResponse.model_validate(result.data)


@router.get("/codes/{code_id}", response_model=MatrixCodeResponse)
def get_code(code_id: int, gateway: Gateway = Depends(get_gateway)) -> MatrixCodeResponse:
    result = unwrap(get_matrix_code_service().get(gateway, code_id))
    return MatrixCodeResponse.model_validate(result.data)


@router.put("/codes/{code_id}", response_model=MatrixCodeResponse)
def update_code(code_id: int, body: MatrixCodeRequest, gateway: Gateway = Depends(get_gateway)) -> MatrixCodeResponse:
    result = unwrap(get_matrix_code_service().update(gateway, code_id, body.model_dump()))
    return MatrixCodeResponse.model_validate(result.data)


@router.delete("/codes/{code_id}", response_model=DeleteResponse)
def delete_code(code_id: int, gateway: Gateway = Depends(get_gateway)) -> DeleteResponse:
    result = unwrap(get_matrix_code_service().delete(gateway, code_id))
    return DeleteResponse(detail="Matrix code deleted", count=result.count)
