"""Pydantic schemas for the analysis taxonomy."""

from pydantic import BaseModel, Field


class CategoryRequest(BaseModel):
    nombre: str = Field(min_length=1, max_length=256)
    descripcion: str | None = None
    orden: int = 0


class CategoryResponse(BaseModel):
    id: int
    nombre: str
    descripcion: str | None = None
    orden: int

    model_config = {"from_attributes": True}


class CategoryListResponse(BaseModel):
    items: list[CategoryResponse]
    total: int


class CategorySummary(BaseModel):
    id: int
    nombre: str


class SubcategoryRequest(BaseModel):
    categoria_id: int
    nombre: str = Field(min_length=1, max_length=256)
    descripcion: str | None = None
    orden: int = 0


class SubcategoryResponse(BaseModel):
    id: int
    categoria_id: int
    nombre: str
    descripcion: str | None = None
    orden: int
    categoria: CategorySummary | None = None

    model_config = {"from_attributes": True}


class SubcategoryListResponse(BaseModel):
    items: list[SubcategoryResponse]
    total: int


class SubcategorySummary(BaseModel):
    id: int
    nombre: str
    categoria_id: int


class MatrixCodeRequest(BaseModel):
    codigo: str = Field(min_length=1, max_length=32)
    categoria_id: int
    subcategoria_id: int
    descripcion: str | None = None


class MatrixCodeResponse(BaseModel):
    id: int
    codigo: str
    categoria_id: int
    subcategoria_id: int
    descripcion: str | None = None
    categoria: CategorySummary | None = None
    subcategoria: SubcategorySummary | None = None

    model_config = {"from_attributes": True}


class MatrixCodeListResponse(BaseModel):
    items: list[MatrixCodeResponse]
    total: int
