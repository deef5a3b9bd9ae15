"""Pydantic schemas for institution endpoints."""

from pydantic import BaseModel, Field


class InstitutionRequest(BaseModel):
    codigo: str = Field(min_length=1, max_length=32)
    nombre: str = Field(min_length=1, max_length=256)
    descripcion: str | None = None


class InstitutionSummary(BaseModel):
    id: int
    codigo: str
    nombre: str


class InstitutionResponse(InstitutionSummary):
    descripcion: str | None = None

    model_config = {"from_attributes": True}


class InstitutionListResponse(BaseModel):
    items: list[InstitutionResponse]
    total: int
