"""Pydantic schemas for interviewee endpoints."""

from pydantic import BaseModel, Field

from app.schemas.institution import InstitutionSummary


class IntervieweeRequest(BaseModel):
    codigo: str = Field(min_length=1, max_length=32)
    nombre: str = Field(min_length=1, max_length=128)
    apellido: str = Field(min_length=1, max_length=128)
    cargo: str | None = None
    institucion_id: int
    contacto: str | None = None
    notas: str | None = None


class IntervieweeSummary(BaseModel):
    id: int
    codigo: str
    nombre: str
    apellido: str


class IntervieweeResponse(IntervieweeSummary):
    cargo: str | None = None
    institucion_id: int
    contacto: str | None = None
    notas: str | None = None
    institucion: InstitutionSummary | None = None

    model_config = {"from_attributes": True}


class IntervieweeListResponse(BaseModel):
    items: list[IntervieweeResponse]
    total: int
