"""Pydantic schemas for interview endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from app.schemas.institution import InstitutionSummary
from app.schemas.interviewee import IntervieweeSummary


class InterviewRequest(BaseModel):
    codigo_entrevista: str = Field(min_length=1, max_length=32)
    institucion_id: int
    entrevistado_id: int
    investigador_id: int | None = None
    numero_entrevista: int = Field(ge=1)
    fecha_entrevista: date | None = None
    duracion: int | None = Field(default=None, ge=0)
    notas: str | None = None
    idioma: str | None = None


class ResearcherSummary(BaseModel):
    id: int
    codigo: str
    nombre: str
    apellido: str


class InterviewResponse(BaseModel):
    id: int
    codigo_entrevista: str
    institucion_id: int
    entrevistado_id: int
    investigador_id: int | None = None
    numero_entrevista: int
    fecha_entrevista: date | None = None
    duracion: int | None = None
    notas: str | None = None
    idioma: str
    fecha_creacion: datetime | None = None
    institucion: InstitutionSummary | None = None
    entrevistado: IntervieweeSummary | None = None
    investigador: ResearcherSummary | None = None

    model_config = {"from_attributes": True}


class InterviewListResponse(BaseModel):
    items: list[InterviewResponse]
    total: int


class NextNumberResponse(BaseModel):
    numero: str
