"""Pydantic schemas for researcher endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class ResearcherRequest(BaseModel):
    codigo: str = Field(min_length=1, max_length=32)
    nombre: str = Field(min_length=1, max_length=128)
    apellido: str = Field(min_length=1, max_length=128)
    email: str | None = None
    telefono: str | None = None
    institucion: str | None = None
    cargo: str | None = None
    notas: str | None = None


class ResearcherResponse(BaseModel):
    id: int
    codigo: str
    nombre: str
    apellido: str
    email: str | None = None
    telefono: str | None = None
    institucion: str | None = None
    cargo: str | None = None
    notas: str | None = None
    fecha_creacion: datetime | None = None

    model_config = {"from_attributes": True}


class ResearcherListResponse(BaseModel):
    items: list[ResearcherResponse]
    total: int
