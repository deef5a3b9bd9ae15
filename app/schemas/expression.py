"""Pydantic schemas for allowed-expression endpoints."""

from pydantic import BaseModel, Field


class ExpressionRequest(BaseModel):
    expresion_original: str = Field(min_length=1, max_length=256)
    es_permitida_como_normalizacion: bool = False
    idioma: str = Field(default="es-ES", min_length=1, max_length=16)
    normalizaciones_esperadas: list[str] = []


class ExpressionResponse(BaseModel):
    id: int
    expresion_original: str
    es_permitida_como_normalizacion: bool
    idioma: str
    normalizaciones_esperadas: list[str] = []

    model_config = {"from_attributes": True}


class ExpressionListResponse(BaseModel):
    items: list[ExpressionResponse]
    total: int


class SeedResponse(BaseModel):
    count: int
    message: str
