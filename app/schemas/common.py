"""Pydantic schemas shared by several routers."""

from pydantic import BaseModel


class DeleteResponse(BaseModel):
    detail: str
    count: int = 0


class ErrorDetail(BaseModel):
    """Body of ``detail`` in every 4xx/5xx response raised from a failed result."""

    error: str
    kind: str
