"""Shared dependencies for FastAPI routes."""

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ErrorKind
from app.gateway import Gateway
from app.results import ActionResult

STATUS_BY_KIND = {
    ErrorKind.PARSE: 400,
    ErrorKind.MALFORMED_ROW: 400,
    ErrorKind.EMPTY_INPUT: 400,
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_KEY: 409,
    ErrorKind.IN_USE: 409,
    ErrorKind.PERSISTENCE: 500,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.UPSTREAM: 502,
}


def get_gateway(db: Session = Depends(get_db)) -> Gateway:
    """Gateway bound to the request's database session."""
    return Gateway(db)


def unwrap(result: ActionResult) -> ActionResult:
    """Return a successful result or raise the matching HTTP error."""
    if result.success:
        return result
    kind = result.kind or ErrorKind.PERSISTENCE
    raise HTTPException(
        status_code=STATUS_BY_KIND.get(kind, 500),
        detail={"error": result.error, "kind": kind.value},
    )
