"""Tagged result returned by every service operation."""

from dataclasses import dataclass
from typing import Any

from app.errors import AppError, ErrorKind


@dataclass
class ActionResult:
    """Outcome of a service operation.

    Either ``success`` is True and ``data`` / ``count`` / ``message`` describe
    what happened, or it is False and ``kind`` + ``error`` say why.
    """

    success: bool
    data: Any = None
    count: int | None = None
    message: str | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls, data: Any = None, count: int | None = None, message: str | None = None) -> "ActionResult":
        return cls(success=True, data=data, count=count, message=message)

    @classmethod
    def fail(cls, kind: ErrorKind, error: str) -> "ActionResult":
        return cls(success=False, error=error, kind=kind)

    @classmethod
    def from_error(cls, exc: AppError) -> "ActionResult":
        return cls.fail(exc.kind, exc.message)
