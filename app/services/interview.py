"""Interview service: CRUD, embedded references and code numbering."""

import re
from typing import Any

from app.config import get_settings
from app.errors import AppError
from app.gateway import Gateway, like
from app.results import ActionResult
from app.services.base import CodedEntityService, attach_related

# Interview codes are a 4-character base followed by a sequence number, e.g. "FUAB03"
CODE_BASE_LENGTH = 4
_LEADING_DIGITS = re.compile(r"\d+")


def next_number_after(code: str | None) -> str:
    """Return the zero-padded number following ``code``'s sequence suffix."""
    if not code:
        return "01"
    match = _LEADING_DIGITS.match(code[CODE_BASE_LENGTH:])
    if not match:
        return "01"
    return str(int(match.group()) + 1).zfill(2)


class InterviewService(CodedEntityService):
    table = "entrevistas"
    label = "interview"
    unique_fields = ("codigo_entrevista",)
    order_by = ("-fecha_entrevista", "codigo_entrevista")
    dependents = (("transcripciones", "entrevista_id", "transcriptions"),)
    references = (
        ("institucion_id", "instituciones", "institution"),
        ("entrevistado_id", "entrevistados", "interviewee"),
        ("investigador_id", "investigadores", "researcher"),
    )

    def prepare(self, payload: dict[str, Any]) -> dict[str, Any]:
        values = super().prepare(payload)
        if "idioma" in values and not values["idioma"]:
            values["idioma"] = get_settings().DEFAULT_LANGUAGE
        return values

    def expand(self, gateway: Gateway, rows: list[dict]) -> list[dict]:
        attach_related(gateway, rows, "institucion_id", "instituciones", ["codigo", "nombre"], "institucion")
        attach_related(gateway, rows, "entrevistado_id", "entrevistados", ["codigo", "nombre", "apellido"], "entrevistado")
        attach_related(gateway, rows, "investigador_id", "investigadores", ["codigo", "nombre", "apellido"], "investigador")
        return rows

    def next_number(self, gateway: Gateway, code_base: str) -> ActionResult:
        """Suggest the next sequence number for interviews sharing ``code_base``."""
        try:
            rows = gateway.select(
                self.table,
                ["codigo_entrevista"],
                [like("codigo_entrevista", f"{code_base}%")],
                order_by="-codigo_entrevista",
                limit=1,
            ).raise_for_error("Error getting the next interview number")
            latest = rows[0]["codigo_entrevista"] if rows else None
            return ActionResult.ok({"numero": next_number_after(latest)})
        except AppError as e:
            return self._failed("number", e)


_interview_service: InterviewService | None = None


def get_interview_service() -> InterviewService:
    """Get singleton interview service instance."""
    global _interview_service
    if _interview_service is None:
        _interview_service = InterviewService()
    return _interview_service
