"""Institution service."""

from typing import Any

from app.services.base import CodedEntityService


class InstitutionService(CodedEntityService):
    """Institutions are keyed by an upper-case code."""

    table = "instituciones"
    label = "institution"
    dependents = (
        ("entrevistados", "institucion_id", "interviewees"),
        ("entrevistas", "institucion_id", "interviews"),
    )

    def prepare(self, payload: dict[str, Any]) -> dict[str, Any]:
        values = super().prepare(payload)
        if values.get("codigo"):
            values["codigo"] = values["codigo"].upper()
        return values


_institution_service: InstitutionService | None = None


def get_institution_service() -> InstitutionService:
    """Get singleton institution service instance."""
    global _institution_service
    if _institution_service is None:
        _institution_service = InstitutionService()
    return _institution_service
