"""Interviewee service."""

from app.gateway import Gateway
from app.services.base import CodedEntityService, attach_related


class IntervieweeService(CodedEntityService):
    table = "entrevistados"
    label = "interviewee"
    order_by = ("apellido", "nombre")
    dependents = (("entrevistas", "entrevistado_id", "interviews"),)
    references = (("institucion_id", "instituciones", "institution"),)

    def expand(self, gateway: Gateway, rows: list[dict]) -> list[dict]:
        return attach_related(gateway, rows, "institucion_id", "instituciones", ["codigo", "nombre"], "institucion")


_interviewee_service: IntervieweeService | None = None


def get_interviewee_service() -> IntervieweeService:
    """Get singleton interviewee service instance."""
    global _interviewee_service
    if _interviewee_service is None:
        _interviewee_service = IntervieweeService()
    return _interviewee_service
