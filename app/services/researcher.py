"""Researcher service."""

from app.services.base import CodedEntityService


class ResearcherService(CodedEntityService):
    table = "investigadores"
    label = "researcher"
    order_by = ("apellido", "nombre")
    dependents = (("entrevistas", "investigador_id", "interviews"),)


_researcher_service: ResearcherService | None = None


def get_researcher_service() -> ResearcherService:
    """Get singleton researcher service instance."""
    global _researcher_service
    if _researcher_service is None:
        _researcher_service = ResearcherService()
    return _researcher_service
