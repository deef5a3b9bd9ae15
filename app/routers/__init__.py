"""API routers."""

from app.routers.expressions import router as expressions_router
from app.routers.institutions import router as institutions_router
from app.routers.interviewees import router as interviewees_router
from app.routers.interviews import router as interviews_router
from app.routers.matrix import router as matrix_router
from app.routers.researchers import router as researchers_router
from app.routers.transcriptions import router as transcriptions_router
from app.routers.translation import router as translation_router

__all__ = [
    "expressions_router",
    "institutions_router",
    "interviewees_router",
    "interviews_router",
    "matrix_router",
    "researchers_router",
    "transcriptions_router",
    "translation_router",
]
