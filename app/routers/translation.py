"""Article translation endpoint backed by Gemini."""

from fastapi import APIRouter, Request

from app.dependencies import unwrap
from app.rate_limit import limiter
from app.schemas.translation import TranslationRequest, TranslationResponse
from app.services.translation import get_translation_service

router = APIRouter(prefix="/api/v1/translation", tags=["Translation"])


@router.post("", response_model=TranslationResponse)
@limiter.limit("10/minute")
def translate_articles(request: Request, body: TranslationRequest) -> TranslationResponse:
    """Translate title and abstract of each article to Spanish, with a short summary."""
    articles = [article.model_dump() for article in body.articles]
    result = unwrap(get_translation_service().translate_articles(articles, body.model))
    return TranslationResponse(items=result.data, total=result.count)
