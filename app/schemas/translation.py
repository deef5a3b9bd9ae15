"""Pydantic schemas for the translation endpoint."""

from pydantic import BaseModel


class Article(BaseModel):
    id: str
    title: str
    abstract: str


class TranslationRequest(BaseModel):
    articles: list[Article]
    model: str | None = None


class TranslatedArticle(BaseModel):
    id: str | int
    titulo_es: str | None = None
    abstract_es: str | None = None
    resumen_es: str | None = None


class TranslationResponse(BaseModel):
    items: list[TranslatedArticle]
    total: int
