"""Translation and summary of article metadata with the Gemini API."""

import json
import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.config import Settings, get_settings
from app.errors import AppError, ConfigurationError, UpstreamError, ValidationError
from app.results import ActionResult

logger = logging.getLogger("sustrato")

SUPPORTED_MODELS = ("gemini-1.5-flash", "gemini-1.5-pro", "gemini-pro", "gemini-1.0-pro")

TEMPERATURE = 0.2
MAX_OUTPUT_TOKENS = 8192

SYSTEM_INSTRUCTION = """You are an expert academic assistant. Your task is to process a list of scientific articles.
For each article, you must:
1. Translate the 'title' from English to Spanish.
2. Translate the 'abstract' from English to Spanish.
3. Generate a concise 'summary' of the abstract in Spanish. The summary should be brief and capture the essence of the abstract.

Return the response as a single JSON array. Each object in the array should correspond to an input article and include its original 'id', and the new fields: 'titulo_es', 'abstract_es', and 'resumen_es'.
Ensure the output is a valid JSON array. Example for one article:
[
  {
    "id": "original_id_1",
    "titulo_es": "Título traducido al español",
    "abstract_es": "Abstract traducido al español.",
    "resumen_es": "Resumen conciso del abstract en español."
  }
]
"""


def build_prompt(articles: list[dict[str, Any]]) -> str:
    payload = [{"id": a["id"], "title": a["title"], "abstract": a["abstract"]} for a in articles]
    return (
        "Please process the following articles according to the instructions:\n"
        f"{json.dumps(payload, indent=2, ensure_ascii=False)}\n"
        "Respond ONLY with the JSON array."
    )


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` block, if any."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    lines = text.splitlines()[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def parse_translations(text: str) -> list[dict[str, Any]]:
    try:
        parsed = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Error parsing the model response as JSON: {e.msg}")
    if not isinstance(parsed, list):
        raise UpstreamError("The model response is not a JSON array")
    return parsed


class TranslationService:
    """Calls ``generate_content`` once per request; no retries."""

    def __init__(self, settings: Settings | None = None, client: genai.Client | None = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            # HttpOptions takes the timeout in milliseconds
            options: dict[str, Any] = {"timeout": int(self.settings.TRANSLATION_TIMEOUT_SECONDS * 1000)}
            if self.settings.GEMINI_API_BASE:
                options["base_url"] = self.settings.GEMINI_API_BASE
            self._client = genai.Client(api_key=self.settings.GEMINI_API_KEY, http_options=types.HttpOptions(**options))
        return self._client

    def resolve_model(self, model: str | None) -> str:
        if model in SUPPORTED_MODELS:
            return model
        if model:
            logger.warning("Model %r is not supported, using %s", model, self.settings.GEMINI_MODEL)
        return self.settings.GEMINI_MODEL

    def _generate(self, model: str, articles: list[dict[str, Any]]) -> str:
        config = types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=TEMPERATURE,
            max_output_tokens=MAX_OUTPUT_TOKENS,
        )
        try:
            response = self.client.models.generate_content(model=model, contents=build_prompt(articles), config=config)
        except genai_errors.APIError as e:
            logger.error("Gemini answered %s: %s", e.code, e.message)
            raise UpstreamError(f"The translation model answered with status {e.code}")
        except httpx.HTTPError as e:
            raise UpstreamError(f"Error contacting the translation model: {e}")

        if not response.text:
            raise UpstreamError("The model returned no text")
        return response.text

    def translate_articles(self, articles: list[dict[str, Any]], model: str | None = None) -> ActionResult:
        """Translate title and abstract of each article to Spanish and summarize it."""
        try:
            if not articles:
                raise ValidationError("No articles were provided")
            if not self.settings.GEMINI_API_KEY:
                raise ConfigurationError("The Gemini API key is not configured")

            chosen = self.resolve_model(model)
            logger.info("Translating %d articles with %s", len(articles), chosen)
            translations = parse_translations(self._generate(chosen, articles))
            return ActionResult.ok(translations, count=len(translations))
        except AppError as e:
            logger.error("Translation failed (%s): %s", e.kind.value, e.message)
            return ActionResult.from_error(e)


_translation_service: TranslationService | None = None


def get_translation_service() -> TranslationService:
    """Get singleton translation service instance."""
    global _translation_service
    if _translation_service is None:
        _translation_service = TranslationService()
    return _translation_service
