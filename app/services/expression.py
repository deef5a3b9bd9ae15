"""Allowed-expression dictionary used when reviewing normalized transcriptions."""

import logging
from dataclasses import dataclass, field
from typing import Any

from app.errors import AppError, NotFoundError
from app.gateway import Gateway, eq, in_
from app.results import ActionResult
from app.services.base import CodedEntityService

logger = logging.getLogger("sustrato")

NORMALIZATIONS_TABLE = "normalizaciones_esperadas"


@dataclass
class ExpressionRule:
    """Short expression and the normalizations a reviewer expects for it."""

    expresion_original: str
    normalizaciones_esperadas: list[str] = field(default_factory=list)
    es_permitida_como_normalizacion: bool = False


# (language, expression, allowed as its own normalization, expected normalizations)
DEFAULT_EXPRESSIONS: list[tuple[str, str, bool, list[str]]] = [
    ("es-ES", "sí", False, ["Afirmación", "Respuesta afirmativa", "Confirma"]),
    ("es-ES", "no", False, ["Negación", "Respuesta negativa", "Rechaza"]),
    ("es-ES", "ok", False, ["Expresa conformidad", "Muestra acuerdo", "Acepta"]),
    ("es-ES", "hmm", False, ["Asentimiento breve", "Muestra duda", "Reflexiona"]),
    ("es-ES", "Fin.", True, ["Fin."]),
    ("en-US", "yes", False, ["Affirmation", "Affirmative response", "Confirms"]),
    ("en-US", "no", False, ["Negation", "Negative response", "Rejects"]),
    ("en-US", "ok", False, ["Expresses agreement", "Shows agreement", "Accepts"]),
    ("en-US", "hmm", False, ["Brief assent", "Shows doubt", "Reflects"]),
    ("en-US", "End.", True, ["End."]),
]


def default_rules(idioma: str) -> list[ExpressionRule]:
    """Built-in rules for a language, used when the dictionary cannot be read."""
    return [
        ExpressionRule(expression, list(expected), allowed)
        for language, expression, allowed, expected in DEFAULT_EXPRESSIONS
        if language == idioma
    ]


class ExpressionService(CodedEntityService):
    """Expressions are unique per (text, language) and own their normalizations."""

    table = "expresiones_permitidas"
    label = "expression"
    unique_fields = ("expresion_original", "idioma")
    order_by = ("expresion_original", "idioma")

    def describe_key(self, values: dict[str, Any]) -> str:
        return f'text "{values["expresion_original"]}" for language {values["idioma"]}'

    def expand(self, gateway: Gateway, rows: list[dict]) -> list[dict]:
        ids = [row["id"] for row in rows]
        grouped: dict[int, list[str]] = {}
        if ids:
            found = gateway.select(
                NORMALIZATIONS_TABLE, ["expresion_id", "texto"], [in_("expresion_id", ids)], order_by="id"
            )
            if found.ok:
                for item in found.data:
                    grouped.setdefault(item["expresion_id"], []).append(item["texto"])
            else:
                logger.error("Error loading expected normalizations: %s", found.error.message)
        for row in rows:
            row["normalizaciones_esperadas"] = grouped.get(row["id"], [])
        return rows

    def _replace_normalizations(self, gateway: Gateway, expression_id: int, texts: list[str]) -> None:
        # Failures are logged; the old list stays and the expression itself is already stored
        rows = [{"expresion_id": expression_id, "texto": text.strip()} for text in texts if text and text.strip()]
        replaced = gateway.replace(NORMALIZATIONS_TABLE, [eq("expresion_id", expression_id)], rows)
        if not replaced.ok:
            logger.error("Error saving normalizations of expression %s: %s", expression_id, replaced.error.message)

    def create(self, gateway: Gateway, payload: dict[str, Any]) -> ActionResult:
        payload = dict(payload)
        texts = payload.pop("normalizaciones_esperadas", None) or []
        result = super().create(gateway, payload)
        if result.success:
            self._replace_normalizations(gateway, result.data["id"], texts)
            self.expand(gateway, [result.data])
        return result

    def update(self, gateway: Gateway, record_id: int, payload: dict[str, Any]) -> ActionResult:
        payload = dict(payload)
        texts = payload.pop("normalizaciones_esperadas", None) or []
        result = super().update(gateway, record_id, payload)
        if result.success:
            self._replace_normalizations(gateway, record_id, texts)
            self.expand(gateway, [result.data])
        return result

    def delete(self, gateway: Gateway, record_id: int) -> ActionResult:
        """Delete an expression together with its normalizations."""
        try:
            removed = gateway.delete(
                self.table, [eq("id", record_id)], cascade=[(NORMALIZATIONS_TABLE, "expresion_id")]
            ).raise_for_error("Error deleting the expression")
            if not removed:
                raise NotFoundError(f"Expression {record_id} not found")
            return ActionResult.ok(count=removed)
        except AppError as e:
            return self._failed("delete", e)

    def list_for_language(self, gateway: Gateway, idioma: str | None = None) -> ActionResult:
        """List expressions, optionally only those of one language."""
        try:
            filters = [eq("idioma", idioma)] if idioma else []
            rows = gateway.select(self.table, filters=filters, order_by=self.order_by).raise_for_error(
                "Error loading the allowed expressions"
            )
            return ActionResult.ok(self.expand(gateway, rows), count=len(rows))
        except AppError as e:
            return self._failed("list", e)

    def load_rules(self, gateway: Gateway, idioma: str) -> list[ExpressionRule]:
        """Rules for the review report; falls back to the built-in dictionary on error."""
        result = self.list_for_language(gateway, idioma)
        if not result.success:
            logger.warning("Using built-in expression rules for %s", idioma)
            return default_rules(idioma)
        return [
            ExpressionRule(
                expresion_original=row["expresion_original"],
                normalizaciones_esperadas=row["normalizaciones_esperadas"],
                es_permitida_como_normalizacion=row["es_permitida_como_normalizacion"],
            )
            for row in result.data
        ]

    def seed_defaults(self, gateway: Gateway) -> ActionResult:
        """Fill an empty dictionary with the built-in expressions."""
        try:
            existing = gateway.select(self.table, ["id"], limit=1).raise_for_error(
                "Error checking for existing expressions"
            )
            if existing:
                return ActionResult.ok(count=0, message="The expression dictionary already has data")
            rows = [
                {"expresion_original": expression, "es_permitida_como_normalizacion": allowed, "idioma": language}
                for language, expression, allowed, _ in DEFAULT_EXPRESSIONS
            ]
            inserted = gateway.insert(self.table, rows).raise_for_error(
                "Error initializing the expression dictionary", "The expression dictionary already has data"
            )
            expected = {(lang, expr): texts for lang, expr, _, texts in DEFAULT_EXPRESSIONS}
            normalizations = [
                {"expresion_id": row["id"], "texto": text}
                for row in inserted
                for text in expected[(row["idioma"], row["expresion_original"])]
            ]
            saved = gateway.insert(NORMALIZATIONS_TABLE, normalizations)
            if not saved.ok:
                logger.error("Error initializing expected normalizations: %s", saved.error.message)
            return ActionResult.ok(count=len(inserted), message="Expression dictionary initialized")
        except AppError as e:
            return self._failed("seed", e)


_expression_service: ExpressionService | None = None


def get_expression_service() -> ExpressionService:
    """Get singleton expression service instance."""
    global _expression_service
    if _expression_service is None:
        _expression_service = ExpressionService()
    return _expression_service
