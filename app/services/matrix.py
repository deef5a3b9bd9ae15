"""Analysis taxonomy: categories, subcategories and codes."""

from typing import Any

from app.errors import AppError, ValidationError
from app.gateway import Gateway, eq
from app.results import ActionResult
from app.services.base import CodedEntityService, attach_related


class MatrixCategoryService(CodedEntityService):
    table = "matriz_categorias"
    label = "category"
    unique_fields = ("nombre",)
    order_by = ("orden", "nombre")
    dependents = (
        ("matriz_subcategorias", "categoria_id", "subcategories"),
        ("matriz_codigos", "categoria_id", "matrix codes"),
    )

    def describe_key(self, values: dict[str, Any]) -> str:
        return f"name {values['nombre']}"


class MatrixSubcategoryService(CodedEntityService):
    """Subcategory names are unique within their category."""

    table = "matriz_subcategorias"
    label = "subcategory"
    unique_fields = ("categoria_id", "nombre")
    order_by = ("categoria_id", "orden", "nombre")
    dependents = (("matriz_codigos", "subcategoria_id", "matrix codes"),)
    references = (("categoria_id", "matriz_categorias", "category"),)

    def describe_key(self, values: dict[str, Any]) -> str:
        return f"name {values['nombre']} in category {values['categoria_id']}"

    def expand(self, gateway: Gateway, rows: list[dict]) -> list[dict]:
        return attach_related(gateway, rows, "categoria_id", "matriz_categorias", ["nombre"], "categoria")


class MatrixCodeService(CodedEntityService):
    """Codes point at a category and at a subcategory of that same category."""

    table = "matriz_codigos"
    label = "matrix code"
    order_by = "codigo"

    def expand(self, gateway: Gateway, rows: list[dict]) -> list[dict]:
        attach_related(gateway, rows, "categoria_id", "matriz_categorias", ["nombre"], "categoria")
        attach_related(gateway, rows, "subcategoria_id", "matriz_subcategorias", ["nombre", "categoria_id"], "subcategoria")
        return rows

    def _check_hierarchy(self, gateway: Gateway, payload: dict[str, Any]) -> None:
        rows = gateway.select(
            "matriz_subcategorias", ["categoria_id"], [eq("id", payload["subcategoria_id"])]
        ).raise_for_error("Error loading the subcategory")
        if not rows:
            raise ValidationError(f"Subcategory {payload['subcategoria_id']} does not exist")
        if rows[0]["categoria_id"] != payload["categoria_id"]:
            raise ValidationError(
                f"Subcategory {payload['subcategoria_id']} does not belong to category {payload['categoria_id']}"
            )

    def create(self, gateway: Gateway, payload: dict[str, Any]) -> ActionResult:
        try:
            self._check_hierarchy(gateway, payload)
        except AppError as e:
            return self._failed("create", e)
        return super().create(gateway, payload)

    def update(self, gateway: Gateway, record_id: int, payload: dict[str, Any]) -> ActionResult:
        try:
            self._check_hierarchy(gateway, payload)
        except AppError as e:
            return self._failed("update", e)
        return super().update(gateway, record_id, payload)


_category_service: MatrixCategoryService | None = None
_subcategory_service: MatrixSubcategoryService | None = None
_code_service: MatrixCodeService | None = None


def get_category_service() -> MatrixCategoryService:
    global _category_service
    if _category_service is None:
        _category_service = MatrixCategoryService()
    return _category_service


def get_subcategory_service() -> MatrixSubcategoryService:
    global _subcategory_service
    if _subcategory_service is None:
        _subcategory_service = MatrixSubcategoryService()
    return _subcategory_service


def get_matrix_code_service() -> MatrixCodeService:
    global _code_service
    if _code_service is None:
        _code_service = MatrixCodeService()
    return _code_service
