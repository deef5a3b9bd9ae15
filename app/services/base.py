"""Shared CRUD for tables identified by a human-readable code."""

import logging
from typing import Any

from app.errors import AppError, DuplicateKeyError, InUseError, NotFoundError, ValidationError
from app.gateway import Gateway, eq, in_, neq
from app.results import ActionResult

logger = logging.getLogger("sustrato")


def attach_related(
    gateway: Gateway,
    rows: list[dict],
    foreign_key: str,
    table: str,
    columns: list[str],
    key: str,
) -> list[dict]:
    """Embed the referenced row of ``table`` under ``key`` in every row.

    Rows whose foreign key is null (or points nowhere) get ``None``.
    """
    ids = sorted({row[foreign_key] for row in rows if row.get(foreign_key) is not None})
    related: dict[Any, dict] = {}
    if ids:
        found = gateway.select(table, ["id", *columns], [in_("id", ids)]).raise_for_error(
            f"Error loading related rows from {table}"
        )
        related = {item["id"]: item for item in found}
    for row in rows:
        row[key] = related.get(row.get(foreign_key))
    return rows


class CodedEntityService:
    """Create/read/update/delete with the duplicate-code guard.

    Subclasses set the table, the uniqueness key and the tables that block a
    delete. Creation checks for an existing row with the same key before
    inserting; the unique constraint on the table catches the rows that slip
    through between check and insert, and both paths report the same
    ``DuplicateKeyError``.
    """

    table: str = ""
    label: str = "record"
    unique_fields: tuple[str, ...] = ("codigo",)
    order_by: str | tuple[str, ...] = "nombre"
    # (table, foreign key column, plural description) checked before delete
    dependents: tuple[tuple[str, str, str], ...] = ()
    # (foreign key column, referenced table, description) checked before create and update
    references: tuple[tuple[str, str, str], ...] = ()

    # --- hooks ---

    def prepare(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Normalize an incoming payload; empty optional strings become NULL."""
        values = {}
        for name, value in payload.items():
            if isinstance(value, str):
                value = value.strip()
                if value == "" and name not in self.unique_fields:
                    value = None
            values[name] = value
        return values

    def expand(self, gateway: Gateway, rows: list[dict]) -> list[dict]:
        """Attach related rows for reads. No-op by default."""
        return rows

    def describe_key(self, values: dict[str, Any]) -> str:
        return f"code {values[self.unique_fields[0]]}"

    def duplicate_message(self, values: dict[str, Any], updating: bool = False) -> str:
        if updating:
            prefix = "Another"
        else:
            prefix = "An" if self.label[0] in "aeiou" else "A"
        return f"{prefix} {self.label} with {self.describe_key(values)} already exists"

    # --- guard ---

    def find_duplicate(self, gateway: Gateway, values: dict[str, Any], exclude_id: int | None = None) -> dict | None:
        """Return the first row sharing the uniqueness key, ignoring ``exclude_id``."""
        filters = [eq(name, values[name]) for name in self.unique_fields]
        if exclude_id is not None:
            filters.append(neq("id", exclude_id))
        rows = gateway.select(self.table, ["id"], filters, limit=1).raise_for_error(
            f"Error checking whether the {self.label} already exists"
        )
        return rows[0] if rows else None

    def check_references(self, gateway: Gateway, values: dict[str, Any]) -> None:
        """Raise ``ValidationError`` when a supplied foreign key points at no row."""
        for foreign_key, table, description in self.references:
            value = values.get(foreign_key)
            if value is None:
                continue
            rows = gateway.select(table, ["id"], [eq("id", value)], limit=1).raise_for_error(
                f"Error loading the {description}"
            )
            if not rows:
                raise ValidationError(f"{description.capitalize()} {value} does not exist")

    def _failed(self, action: str, exc: AppError) -> ActionResult:
        logger.warning("%s %s failed (%s): %s", action, self.label, exc.kind.value, exc.message)
        return ActionResult.from_error(exc)

    # --- operations ---

    def create(self, gateway: Gateway, payload: dict[str, Any]) -> ActionResult:
        """Insert a new row unless its key is taken."""
        try:
            values = self.prepare(payload)
            self.check_references(gateway, values)
            message = self.duplicate_message(values)
            if self.find_duplicate(gateway, values):
                raise DuplicateKeyError(message)
            created = gateway.insert(self.table, [values]).raise_for_error(f"Error creating the {self.label}", message)
            logger.info("Created %s id=%s", self.label, created[0]["id"])
            return ActionResult.ok(created[0])
        except AppError as e:
            return self._failed("create", e)

    def list_all(self, gateway: Gateway) -> ActionResult:
        try:
            rows = gateway.select(self.table, order_by=self.order_by).raise_for_error(
                f"Error loading the {self.label} list"
            )
            return ActionResult.ok(self.expand(gateway, rows), count=len(rows))
        except AppError as e:
            return self._failed("list", e)

    def get(self, gateway: Gateway, record_id: int) -> ActionResult:
        try:
            rows = gateway.select(self.table, filters=[eq("id", record_id)]).raise_for_error(
                f"Error loading the {self.label}"
            )
            if not rows:
                raise NotFoundError(f"{self.label.capitalize()} {record_id} not found")
            return ActionResult.ok(self.expand(gateway, rows)[0])
        except AppError as e:
            return self._failed("get", e)

    def update(self, gateway: Gateway, record_id: int, payload: dict[str, Any]) -> ActionResult:
        """Update a row unless another row already holds the new key."""
        try:
            values = self.prepare(payload)
            self.check_references(gateway, values)
            message = self.duplicate_message(values, updating=True)
            if self.find_duplicate(gateway, values, exclude_id=record_id):
                raise DuplicateKeyError(message)
            updated = gateway.update(self.table, values, [eq("id", record_id)]).raise_for_error(
                f"Error updating the {self.label}", message
            )
            if not updated:
                raise NotFoundError(f"{self.label.capitalize()} {record_id} not found")
            return ActionResult.ok(updated[0])
        except AppError as e:
            return self._failed("update", e)

    def delete(self, gateway: Gateway, record_id: int) -> ActionResult:
        """Delete a row that no dependent table references."""
        try:
            for table, foreign_key, description in self.dependents:
                used = gateway.select(table, ["id"], [eq(foreign_key, record_id)], limit=1).raise_for_error(
                    f"Error checking whether the {self.label} is in use"
                )
                if used:
                    raise InUseError(f"Cannot delete the {self.label} because it is used by {description}")
            removed = gateway.delete(self.table, [eq("id", record_id)]).raise_for_error(
                f"Error deleting the {self.label}"
            )
            if not removed:
                raise NotFoundError(f"{self.label.capitalize()} {record_id} not found")
            logger.info("Deleted %s id=%s", self.label, record_id)
            return ActionResult.ok(count=removed)
        except AppError as e:
            return self._failed("delete", e)
