"""Persistence gateway over the research-data tables.

Services never touch the ORM session directly; they go through a ``Gateway``
bound to the request's session. Every call returns a ``GatewayResponse``
carrying either ``data`` or an ``error``, never both, and each write runs in
its own transaction: a rejected insert/update/delete leaves nothing behind.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import app.models  # noqa: F401  registers every table on Base.metadata
from app.database import Base
from app.errors import DuplicateKeyError, PersistenceError, ValidationError

logger = logging.getLogger("sustrato")

UNIQUE_VIOLATION = "unique_violation"
FOREIGN_KEY_VIOLATION = "foreign_key_violation"
INTEGRITY_ERROR = "integrity_error"
DATABASE_ERROR = "database_error"
INVALID_REQUEST = "invalid_request"
OUT_OF_RANGE = "out_of_range"

_OPERATORS = ("eq", "neq", "like", "in")


@dataclass(frozen=True)
class Filter:
    """Single column predicate, combined with AND by the gateway."""

    column: str
    op: str
    value: Any


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)


def like(column: str, pattern: str) -> Filter:
    return Filter(column, "like", pattern)


def in_(column: str, values: Sequence[Any]) -> Filter:
    return Filter(column, "in", list(values))


@dataclass
class GatewayError:
    """Error reported by the database, classified by ``code``."""

    message: str
    code: str = DATABASE_ERROR


@dataclass
class GatewayResponse:
    """``{data, error}`` pair returned by every gateway call."""

    data: Any = None
    error: GatewayError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self, message: str, duplicate_message: str | None = None) -> Any:
        """Return ``data`` or raise.

        Unique-constraint violations become ``DuplicateKeyError`` when a
        ``duplicate_message`` is supplied and integers the driver cannot bind
        become ``ValidationError``. Every other error becomes
        ``PersistenceError`` with the caller's message.
        """
        if self.error is None:
            return self.data
        logger.error("%s: %s", message, self.error.message)
        if duplicate_message and self.error.code == UNIQUE_VIOLATION:
            raise DuplicateKeyError(duplicate_message)
        if self.error.code == OUT_OF_RANGE:
            raise ValidationError(f"{message}: a number is outside the supported range")
        raise PersistenceError(message)


def classify_integrity_error(exc: IntegrityError) -> str:
    """Map a driver integrity error onto a gateway error code."""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == "23505":
        return UNIQUE_VIOLATION
    if sqlstate == "23503":
        return FOREIGN_KEY_VIOLATION

    text = str(orig).lower()
    if "unique constraint" in text or "duplicate key" in text:
        return UNIQUE_VIOLATION
    if "foreign key" in text:
        return FOREIGN_KEY_VIOLATION
    return INTEGRITY_ERROR


def _condition(table: Table, flt: Filter):
    column = table.c[flt.column]
    if flt.op == "eq":
        return column == flt.value
    if flt.op == "neq":
        return column != flt.value
    if flt.op == "like":
        return column.like(flt.value)
    if flt.op == "in":
        return column.in_(flt.value)
    raise ValueError(f"Unsupported filter operator '{flt.op}'. Allowed: {', '.join(_OPERATORS)}")


def _order_clauses(table: Table, order_by: str | Sequence[str] | None) -> list:
    if not order_by:
        return []
    names = [order_by] if isinstance(order_by, str) else list(order_by)
    clauses = []
    for name in names:
        if name.startswith("-"):
            clauses.append(table.c[name[1:]].desc())
        else:
            clauses.append(table.c[name].asc())
    return clauses


class Gateway:
    """Table-level CRUD bound to one SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table '{name}'") from None

    def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Sequence[Filter] = (),
        order_by: str | Sequence[str] | None = None,
        limit: int | None = None,
    ) -> GatewayResponse:
        """Select rows as dicts. ``order_by`` names prefixed with ``-`` sort descending."""
        try:
            tbl = self._table(table)
            selected = [tbl.c[name] for name in columns] if columns else list(tbl.c)
            stmt = select(*selected).where(*[_condition(tbl, f) for f in filters])
            stmt = stmt.order_by(*_order_clauses(tbl, order_by))
            if limit is not None:
                stmt = stmt.limit(limit)
            rows = self.session.execute(stmt).mappings().all()
            return GatewayResponse(data=[dict(row) for row in rows])
        except (KeyError, ValueError) as e:
            return GatewayResponse(error=GatewayError(str(e), INVALID_REQUEST))
        except OverflowError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), OUT_OF_RANGE))
        except SQLAlchemyError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), DATABASE_ERROR))

    def count(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        group_by: str | None = None,
    ) -> GatewayResponse:
        """Count rows; with ``group_by`` the data is a ``{value: count}`` dict."""
        try:
            tbl = self._table(table)
            conditions = [_condition(tbl, f) for f in filters]
            if group_by is None:
                total = self.session.execute(select(func.count()).select_from(tbl).where(*conditions)).scalar_one()
                return GatewayResponse(data=total)
            key = tbl.c[group_by]
            stmt = select(key, func.count()).where(*conditions).group_by(key)
            return GatewayResponse(data={value: total for value, total in self.session.execute(stmt).all()})
        except (KeyError, ValueError) as e:
            return GatewayResponse(error=GatewayError(str(e), INVALID_REQUEST))
        except OverflowError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), OUT_OF_RANGE))
        except SQLAlchemyError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), DATABASE_ERROR))

    def insert(self, table: str, rows: Sequence[dict[str, Any]]) -> GatewayResponse:
        """Insert all rows in one transaction and return them as stored."""
        if not rows:
            return GatewayResponse(data=[])
        try:
            tbl = self._table(table)
            result = self.session.execute(insert(tbl).returning(*tbl.c), list(rows))
            inserted = [dict(row) for row in result.mappings().all()]
            self.session.commit()
            return GatewayResponse(data=inserted)
        except (KeyError, ValueError) as e:
            return GatewayResponse(error=GatewayError(str(e), INVALID_REQUEST))
        except OverflowError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), OUT_OF_RANGE))
        except IntegrityError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e.orig), classify_integrity_error(e)))
        except SQLAlchemyError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), DATABASE_ERROR))

    def update(self, table: str, patch: dict[str, Any], filters: Sequence[Filter]) -> GatewayResponse:
        """Apply ``patch`` to matching rows and return them as stored."""
        try:
            if not filters:
                raise ValueError("Refusing to update without filters")
            tbl = self._table(table)
            stmt = (
                update(tbl)
                .where(*[_condition(tbl, f) for f in filters])
                .values(**patch)
                .returning(*tbl.c)
            )
            updated = [dict(row) for row in self.session.execute(stmt).mappings().all()]
            self.session.commit()
            return GatewayResponse(data=updated)
        except (KeyError, ValueError) as e:
            return GatewayResponse(error=GatewayError(str(e), INVALID_REQUEST))
        except OverflowError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), OUT_OF_RANGE))
        except IntegrityError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e.orig), classify_integrity_error(e)))
        except SQLAlchemyError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), DATABASE_ERROR))

    def delete(
        self,
        table: str,
        filters: Sequence[Filter],
        cascade: Sequence[tuple[str, str]] = (),
    ) -> GatewayResponse:
        """Delete matching rows; data is the number of rows removed.

        ``cascade`` lists ``(child table, foreign key)`` pairs. Child rows that
        point at the matched rows are deleted first, in the same transaction.
        """
        try:
            if not filters:
                raise ValueError("Refusing to delete without filters")
            tbl = self._table(table)
            conditions = [_condition(tbl, f) for f in filters]
            children = []
            for child_name, foreign_key in cascade:
                child = self._table(child_name)
                children.append(delete(child).where(child.c[foreign_key].in_(select(tbl.c.id).where(*conditions))))
            for stmt in children:
                self.session.execute(stmt)
            result = self.session.execute(delete(tbl).where(*conditions))
            self.session.commit()
            return GatewayResponse(data=result.rowcount)
        except (KeyError, ValueError) as e:
            return GatewayResponse(error=GatewayError(str(e), INVALID_REQUEST))
        except OverflowError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), OUT_OF_RANGE))
        except IntegrityError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e.orig), classify_integrity_error(e)))
        except SQLAlchemyError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), DATABASE_ERROR))

    def replace(self, table: str, filters: Sequence[Filter], rows: Sequence[dict[str, Any]]) -> GatewayResponse:
        """Swap the rows matching ``filters`` for ``rows`` in one transaction."""
        try:
            if not filters:
                raise ValueError("Refusing to replace without filters")
            tbl = self._table(table)
            self.session.execute(delete(tbl).where(*[_condition(tbl, f) for f in filters]))
            inserted = []
            if rows:
                result = self.session.execute(insert(tbl).returning(*tbl.c), list(rows))
                inserted = [dict(row) for row in result.mappings().all()]
            self.session.commit()
            return GatewayResponse(data=inserted)
        except (KeyError, ValueError) as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), INVALID_REQUEST))
        except OverflowError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), OUT_OF_RANGE))
        except IntegrityError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e.orig), classify_integrity_error(e)))
        except SQLAlchemyError as e:
            self.session.rollback()
            return GatewayResponse(error=GatewayError(str(e), DATABASE_ERROR))
