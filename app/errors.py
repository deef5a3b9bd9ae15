"""Error taxonomy shared by services, the gateway and the HTTP layer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error category exposed to API callers."""

    PARSE = "parse_error"
    MALFORMED_ROW = "malformed_row"
    EMPTY_INPUT = "empty_input"
    PERSISTENCE = "persistence_error"
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    IN_USE = "in_use"
    VALIDATION = "validation_error"
    CONFIGURATION = "configuration_error"
    UPSTREAM = "upstream_error"


class AppError(Exception):
    """Base class for errors raised inside a service operation."""

    kind: ErrorKind = ErrorKind.PERSISTENCE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(AppError):
    """CSV text could not be parsed into rows."""

    kind = ErrorKind.PARSE


class MalformedRowError(AppError):
    """A CSV row carries a non-integer ID or confidence level."""

    kind = ErrorKind.MALFORMED_ROW


class EmptyInputError(AppError):
    """CSV text contains no data rows."""

    kind = ErrorKind.EMPTY_INPUT


class PersistenceError(AppError):
    """The persistence gateway reported an error."""

    kind = ErrorKind.PERSISTENCE


class DuplicateKeyError(AppError):
    """A row with the same unique code already exists."""

    kind = ErrorKind.DUPLICATE_KEY


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class InUseError(AppError):
    """Row cannot be deleted because other rows reference it."""

    kind = ErrorKind.IN_USE


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION


class ConfigurationError(AppError):
    kind = ErrorKind.CONFIGURATION


class UpstreamError(AppError):
    """The external translation model failed or answered garbage."""

    kind = ErrorKind.UPSTREAM
