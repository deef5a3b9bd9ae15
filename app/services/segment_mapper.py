"""Mapping of parsed CSV rows onto transcription segment candidates."""

import re
from dataclasses import asdict, dataclass

from app.errors import MalformedRowError

_INTEGER = re.compile(r"[+-]?\d+")

# Segment columns are plain INTEGER; stay inside the 32-bit range every backend accepts
MIN_INTEGER = -(2**31)
MAX_INTEGER = 2**31 - 1


@dataclass
class SegmentCandidate:
    """Segment ready to insert, minus its owning interview."""

    id_segmento: int
    timestamp: str | None
    rol: str
    texto_original: str
    texto_normalizado: str
    nivel_confianza: int

    def to_row(self, interview_id: int) -> dict:
        return {"entrevista_id": interview_id, **asdict(self)}


def _parse_int(value: str, column: str, position: int) -> int:
    cleaned = (value or "").strip()
    if not _INTEGER.fullmatch(cleaned):
        raise MalformedRowError(f"Row {position}: column {column} must be an integer, got '{value}'")
    number = int(cleaned, 10)
    if not MIN_INTEGER <= number <= MAX_INTEGER:
        raise MalformedRowError(f"Row {position}: column {column} is out of range, got '{value}'")
    return number


def map_row(row: dict[str, str], position: int = 1) -> SegmentCandidate:
    """Build a candidate from one row. ``position`` is the 1-based data row index used in messages."""
    return SegmentCandidate(
        id_segmento=_parse_int(row["ID"], "ID", position),
        timestamp=row["Timestamp"] or None,
        rol=row["Rol"],
        texto_original=row["Texto_Original"],
        texto_normalizado=row["Texto_Normalizado"],
        nivel_confianza=_parse_int(row["Nivel_de_Confianza"], "Nivel_de_Confianza", position),
    )


def map_rows(rows: list[dict[str, str]]) -> list[SegmentCandidate]:
    """Map rows independently, in input order. The first malformed row aborts the batch."""
    return [map_row(row, position) for position, row in enumerate(rows, start=1)]
