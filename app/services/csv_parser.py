"""Parsing of transcription CSV exports into header-keyed rows."""

import csv
import io

from app.errors import ParseError

TRANSCRIPTION_COLUMNS = (
    "ID",
    "Timestamp",
    "Rol",
    "Texto_Original",
    "Texto_Normalizado",
    "Nivel_de_Confianza",
)
# Speaker name column present in exports; ignored by the loader
OPTIONAL_COLUMNS = ("Hablante",)


def _is_blank(row: list[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def _check_header(header: list[str]) -> None:
    duplicated = sorted({name for name in header if header.count(name) > 1})
    if duplicated:
        raise ParseError(f"Duplicated columns in CSV header: {', '.join(duplicated)}")

    missing = [name for name in TRANSCRIPTION_COLUMNS if name not in header]
    if missing:
        raise ParseError(f"Missing required columns: {', '.join(missing)}")

    unknown = [name for name in header if name not in TRANSCRIPTION_COLUMNS and name not in OPTIONAL_COLUMNS]
    if unknown:
        raise ParseError(f"Unexpected columns: {', '.join(unknown)}")


def parse_transcription_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into rows keyed by header name, in file order.

    Blank lines are skipped. Raises ParseError if the header is wrong or if any
    row is syntactically broken; no partial result is ever returned.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    header: list[str] | None = None
    rows: list[dict[str, str]] = []
    bad_lines: list[str] = []

    try:
        for record in reader:
            if _is_blank(record):
                continue
            if header is None:
                header = [name.strip() for name in record]
                _check_header(header)
                continue
            if len(record) != len(header):
                bad_lines.append(f"line {reader.line_num} has {len(record)} fields, expected {len(header)}")
                continue
            rows.append(dict(zip(header, record)))
    except csv.Error as e:
        raise ParseError(f"Malformed CSV at line {reader.line_num}: {e}") from None

    if header is None:
        raise ParseError("CSV file has no header row")
    if bad_lines:
        raise ParseError("Malformed CSV rows: " + "; ".join(bad_lines))
    return rows
