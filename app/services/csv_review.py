"""Quality review of a transcription CSV before it is loaded.

The review reads the allowed-expression dictionary and, optionally, the
interviewee and researcher of the interview, then reports blocking errors,
warnings and statistics. It never writes.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field

from app.errors import AppError
from app.gateway import Gateway
from app.results import ActionResult
from app.services.csv_parser import parse_transcription_csv
from app.services.expression import ExpressionRule, get_expression_service
from app.services.interviewee import get_interviewee_service
from app.services.researcher import get_researcher_service

logger = logging.getLogger("sustrato")

MIN_NORMALIZED_LENGTH = 10
LONG_TEXT_LENGTH = 50
LOW_CONFIDENCE = 2
MEDIUM_CONFIDENCE = 3
SYSTEM_ROLE = "S"
EMPTY_TIMESTAMPS = ("", "--")


@dataclass
class ReviewIssue:
    type: str
    message: str
    details: str | None = None


@dataclass
class SegmentIssues:
    id: str
    row: dict[str, str]
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ReviewStats:
    total_segments: int = 0
    roles_distribution: dict[str, int] = field(default_factory=dict)
    confidence_levels: dict[str, int] = field(default_factory=dict)
    average_original_length: int = 0
    average_normalized_length: int = 0
    missing_timestamps: int = 0


@dataclass
class ReviewReport:
    is_valid: bool = True
    blocking_errors: list[ReviewIssue] = field(default_factory=list)
    warnings: list[ReviewIssue] = field(default_factory=list)
    stats: ReviewStats = field(default_factory=ReviewStats)
    segments_with_issues: list[SegmentIssues] = field(default_factory=list)

    def issues_for(self, row: dict[str, str]) -> SegmentIssues:
        """Get (or start) the issue list of a row, keyed by its ID column."""
        for issues in self.segments_with_issues:
            if issues.id == row["ID"]:
                return issues
        issues = SegmentIssues(id=row["ID"], row=row)
        self.segments_with_issues.append(issues)
        return issues


@dataclass
class Person:
    """Name of the interviewee or researcher expected to speak."""

    nombre: str
    apellido: str

    @property
    def full_name(self) -> str:
        return f"{self.nombre} {self.apellido}"

    def matches(self, speaker: str) -> bool:
        speaker = speaker.lower()
        words = speaker.split()
        first, last = self.nombre.lower(), self.apellido.lower()
        return (
            speaker == self.full_name.lower()
            or (first in speaker and last in speaker)
            or first in words
            or last in words
        )


def _is_missing_timestamp(value: str) -> bool:
    return value.strip() in EMPTY_TIMESTAMPS


def _to_int(value: str) -> int | None:
    try:
        return int(value.strip(), 10)
    except (ValueError, AttributeError):
        return None


def _round(value: float) -> int:
    return int(value + 0.5)


def check_ids(rows: list[dict[str, str]], report: ReviewReport) -> None:
    ids = [i for i in (_to_int(row["ID"]) for row in rows) if i is not None]
    if not ids:
        report.blocking_errors.append(ReviewIssue("invalid_ids", "No valid segment IDs found in the CSV"))
        return

    present = set(ids)
    missing = sorted(set(range(min(ids), max(ids) + 1)) - present)
    if missing:
        report.blocking_errors.append(
            ReviewIssue(
                "id_gaps",
                "Some transcription segments are missing",
                f"Missing IDs: {', '.join(str(i) for i in missing)}",
            )
        )

    repeated = sorted(i for i, n in Counter(ids).items() if n > 1)
    if repeated:
        report.warnings.append(
            ReviewIssue(
                "duplicate_ids",
                "Some segment IDs appear more than once",
                f"IDs: {', '.join(str(i) for i in repeated)}",
            )
        )


def check_confidence(rows: list[dict[str, str]], report: ReviewReport) -> None:
    low: list[str] = []
    medium: list[str] = []
    for row in rows:
        level = _to_int(row["Nivel_de_Confianza"])
        if level is None:
            report.blocking_errors.append(
                ReviewIssue(
                    "invalid_confidence",
                    f"Invalid confidence level in segment {row['ID']}",
                    f"Value: {row['Nivel_de_Confianza']}",
                )
            )
        elif level <= LOW_CONFIDENCE:
            low.append(row["ID"])
        elif level == MEDIUM_CONFIDENCE:
            medium.append(row["ID"])

    if low:
        report.blocking_errors.append(
            ReviewIssue("low_confidence", "Segments with low confidence (<=2) found", f"Segments: {', '.join(low)}")
        )
    if medium:
        report.warnings.append(
            ReviewIssue("medium_confidence", "Some segments have medium confidence (3)", f"Segments: {', '.join(medium)}")
        )


def check_end_mark(rows: list[dict[str, str]], report: ReviewReport) -> None:
    if rows and rows[-1]["Rol"] != SYSTEM_ROLE:
        report.blocking_errors.append(
            ReviewIssue(
                "missing_end_mark",
                "No end-of-transcription mark found",
                f'The last segment must have role "{SYSTEM_ROLE}" (system)',
            )
        )


def check_normalized_text(rows: list[dict[str, str]], report: ReviewReport, rules: list[ExpressionRule]) -> None:
    by_text = {rule.expresion_original.lower(): rule for rule in rules}
    allowed_as_normalization = {rule.expresion_original.lower() for rule in rules if rule.es_permitida_como_normalizacion}

    for row in rows:
        if row["Rol"] == SYSTEM_ROLE:
            continue
        errors: list[str] = []
        warnings: list[str] = []
        original = row["Texto_Original"].strip()
        normalized = row["Texto_Normalizado"].strip()

        if len(normalized) < MIN_NORMALIZED_LENGTH and normalized.lower() not in allowed_as_normalization:
            errors.append(f"Normalized text too short ({len(normalized)} characters)")

        rule = by_text.get(original.lower())
        if rule and not rule.es_permitida_como_normalizacion:
            suggestions = ", ".join(rule.normalizaciones_esperadas)
            if original.lower() == normalized.lower():
                errors.append(f'The expression "{original}" should be normalized. Suggestions: {suggestions}')
            elif not any(expected.lower() in normalized.lower() for expected in rule.normalizaciones_esperadas):
                warnings.append(f'The normalization of "{original}" may not be optimal. Suggestions: {suggestions}')

        if len(normalized) > LONG_TEXT_LENGTH and not any(mark in normalized for mark in ".!?"):
            warnings.append("Normalized text is long and has no punctuation")

        if _is_missing_timestamp(row["Timestamp"]):
            warnings.append("Segment has no timestamp")

        if errors or warnings:
            issues = report.issues_for(row)
            issues.errors.extend(errors)
            issues.warnings.extend(warnings)


def check_speakers(rows: list[dict[str, str]], report: ReviewReport, interviewee: Person, researcher: Person) -> None:
    expected = {"E": ("interviewee", interviewee), "I": ("researcher", researcher)}
    mismatches: dict[str, list[str]] = {"E": [], "I": []}

    for row in rows:
        if row["Rol"] not in expected:
            continue
        role_name, person = expected[row["Rol"]]
        speaker = row.get("Hablante", "")
        if person.matches(speaker):
            continue
        mismatches[row["Rol"]].append(row["ID"])
        report.issues_for(row).warnings.append(
            f'Speaker "{speaker}" does not match the selected {role_name} ({person.full_name})'
        )

    for role, ids in mismatches.items():
        if ids:
            role_name = expected[role][0]
            report.warnings.append(
                ReviewIssue(
                    f"inconsistent_{role_name}",
                    f"{len(ids)} segments have a speaker that does not match the selected {role_name}",
                    f"Segments: {', '.join(ids)}",
                )
            )


def compute_stats(rows: list[dict[str, str]]) -> ReviewStats:
    total = len(rows)
    if not total:
        return ReviewStats()
    return ReviewStats(
        total_segments=total,
        roles_distribution=dict(Counter(row["Rol"] for row in rows)),
        confidence_levels=dict(Counter(row["Nivel_de_Confianza"] for row in rows)),
        average_original_length=_round(sum(len(row["Texto_Original"]) for row in rows) / total),
        average_normalized_length=_round(sum(len(row["Texto_Normalizado"]) for row in rows) / total),
        missing_timestamps=sum(1 for row in rows if _is_missing_timestamp(row["Timestamp"])),
    )


def review_rows(
    rows: list[dict[str, str]],
    rules: list[ExpressionRule],
    interviewee: Person | None = None,
    researcher: Person | None = None,
) -> ReviewReport:
    """Run every check over already-parsed rows."""
    report = ReviewReport()
    if not rows:
        report.blocking_errors.append(ReviewIssue("empty_file", "The CSV file is empty"))
        report.is_valid = False
        return report

    check_ids(rows, report)
    check_confidence(rows, report)
    check_end_mark(rows, report)
    check_normalized_text(rows, report, rules)
    if interviewee and researcher and "Hablante" in rows[0]:
        check_speakers(rows, report, interviewee, researcher)

    report.stats = compute_stats(rows)
    report.is_valid = not report.blocking_errors
    return report


def _load_person(gateway: Gateway, service, record_id: int | None) -> Person | None:
    if record_id is None:
        return None
    result = service.get(gateway, record_id)
    if not result.success:
        logger.warning("Speaker check skipped: %s", result.error)
        return None
    return Person(nombre=result.data["nombre"], apellido=result.data["apellido"])


def review_csv(
    gateway: Gateway,
    csv_text: str,
    interviewee_id: int | None = None,
    researcher_id: int | None = None,
    idioma: str = "es-ES",
) -> ActionResult:
    """Review a transcription CSV; the report is returned even when it is not valid."""
    try:
        rows = parse_transcription_csv(csv_text)
    except AppError as e:
        report = ReviewReport(
            is_valid=False,
            blocking_errors=[ReviewIssue("parse_error", "The CSV file could not be parsed", e.message)],
        )
        return ActionResult.ok(report)

    rules = get_expression_service().load_rules(gateway, idioma)
    interviewee = _load_person(gateway, get_interviewee_service(), interviewee_id)
    researcher = _load_person(gateway, get_researcher_service(), researcher_id)
    return ActionResult.ok(review_rows(rows, rules, interviewee, researcher))
