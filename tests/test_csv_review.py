"""Tests for the transcription CSV review report."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from app.gateway import Gateway
from app.services.csv_review import Person, review_csv, review_rows
from app.services.expression import ExpressionRule, default_rules

HEADER = "ID,Timestamp,Rol,Texto_Original,Texto_Normalizado,Nivel_de_Confianza"
RULES = default_rules("es-ES")


def _row(
    id_: str,
    rol: str = "E",
    original: str = "Trabajamos con familias",
    normalized: str = "Trabajamos con familias del barrio.",
    confidence: str = "5",
    timestamp: str = "00:00:01",
    **extra,
) -> dict[str, str]:
    return {
        "ID": id_,
        "Timestamp": timestamp,
        "Rol": rol,
        "Texto_Original": original,
        "Texto_Normalizado": normalized,
        "Nivel_de_Confianza": confidence,
        **extra,
    }


def _end(id_: str) -> dict[str, str]:
    return _row(id_, rol="S", original="Fin.", normalized="Fin.")


def _types(issues) -> list[str]:
    return [issue.type for issue in issues]


class TestBlockingErrors:
    def test_clean_file_is_valid(self):
        """Test that a clean file has no issues."""
        report = review_rows([_row("1", rol="I"), _row("2"), _end("3")], RULES)
        assert report.is_valid
        assert report.blocking_errors == []
        assert report.warnings == []
        assert report.segments_with_issues == []

    def test_empty(self):
        """Test that no rows is a blocking error."""
        report = review_rows([], RULES)
        assert not report.is_valid
        assert _types(report.blocking_errors) == ["empty_file"]

    def test_no_valid_ids(self):
        """Test a file with no numeric IDs."""
        report = review_rows([_row("a"), _row("b", rol="S")], RULES)
        assert "invalid_ids" in _types(report.blocking_errors)

    def test_id_gaps(self):
        """Test that missing IDs are listed."""
        report = review_rows([_row("1"), _row("2"), _row("5"), _end("6")], RULES)
        gap = next(issue for issue in report.blocking_errors if issue.type == "id_gaps")
        assert gap.details == "Missing IDs: 3, 4"

    def test_repeated_ids_are_a_warning(self):
        """Test that repeated IDs warn but do not block."""
        report = review_rows([_row("1"), _row("2"), _row("2"), _end("3")], RULES)
        assert report.is_valid
        assert "duplicate_ids" in _types(report.warnings)

    def test_invalid_confidence(self):
        """Test that a non-numeric confidence level blocks."""
        report = review_rows([_row("1", confidence="alta"), _end("2")], RULES)
        issue = report.blocking_errors[0]
        assert issue.type == "invalid_confidence"
        assert issue.details == "Value: alta"

    def test_low_confidence_blocks_and_medium_warns(self):
        """Test the confidence thresholds."""
        report = review_rows([_row("1", confidence="2"), _row("2", confidence="3"), _end("3")], RULES)
        low = next(issue for issue in report.blocking_errors if issue.type == "low_confidence")
        medium = next(issue for issue in report.warnings if issue.type == "medium_confidence")
        assert low.details == "Segments: 1"
        assert medium.details == "Segments: 2"

    def test_missing_end_mark(self):
        """Test that the last row must be a system row."""
        report = review_rows([_row("1"), _row("2")], RULES)
        assert "missing_end_mark" in _types(report.blocking_errors)
        assert not report.is_valid


class TestNormalizedText:
    def _issues(self, row: dict[str, str]):
        report = review_rows([row, _end("2")], RULES)
        return report.segments_with_issues[0] if report.segments_with_issues else None

    def test_too_short(self):
        """Test the minimum normalized length."""
        issues = self._issues(_row("1", original="bien", normalized="Bien."))
        assert issues.errors == ["Normalized text too short (5 characters)"]

    def test_allowed_short_normalization(self):
        """Test that allowed expressions may be short."""
        rules = RULES + [ExpressionRule("Gracias.", ["Gracias."], True)]
        report = review_rows([_row("1", original="Gracias.", normalized="Gracias."), _end("2")], rules)
        assert report.segments_with_issues == []

    def test_known_expression_left_unnormalized(self):
        """Test a dictionary expression copied as is."""
        issues = self._issues(_row("1", original="sí", normalized="Sí"))
        assert any('The expression "sí" should be normalized' in error for error in issues.errors)

    def test_known_expression_with_unexpected_normalization(self):
        """Test a normalization missing every suggestion."""
        issues = self._issues(_row("1", original="sí", normalized="Dice que está de acuerdo con eso."))
        assert issues.errors == []
        assert issues.warnings[0].startswith('The normalization of "sí" may not be optimal')

    def test_known_expression_properly_normalized(self):
        """Test a normalization containing a suggestion."""
        assert self._issues(_row("1", original="sí", normalized="Respuesta afirmativa del entrevistado.")) is None

    def test_long_text_without_punctuation(self):
        """Test the warning for long unpunctuated text."""
        text = "Trabajamos con las familias del barrio durante muchos años sin parar nunca"
        issues = self._issues(_row("1", original=text, normalized=text))
        assert issues.warnings == ["Normalized text is long and has no punctuation"]

    def test_missing_timestamp(self):
        """Test that "--" counts as a missing timestamp."""
        issues = self._issues(_row("1", timestamp="--"))
        assert issues.warnings == ["Segment has no timestamp"]

    def test_system_rows_are_exempt(self):
        """Test that system rows skip the text checks."""
        report = review_rows([_row("1", rol="S", original="x", normalized="x", timestamp="")], RULES)
        assert report.segments_with_issues == []


class TestSpeakers:
    INTERVIEWEE = Person("Marta", "Rivas")
    RESEARCHER = Person("Luis", "Pardo")

    def test_matching_speakers(self):
        """Test speakers matching by full name or surname."""
        rows = [
            _row("1", rol="I", Hablante="Luis Pardo"),
            _row("2", rol="E", Hablante="Marta"),
            _row("3", rol="E", Hablante="Sra. Rivas"),
            _row("4", rol="S", original="Fin.", normalized="Fin.", Hablante=""),
        ]
        report = review_rows(rows, RULES, self.INTERVIEWEE, self.RESEARCHER)
        assert report.warnings == []

    def test_mismatched_speaker(self):
        """Test that an unexpected speaker warns per row and overall."""
        rows = [_row("1", rol="E", Hablante="Pedro Gil"), _row("2", rol="S", original="Fin.", normalized="Fin.", Hablante="")]
        report = review_rows(rows, RULES, self.INTERVIEWEE, self.RESEARCHER)
        assert _types(report.warnings) == ["inconsistent_interviewee"]
        assert report.is_valid
        assert "Pedro Gil" in report.segments_with_issues[0].warnings[0]

    def test_skipped_without_speaker_column(self):
        """Test that the check needs the Hablante column."""
        report = review_rows([_row("1"), _end("2")], RULES, self.INTERVIEWEE, self.RESEARCHER)
        assert report.warnings == []


class TestStats:
    def test_stats(self):
        """Test the summary statistics."""
        rows = [
            _row("1", rol="I", original="abcd", normalized="abcdefghijk", confidence="5"),
            _row("2", original="abcdefg", normalized="abcdefghijklmn", confidence="4", timestamp=""),
            _row("3", rol="S", original="Fin.", normalized="Fin.", confidence="5"),
        ]
        stats = review_rows(rows, RULES).stats
        assert stats.total_segments == 3
        assert stats.roles_distribution == {"I": 1, "E": 1, "S": 1}
        assert stats.confidence_levels == {"5": 2, "4": 1}
        assert stats.average_original_length == 5
        assert stats.average_normalized_length == 10
        assert stats.missing_timestamps == 1


class TestReviewCsv:
    """Service entry point: parses, loads rules and people, never writes."""

    def test_parse_error_is_reported(self, gateway: Gateway):
        """Test that a parse error becomes a report, not a failure."""
        report = review_csv(gateway, "Foo,Bar\n1,2\n").data
        assert not report.is_valid
        assert _types(report.blocking_errors) == ["parse_error"]

    def test_uses_people_from_the_database(self, gateway: Gateway, interviewee: dict, researcher: dict):
        """Test that speaker names come from the stored people."""
        text = (
            f"{HEADER},Hablante\n"
            "1,00:01,I,¿Cómo empezó todo?,¿Cómo empezó todo el proyecto?,5,Luis Pardo\n"
            "2,00:05,E,Empezó en 2019,Empezó en 2019 con tres personas.,5,Otra Persona\n"
            "3,00:09,S,Fin.,Fin.,5,\n"
        )
        report = review_csv(gateway, text, interviewee["id"], researcher["id"]).data
        assert _types(report.warnings) == ["inconsistent_interviewee"]
        assert gateway.count("transcripciones").data == 0

    def test_falls_back_to_builtin_rules(self, gateway: Gateway):
        """Test the built-in rules when the dictionary is empty."""
        text = f"{HEADER}\n1,00:01,E,sí,sí,5\n2,00:02,S,Fin.,Fin.,5\n"
        with patch("app.services.expression.ExpressionService.list_for_language") as mock_list:
            mock_list.return_value.success = False
            report = review_csv(gateway, text).data
        errors = report.segments_with_issues[0].errors
        assert any("should be normalized" in error for error in errors)

    def test_endpoint(self, client: TestClient):
        """Test the review endpoint."""
        text = f"{HEADER}\n1,00:01,E,Trabajamos con familias,Trabajamos con familias del barrio.,2\n"
        response = client.post("/api/v1/transcriptions/review", json={"csv_text": text})
        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert {"low_confidence", "missing_end_mark"} <= {issue["type"] for issue in data["blocking_errors"]}
        assert data["stats"]["total_segments"] == 1
