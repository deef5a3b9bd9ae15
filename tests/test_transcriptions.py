"""Tests for transcription loading, listing and export."""

import io
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app.errors import ErrorKind
from app.gateway import Gateway
from app.services.interview import get_interview_service
from app.services.transcription import TranscriptionService

HEADER = "ID,Timestamp,Rol,Texto_Original,Texto_Normalizado,Nivel_de_Confianza\n"
SAMPLE_CSV = (
    HEADER
    + "1,00:00:01,I,¿Cómo empezó el proyecto?,¿Cómo empezó el proyecto de la fundación?,5\n"
    + "2,00:00:07,E,Empezó en 2019 con tres personas,Empezó en 2019 con tres personas.,4\n"
    + "3,00:00:15,S,Fin.,Fin.,5\n"
)


def _stored(gateway: Gateway, interview_id: int) -> list[dict]:
    return TranscriptionService().list_segments(gateway, interview_id).data


class TestLoadCsv:
    """Service-level bulk load."""

    def test_load_stores_every_segment(self, gateway: Gateway, interview: dict):
        """Test that every CSV row becomes a stored segment."""
        result = TranscriptionService().load_csv(gateway, interview["id"], SAMPLE_CSV)
        assert result.success
        assert result.count == 3
        assert result.message == "Loaded 3 transcription segments"

        segments = _stored(gateway, interview["id"])
        assert [s["id_segmento"] for s in segments] == [1, 2, 3]
        assert segments[1]["rol"] == "E"
        assert segments[1]["nivel_confianza"] == 4
        assert segments[2]["texto_normalizado"] == "Fin."
        assert all(s["entrevista_id"] == interview["id"] for s in segments)

    def test_empty_timestamp_stored_as_null(self, gateway: Gateway, interview: dict):
        """Test that an empty Timestamp column is stored as NULL."""
        TranscriptionService().load_csv(gateway, interview["id"], HEADER + "1,,S,Fin.,Fin.,5\n")
        assert _stored(gateway, interview["id"])[0]["timestamp"] is None

    def test_loading_twice_appends(self, gateway: Gateway, interview: dict):
        """Segment IDs are not unique per interview; a second load adds rows."""
        service = TranscriptionService()
        service.load_csv(gateway, interview["id"], SAMPLE_CSV)
        service.load_csv(gateway, interview["id"], SAMPLE_CSV)
        assert len(_stored(gateway, interview["id"])) == 6

    def test_empty_input_makes_no_gateway_call(self):
        """Test that a header-only CSV never reaches the database."""
        gateway = MagicMock(spec=Gateway)
        result = TranscriptionService().load_csv(gateway, 1, HEADER)
        assert not result.success
        assert result.kind == ErrorKind.EMPTY_INPUT
        assert gateway.method_calls == []

    def test_parse_error_stores_nothing(self, gateway: Gateway, interview: dict):
        """Test that a short row aborts the load before any insert."""
        result = TranscriptionService().load_csv(gateway, interview["id"], HEADER + "1,00:01,I\n")
        assert result.kind == ErrorKind.PARSE
        assert _stored(gateway, interview["id"]) == []

    def test_malformed_row_stores_nothing(self, gateway: Gateway, interview: dict):
        """Test that a non-integer confidence level aborts the whole batch."""
        text = HEADER + "1,00:01,I,hola,Saludo inicial.,5\n2,00:02,E,sí,Afirmación.,alta\n"
        result = TranscriptionService().load_csv(gateway, interview["id"], text)
        assert result.kind == ErrorKind.MALFORMED_ROW
        assert "Row 2" in result.error
        assert _stored(gateway, interview["id"]) == []

    def test_out_of_range_id_stores_nothing(self, gateway: Gateway, interview: dict):
        """Test that an ID too large for the column is a malformed row, not a crash."""
        text = HEADER + "1,00:01,I,hola,Saludo inicial.,5\n99999999999999999999,00:02,S,Fin.,Fin.,5\n"
        result = TranscriptionService().load_csv(gateway, interview["id"], text)
        assert not result.success
        assert result.kind == ErrorKind.MALFORMED_ROW
        assert result.error == "Row 2: column ID is out of range, got '99999999999999999999'"
        assert gateway.count("transcripciones").data == 0

    def test_rejected_insert_is_all_or_nothing(self, gateway: Gateway, interview: dict):
        """A foreign-key violation rejects the whole batch."""
        result = TranscriptionService().load_csv(gateway, 999, SAMPLE_CSV)
        assert not result.success
        assert result.kind == ErrorKind.PERSISTENCE
        assert result.error == "Error saving the transcription segments"
        assert gateway.count("transcripciones").data == 0


class TestListing:
    """Reading segments back and counting them per interview."""

    def test_segments_ordered_by_segment_number(self, gateway: Gateway, interview: dict):
        """Test that segments come back sorted by segment number, not insertion order."""
        text = HEADER + "3,,S,Fin.,Fin.,5\n1,,I,hola,Saludo inicial.,5\n2,,E,sí,Respuesta afirmativa.,4\n"
        TranscriptionService().load_csv(gateway, interview["id"], text)
        assert [s["id_segmento"] for s in _stored(gateway, interview["id"])] == [1, 2, 3]

    def test_interviews_with_counts(self, gateway: Gateway, interview: dict):
        """Test that the count reflects a load made in between."""
        service = TranscriptionService()
        before = service.list_interviews_with_counts(gateway)
        assert before.data[0]["cantidad_segmentos"] == 0

        service.load_csv(gateway, interview["id"], SAMPLE_CSV)
        after = service.list_interviews_with_counts(gateway)
        assert after.count == 1
        assert after.data[0]["entrevista"]["codigo_entrevista"] == "FUAB01"
        assert after.data[0]["entrevista"]["institucion"]["codigo"] == "FUAB"
        assert after.data[0]["cantidad_segmentos"] == 3

    def test_counts_are_stable_without_writes(self, gateway: Gateway, interview: dict):
        """Test that two reads with no write in between return the same counts."""
        second = get_interview_service().create(
            gateway,
            {
                "codigo_entrevista": "FUAB02",
                "institucion_id": interview["institucion_id"],
                "entrevistado_id": interview["entrevistado_id"],
                "investigador_id": interview["investigador_id"],
                "numero_entrevista": 2,
            },
        ).data
        third = get_interview_service().create(
            gateway,
            {
                "codigo_entrevista": "FUAB03",
                "institucion_id": interview["institucion_id"],
                "entrevistado_id": interview["entrevistado_id"],
                "numero_entrevista": 3,
            },
        ).data
        service = TranscriptionService()
        service.load_csv(gateway, interview["id"], SAMPLE_CSV)
        service.load_csv(gateway, second["id"], HEADER + "1,,S,Fin.,Fin.,5\n")

        first_read = service.list_interviews_with_counts(gateway)
        second_read = service.list_interviews_with_counts(gateway)
        assert first_read.data == second_read.data

        counts = {item["entrevista"]["id"]: item["cantidad_segmentos"] for item in second_read.data}
        assert counts == {interview["id"]: 3, second["id"]: 1, third["id"]: 0}

    def test_export_round_trips_through_loader(self, gateway: Gateway, interview: dict):
        """Test that exporting stored segments reproduces the loaded CSV."""
        service = TranscriptionService()
        service.load_csv(gateway, interview["id"], SAMPLE_CSV)
        exported = service.export_csv(_stored(gateway, interview["id"]))
        assert exported.splitlines()[0] == HEADER.strip()
        assert exported == SAMPLE_CSV


class TestTranscriptionApi:
    """HTTP endpoints for loading and reading segments."""

    def test_load_endpoint(self, client: TestClient, interview: dict):
        """Test loading CSV text through the JSON endpoint."""
        response = client.post(
            "/api/v1/transcriptions/load",
            json={"interview_id": interview["id"], "csv_text": SAMPLE_CSV},
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 3, "message": "Loaded 3 transcription segments"}

    def test_load_unknown_interview(self, client: TestClient):
        """Test loading into an interview that does not exist."""
        response = client.post("/api/v1/transcriptions/load", json={"interview_id": 404, "csv_text": SAMPLE_CSV})
        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"

    def test_load_empty_csv(self, client: TestClient, interview: dict):
        """Test that a header-only CSV is a 400 with kind empty_input."""
        response = client.post("/api/v1/transcriptions/load", json={"interview_id": interview["id"], "csv_text": HEADER})
        assert response.status_code == 400
        assert response.json()["detail"] == {"error": "The CSV file contains no data rows", "kind": "empty_input"}

    def test_load_out_of_range_confidence(self, client: TestClient, interview: dict):
        """Test that an oversized number is a 400 with an error body."""
        text = HEADER + "1,00:01,S,Fin.,Fin.,99999999999999999999\n"
        response = client.post("/api/v1/transcriptions/load", json={"interview_id": interview["id"], "csv_text": text})
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "malformed_row"

    def test_upload_file(self, client: TestClient, interview: dict):
        """Test uploading a CSV file and listing the stored segments."""
        response = client.post(
            f"/api/v1/interviews/{interview['id']}/transcriptions",
            files={"file": ("FUAB01.csv", io.BytesIO(SAMPLE_CSV.encode("utf-8")), "text/csv")},
        )
        assert response.status_code == 200
        assert response.json()["count"] == 3

        listed = client.get(f"/api/v1/interviews/{interview['id']}/transcriptions").json()
        assert listed["total"] == 3
        assert listed["items"][0]["texto_original"] == "¿Cómo empezó el proyecto?"

    def test_upload_rejects_other_extensions(self, client: TestClient, interview: dict):
        """Test that only .csv and .txt uploads are accepted."""
        response = client.post(
            f"/api/v1/interviews/{interview['id']}/transcriptions",
            files={"file": ("notes.pdf", io.BytesIO(b"%PDF"), "application/pdf")},
        )
        assert response.status_code == 400

    def test_upload_rejects_non_utf8(self, client: TestClient, interview: dict):
        """Test that a Latin-1 encoded upload is a parse error."""
        response = client.post(
            f"/api/v1/interviews/{interview['id']}/transcriptions",
            files={"file": ("latin1.csv", io.BytesIO(SAMPLE_CSV.encode("latin-1")), "text/csv")},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "parse_error"

    def test_download_csv(self, client: TestClient, interview: dict):
        """Test downloading the segments as a CSV attachment."""
        client.post("/api/v1/transcriptions/load", json={"interview_id": interview["id"], "csv_text": SAMPLE_CSV})
        response = client.get(f"/api/v1/interviews/{interview['id']}/transcriptions/download")
        assert response.status_code == 200
        assert 'filename="FUAB01.csv"' in response.headers["content-disposition"]
        assert response.text == SAMPLE_CSV

    def test_overview_lists_counts(self, client: TestClient, interview: dict):
        """Test the interview overview with segment counts."""
        client.post("/api/v1/transcriptions/load", json={"interview_id": interview["id"], "csv_text": SAMPLE_CSV})
        data = client.get("/api/v1/transcriptions/").json()
        assert data["total"] == 1
        assert data["items"][0]["cantidad_segmentos"] == 3
