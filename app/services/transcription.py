"""Transcription loading, retrieval and export."""

import csv
import io
import logging

from app.errors import AppError, EmptyInputError
from app.gateway import Gateway, eq
from app.results import ActionResult
from app.services.csv_parser import TRANSCRIPTION_COLUMNS, parse_transcription_csv
from app.services.interview import get_interview_service
from app.services.segment_mapper import map_rows

logger = logging.getLogger("sustrato")

SEGMENTS_TABLE = "transcripciones"


class TranscriptionService:
    """Loads transcription CSVs into segments and reads them back."""

    def load_csv(self, gateway: Gateway, interview_id: int, csv_text: str) -> ActionResult:
        """Parse, map and bulk-insert a transcription CSV for an existing interview.

        The caller must have checked that the interview exists. The insert is a
        single gateway call: either every segment is stored or none is.
        """
        try:
            rows = parse_transcription_csv(csv_text)
            if not rows:
                raise EmptyInputError("The CSV file contains no data rows")
            candidates = map_rows(rows)
            segments = [candidate.to_row(interview_id) for candidate in candidates]
            gateway.insert(SEGMENTS_TABLE, segments).raise_for_error("Error saving the transcription segments")
        except AppError as e:
            logger.error("Transcription load for interview %s failed (%s): %s", interview_id, e.kind.value, e.message)
            return ActionResult.from_error(e)

        logger.info("Loaded %d transcription segments for interview %s", len(segments), interview_id)
        return ActionResult.ok(
            count=len(segments),
            message=f"Loaded {len(segments)} transcription segments",
        )

    def list_segments(self, gateway: Gateway, interview_id: int) -> ActionResult:
        """Get all segments of an interview ordered by segment number."""
        try:
            segments = gateway.select(
                SEGMENTS_TABLE,
                filters=[eq("entrevista_id", interview_id)],
                order_by=("id_segmento", "id"),
            ).raise_for_error("Error loading the transcriptions")
            return ActionResult.ok(segments, count=len(segments))
        except AppError as e:
            return ActionResult.from_error(e)

    def list_interviews_with_counts(self, gateway: Gateway) -> ActionResult:
        """List interviews, newest first, each with its number of segments."""
        interviews = get_interview_service().list_all(gateway)
        if not interviews.success:
            return interviews
        try:
            counts = gateway.count(SEGMENTS_TABLE, group_by="entrevista_id").raise_for_error(
                "Error counting transcription segments"
            )
        except AppError as e:
            return ActionResult.from_error(e)

        items = [
            {"entrevista": interview, "cantidad_segmentos": counts.get(interview["id"], 0)}
            for interview in interviews.data
        ]
        return ActionResult.ok(items, count=len(items))

    def export_csv(self, segments: list[dict]) -> str:
        """Render segments back into the upload CSV schema."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(TRANSCRIPTION_COLUMNS)
        for seg in segments:
            writer.writerow(
                [
                    seg["id_segmento"],
                    seg["timestamp"] or "",
                    seg["rol"],
                    seg["texto_original"],
                    seg["texto_normalizado"],
                    seg["nivel_confianza"],
                ]
            )
        return buffer.getvalue()


_transcription_service: TranscriptionService | None = None


def get_transcription_service() -> TranscriptionService:
    """Get singleton transcription service instance."""
    global _transcription_service
    if _transcription_service is None:
        _transcription_service = TranscriptionService()
    return _transcription_service
