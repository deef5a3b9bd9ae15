"""Transcription segment model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from app.database import Base


class TranscriptionSegment(Base):
    """One line of an interview transcription, loaded in bulk from CSV."""

    __tablename__ = "transcripciones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entrevista_id = Column(Integer, ForeignKey("entrevistas.id"), nullable=False, index=True)
    # Not unique per interview; duplicates from a source file are stored as-is
    id_segmento = Column(Integer, nullable=False)
    timestamp = Column(String(32), nullable=True)
    rol = Column(String(8), nullable=False)  # I (interviewer), E (interviewee), S (system)
    texto_original = Column(Text, nullable=False)
    texto_normalizado = Column(Text, nullable=False)
    nivel_confianza = Column(Integer, nullable=False)
    fecha_creacion = Column(DateTime, nullable=False, default=datetime.utcnow)
