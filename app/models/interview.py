"""Interview model."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text

from app.database import Base


class Interview(Base):
    """Single interview session; owns its transcription segments."""

    __tablename__ = "entrevistas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo_entrevista = Column(String(32), nullable=False, unique=True, index=True)
    institucion_id = Column(Integer, ForeignKey("instituciones.id"), nullable=False, index=True)
    entrevistado_id = Column(Integer, ForeignKey("entrevistados.id"), nullable=False, index=True)
    investigador_id = Column(Integer, ForeignKey("investigadores.id"), nullable=True, index=True)
    numero_entrevista = Column(Integer, nullable=False)
    fecha_entrevista = Column(Date, nullable=True)
    duracion = Column(Integer, nullable=True)  # minutes
    notas = Column(Text, nullable=True)
    idioma = Column(String(16), nullable=False, default="es-ES")
    fecha_creacion = Column(DateTime, nullable=False, default=datetime.utcnow)
