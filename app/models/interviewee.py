"""Interviewee model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from app.database import Base


class Interviewee(Base):
    """Person interviewed on behalf of an institution."""

    __tablename__ = "entrevistados"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(32), nullable=False, unique=True, index=True)
    nombre = Column(String(128), nullable=False)
    apellido = Column(String(128), nullable=False)
    cargo = Column(String(256), nullable=True)
    institucion_id = Column(Integer, ForeignKey("instituciones.id"), nullable=False, index=True)
    contacto = Column(String(256), nullable=True)
    notas = Column(Text, nullable=True)
