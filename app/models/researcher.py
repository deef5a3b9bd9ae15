"""Researcher model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.database import Base


class Researcher(Base):
    """Member of the research team who conducts interviews."""

    __tablename__ = "investigadores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(32), nullable=False, unique=True, index=True)
    nombre = Column(String(128), nullable=False)
    apellido = Column(String(128), nullable=False)
    email = Column(String(256), nullable=True)
    telefono = Column(String(64), nullable=True)
    institucion = Column(String(256), nullable=True)  # free text, not a FK
    cargo = Column(String(256), nullable=True)
    notas = Column(Text, nullable=True)
    fecha_creacion = Column(DateTime, nullable=False, default=datetime.utcnow)
