"""Institution model."""

from sqlalchemy import Column, Integer, String, Text

from app.database import Base


class Institution(Base):
    """Foundation or organisation that hosts interviewees."""

    __tablename__ = "instituciones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(32), nullable=False, unique=True, index=True)
    nombre = Column(String(256), nullable=False)
    descripcion = Column(Text, nullable=True)
