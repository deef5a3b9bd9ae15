"""Allowed expression and expected normalization models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, UniqueConstraint

from app.database import Base


class AllowedExpression(Base):
    """Short spoken expression with its accepted normalizations, per language."""

    __tablename__ = "expresiones_permitidas"
    __table_args__ = (UniqueConstraint("expresion_original", "idioma"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    expresion_original = Column(String(256), nullable=False)
    es_permitida_como_normalizacion = Column(Boolean, nullable=False, default=False)
    idioma = Column(String(16), nullable=False, default="es-ES", index=True)


class ExpectedNormalization(Base):
    __tablename__ = "normalizaciones_esperadas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    expresion_id = Column(Integer, ForeignKey("expresiones_permitidas.id"), nullable=False, index=True)
    texto = Column(Text, nullable=False)
