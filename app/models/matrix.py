"""Analysis taxonomy ("matrix") models."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint

from app.database import Base


class MatrixCategory(Base):
    """Top-level analysis category."""

    __tablename__ = "matriz_categorias"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(256), nullable=False, unique=True)
    descripcion = Column(Text, nullable=True)
    orden = Column(Integer, nullable=False, default=0)


class MatrixSubcategory(Base):
    """Subcategory within a category."""

    __tablename__ = "matriz_subcategorias"
    __table_args__ = (UniqueConstraint("categoria_id", "nombre"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    categoria_id = Column(Integer, ForeignKey("matriz_categorias.id"), nullable=False, index=True)
    nombre = Column(String(256), nullable=False)
    descripcion = Column(Text, nullable=True)
    orden = Column(Integer, nullable=False, default=0)


class MatrixCode(Base):
    """Code applied to transcription segments during analysis."""

    __tablename__ = "matriz_codigos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(32), nullable=False, unique=True, index=True)
    categoria_id = Column(Integer, ForeignKey("matriz_categorias.id"), nullable=False, index=True)
    subcategoria_id = Column(Integer, ForeignKey("matriz_subcategorias.id"), nullable=False, index=True)
    descripcion = Column(Text, nullable=True)
