"""Create allowed-expression and analysis matrix tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "expresiones_permitidas",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("expresion_original", sa.String(length=256), nullable=False),
        sa.Column("es_permitida_como_normalizacion", sa.Boolean(), nullable=False),
        sa.Column("idioma", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_expresiones_permitidas")),
        sa.UniqueConstraint(
            "expresion_original", "idioma", name=op.f("uq_expresiones_permitidas_expresion_original_idioma")
        ),
    )
    op.create_index(op.f("ix_expresiones_permitidas_idioma"), "expresiones_permitidas", ["idioma"])

    op.create_table(
        "normalizaciones_esperadas",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("expresion_id", sa.Integer(), nullable=False),
        sa.Column("texto", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(
            ["expresion_id"],
            ["expresiones_permitidas.id"],
            name=op.f("fk_normalizaciones_esperadas_expresion_id_expresiones_permitidas"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_normalizaciones_esperadas")),
    )
    op.create_index(op.f("ix_normalizaciones_esperadas_expresion_id"), "normalizaciones_esperadas", ["expresion_id"])

    op.create_table(
        "matriz_categorias",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(length=256), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("orden", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_matriz_categorias")),
        sa.UniqueConstraint("nombre", name=op.f("uq_matriz_categorias_nombre")),
    )

    op.create_table(
        "matriz_subcategorias",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("categoria_id", sa.Integer(), nullable=False),
        sa.Column("nombre", sa.String(length=256), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("orden", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["categoria_id"], ["matriz_categorias.id"], name=op.f("fk_matriz_subcategorias_categoria_id_matriz_categorias")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_matriz_subcategorias")),
        sa.UniqueConstraint("categoria_id", "nombre", name=op.f("uq_matriz_subcategorias_categoria_id_nombre")),
    )
    op.create_index(op.f("ix_matriz_subcategorias_categoria_id"), "matriz_subcategorias", ["categoria_id"])

    op.create_table(
        "matriz_codigos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo", sa.String(length=32), nullable=False),
        sa.Column("categoria_id", sa.Integer(), nullable=False),
        sa.Column("subcategoria_id", sa.Integer(), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["categoria_id"], ["matriz_categorias.id"], name=op.f("fk_matriz_codigos_categoria_id_matriz_categorias")
        ),
        sa.ForeignKeyConstraint(
            ["subcategoria_id"],
            ["matriz_subcategorias.id"],
            name=op.f("fk_matriz_codigos_subcategoria_id_matriz_subcategorias"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_matriz_codigos")),
    )
    op.create_index(op.f("ix_matriz_codigos_codigo"), "matriz_codigos", ["codigo"], unique=True)
    op.create_index(op.f("ix_matriz_codigos_categoria_id"), "matriz_codigos", ["categoria_id"])
    op.create_index(op.f("ix_matriz_codigos_subcategoria_id"), "matriz_codigos", ["subcategoria_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_matriz_codigos_subcategoria_id"), table_name="matriz_codigos")
    op.drop_index(op.f("ix_matriz_codigos_categoria_id"), table_name="matriz_codigos")
    op.drop_index(op.f("ix_matriz_codigos_codigo"), table_name="matriz_codigos")
    op.drop_table("matriz_codigos")
    op.drop_index(op.f("ix_matriz_subcategorias_categoria_id"), table_name="matriz_subcategorias")
    op.drop_table("matriz_subcategorias")
    op.drop_table("matriz_categorias")
    op.drop_index(op.f("ix_normalizaciones_esperadas_expresion_id"), table_name="normalizaciones_esperadas")
    op.drop_table("normalizaciones_esperadas")
    op.drop_index(op.f("ix_expresiones_permitidas_idioma"), table_name="expresiones_permitidas")
    op.drop_table("expresiones_permitidas")
