"""Create institution, interviewee, researcher and interview tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "instituciones",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo", sa.String(length=32), nullable=False),
        sa.Column("nombre", sa.String(length=256), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_instituciones")),
    )
    op.create_index(op.f("ix_instituciones_codigo"), "instituciones", ["codigo"], unique=True)

    op.create_table(
        "entrevistados",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo", sa.String(length=32), nullable=False),
        sa.Column("nombre", sa.String(length=128), nullable=False),
        sa.Column("apellido", sa.String(length=128), nullable=False),
        sa.Column("cargo", sa.String(length=256), nullable=True),
        sa.Column("institucion_id", sa.Integer(), nullable=False),
        sa.Column("contacto", sa.String(length=256), nullable=True),
        sa.Column("notas", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["institucion_id"], ["instituciones.id"], name=op.f("fk_entrevistados_institucion_id_instituciones")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_entrevistados")),
    )
    op.create_index(op.f("ix_entrevistados_codigo"), "entrevistados", ["codigo"], unique=True)
    op.create_index(op.f("ix_entrevistados_institucion_id"), "entrevistados", ["institucion_id"])

    op.create_table(
        "investigadores",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo", sa.String(length=32), nullable=False),
        sa.Column("nombre", sa.String(length=128), nullable=False),
        sa.Column("apellido", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=256), nullable=True),
        sa.Column("telefono", sa.String(length=64), nullable=True),
        sa.Column("institucion", sa.String(length=256), nullable=True),
        sa.Column("cargo", sa.String(length=256), nullable=True),
        sa.Column("notas", sa.Text(), nullable=True),
        sa.Column("fecha_creacion", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_investigadores")),
    )
    op.create_index(op.f("ix_investigadores_codigo"), "investigadores", ["codigo"], unique=True)

    op.create_table(
        "entrevistas",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo_entrevista", sa.String(length=32), nullable=False),
        sa.Column("institucion_id", sa.Integer(), nullable=False),
        sa.Column("entrevistado_id", sa.Integer(), nullable=False),
        sa.Column("investigador_id", sa.Integer(), nullable=True),
        sa.Column("numero_entrevista", sa.Integer(), nullable=False),
        sa.Column("fecha_entrevista", sa.Date(), nullable=True),
        sa.Column("duracion", sa.Integer(), nullable=True),
        sa.Column("notas", sa.Text(), nullable=True),
        sa.Column("idioma", sa.String(length=16), nullable=False),
        sa.Column("fecha_creacion", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["institucion_id"], ["instituciones.id"], name=op.f("fk_entrevistas_institucion_id_instituciones")
        ),
        sa.ForeignKeyConstraint(
            ["entrevistado_id"], ["entrevistados.id"], name=op.f("fk_entrevistas_entrevistado_id_entrevistados")
        ),
        sa.ForeignKeyConstraint(
            ["investigador_id"], ["investigadores.id"], name=op.f("fk_entrevistas_investigador_id_investigadores")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_entrevistas")),
    )
    op.create_index(op.f("ix_entrevistas_codigo_entrevista"), "entrevistas", ["codigo_entrevista"], unique=True)
    op.create_index(op.f("ix_entrevistas_institucion_id"), "entrevistas", ["institucion_id"])
    op.create_index(op.f("ix_entrevistas_entrevistado_id"), "entrevistas", ["entrevistado_id"])
    op.create_index(op.f("ix_entrevistas_investigador_id"), "entrevistas", ["investigador_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_entrevistas_investigador_id"), table_name="entrevistas")
    op.drop_index(op.f("ix_entrevistas_entrevistado_id"), table_name="entrevistas")
    op.drop_index(op.f("ix_entrevistas_institucion_id"), table_name="entrevistas")
    op.drop_index(op.f("ix_entrevistas_codigo_entrevista"), table_name="entrevistas")
    op.drop_table("entrevistas")
    op.drop_index(op.f("ix_investigadores_codigo"), table_name="investigadores")
    op.drop_table("investigadores")
    op.drop_index(op.f("ix_entrevistados_institucion_id"), table_name="entrevistados")
    op.drop_index(op.f("ix_entrevistados_codigo"), table_name="entrevistados")
    op.drop_table("entrevistados")
    op.drop_index(op.f("ix_instituciones_codigo"), table_name="instituciones")
    op.drop_table("instituciones")
