"""Create transcripciones table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "transcripciones",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entrevista_id", sa.Integer(), nullable=False),
        sa.Column("id_segmento", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.String(length=32), nullable=True),
        sa.Column("rol", sa.String(length=8), nullable=False),
        sa.Column("texto_original", sa.Text(), nullable=False),
        sa.Column("texto_normalizado", sa.Text(), nullable=False),
        sa.Column("nivel_confianza", sa.Integer(), nullable=False),
        sa.Column("fecha_creacion", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["entrevista_id"], ["entrevistas.id"], name=op.f("fk_transcripciones_entrevista_id_entrevistas")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_transcripciones")),
    )
    op.create_index(op.f("ix_transcripciones_entrevista_id"), "transcripciones", ["entrevista_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_transcripciones_entrevista_id"), table_name="transcripciones")
    op.drop_table("transcripciones")
