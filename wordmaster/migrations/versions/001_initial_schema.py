"""Initial schema baseline

Revision ID: 001
Revises:
Create Date: 2026-10-18

This migration creates the baseline schema matching the existing database.
For databases created with init_db(), mark this migration as complete without running it:
    alembic stamp 001
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "words",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=False),
        sa.Column("word", sa.Text(), nullable=False),
        sa.Column("phonetic", sa.Text(), nullable=True, default=""),
        sa.Column("pronunciation", sa.Text(), nullable=True, default=""),
        sa.Column("definition", sa.Text(), nullable=True, default=""),
        sa.Column("example", sa.Text(), nullable=True, default=""),
        sa.Column("translation", sa.Text(), nullable=True, default=""),
        sa.Column("image_url", sa.Text(), nullable=True, default=""),
        sa.Column("difficulty", sa.Integer(), nullable=True, default=1),
        sa.Column("last_reviewed", sa.Integer(), nullable=True, default=0),
        sa.Column("next_review", sa.Integer(), nullable=True, default=0),
        sa.Column("review_count", sa.Integer(), nullable=True, default=0),
        sa.Column("ease_factor", sa.Float(), nullable=True, default=2.5),
        sa.Column("interval", sa.Integer(), nullable=True, default=1),
        sa.Column("learned", sa.Boolean(), nullable=True, default=False),
        sa.Column("mastered", sa.Boolean(), nullable=True, default=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_words_next_review", "words", ["next_review"])
    op.create_table(
        "id_sequence",
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("last_value", sa.Integer(), nullable=True, default=0),
        sa.PrimaryKeyConstraint("name"),
    )


def downgrade() -> None:
    op.drop_table("id_sequence")
    op.drop_index("ix_words_next_review", table_name="words")
    op.drop_table("words")
