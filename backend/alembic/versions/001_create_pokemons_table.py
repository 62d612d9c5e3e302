"""Create pokemons table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `pokemons` table with unique constraints on name and no.
How:   UUID primary key, JSONB document column for descriptive fields,
       integer version counter used by SQLAlchemy's optimistic locking.

Rollback: downgrade() drops the table entirely.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pokemons",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Object id assigned on insert",
        ),
        sa.Column("no", sa.Integer(), nullable=True, comment="Catalogue ordinal, unique"),
        sa.Column("name", sa.String(100), nullable=False, comment="Lowercase name, unique"),
        sa.Column(
            "attributes",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
            comment="Opaque descriptive fields passed through unchanged",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("1"),
            comment="Internal revision counter",
        ),
        sa.PrimaryKeyConstraint("id"),
        # Unique constraints double as the lookup indexes for no and name
        sa.UniqueConstraint("name", name="uq_pokemons_name"),
        sa.UniqueConstraint("no", name="uq_pokemons_no"),
    )


def downgrade() -> None:
    """WARNING: destructive, all records are lost."""
    op.drop_table("pokemons")
