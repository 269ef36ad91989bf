"""initial_schema

Counter and prescriptions tables, with the counter row seeded at 0.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - create tables, indexes and the counter row."""

    counter = op.create_table(
        "counter",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("last_number", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "prescriptions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("rxNo", sa.String(length=32), nullable=False),
        sa.Column("paciente", sa.Text(), nullable=False, server_default=""),
        sa.Column("endereco", sa.Text(), nullable=False, server_default=""),
        sa.Column("idade", sa.Text(), nullable=False, server_default=""),
        sa.Column("data", sa.Text(), nullable=False, server_default=""),
        sa.Column("diag", sa.Text(), nullable=False, server_default=""),
        sa.Column("presc", sa.Text(), nullable=False, server_default=""),
        sa.Column("createdAt", sa.BigInteger(), nullable=False),
        sa.Column("updatedAt", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("rxNo"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_prescriptions_createdAt", "prescriptions", ["createdAt"])

    op.bulk_insert(counter, [{"id": 1, "last_number": 0}])


def downgrade() -> None:
    """Downgrade schema - drop all tables."""
    op.drop_index("ix_prescriptions_createdAt", table_name="prescriptions")
    op.drop_table("prescriptions")
    op.drop_table("counter")
