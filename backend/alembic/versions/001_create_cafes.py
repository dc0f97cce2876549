"""Create cafes table with (title, address) unique constraint.

Revision ID: 001_create_cafes
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_cafes"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cafes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("picture", sa.Text, nullable=True),
        sa.Column("hours", sa.JSON, nullable=True),
        sa.Column("criteria", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("title", "address", name="uq_cafes_title_address"),
    )
    op.create_index("ix_cafes_created_at", "cafes", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_cafes_created_at", table_name="cafes")
    op.drop_table("cafes")
