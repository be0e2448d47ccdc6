"""Create the wizards table.

Revision ID: 0001
Revises:
Create Date: 2026-10-18

One row per started wizard; ``data`` holds the merged step values.
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

import sqlalchemy as sa
from alembic import op


def upgrade() -> None:
    op.create_table(
        "wizards",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("wizard_type", sa.String(100), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_wizards_wizard_type", "wizards", ["wizard_type"])
    op.create_index("ix_wizards_updated_at", "wizards", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_wizards_updated_at", table_name="wizards")
    op.drop_index("ix_wizards_wizard_type", table_name="wizards")
    op.drop_table("wizards")
