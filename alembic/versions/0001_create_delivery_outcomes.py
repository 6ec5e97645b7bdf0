"""Create delivery_outcomes table.

Revision ID: 0001
Revises: -
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "delivery_outcomes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("channel", sa.String(16), nullable=False),
        sa.Column("event_kind", sa.String(64), nullable=False),
        sa.Column("recipient_directory_id", sa.String(128), nullable=True),
        sa.Column("succeeded", sa.Boolean, nullable=False),
        sa.Column("detail", sa.Text, nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_delivery_outcomes_event_kind", "delivery_outcomes", ["event_kind"]
    )
    op.create_index(
        "ix_delivery_outcomes_recipient_directory_id",
        "delivery_outcomes",
        ["recipient_directory_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_delivery_outcomes_recipient_directory_id", table_name="delivery_outcomes")
    op.drop_index("ix_delivery_outcomes_event_kind", table_name="delivery_outcomes")
    op.drop_table("delivery_outcomes")
