"""event_log

Revision ID: 5b1e2c7d9a40
Revises:
Create Date: 2026-10-19 10:12:41.204118

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1e2c7d9a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # EVENT LOG (Outbox)
    op.create_table(
        "event_log",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column("status", sa.String(255), nullable=False),
        sa.Column("event_type", sa.String(255), nullable=False),
        sa.Column("data_type", sa.String(255), nullable=False),
        sa.Column("data_op", sa.String(32), nullable=False),
        sa.Column("event_body_data", sa.Text(), nullable=False),
        sa.Column("flow_id", sa.String(255), nullable=True),
        sa.Column("error_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_event_log_status_id", "event_log", ["status", "id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_event_log_status_id", table_name="event_log")
    op.drop_table("event_log")
