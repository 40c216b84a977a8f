"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)

metadata = MetaData()

# ============================================================================
# EVENT LOG TABLE (append-only outbox)
# ============================================================================
event_log_table = Table(
    "event_log",
    metadata,
    # SQLite only autoincrements an INTEGER PRIMARY KEY
    Column(
        "id",
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    ),
    Column("status", String(255), nullable=False),
    Column("event_type", String(255), nullable=False),
    Column("data_type", String(255), nullable=False),
    Column("data_op", String(32), nullable=False),  # DataOperation as string
    Column("event_body_data", Text, nullable=False),  # Canonical JSON
    Column("flow_id", String(255), nullable=True),
    Column("error_count", Integer, nullable=False, server_default=text("0")),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("last_modified", DateTime(timezone=True), nullable=False),
    # AUTOINCREMENT: SQLite never hands out an id again, even after deletes
    sqlite_autoincrement=True,
)

# Publisher polling: WHERE status = ? AND id > ? ORDER BY id
Index("idx_event_log_status_id", event_log_table.c.status, event_log_table.c.id)
