"""Database commands."""

import cyclopts

from eventlog.cli.console import get_console
from eventlog.config import Config, configure_logging
from eventlog.infrastructure.persistence.migrate import run_migrations

app = cyclopts.App(name="db", help="Database commands")


@app.command
def upgrade(revision: str = "head") -> None:
    """Apply database migrations.

    Args:
        revision: Target Alembic revision.
    """
    config = Config()
    configure_logging(config.logging)
    run_migrations(config.database.url, revision)
    get_console().success(f"Database upgraded to {revision}")
