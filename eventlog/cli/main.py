"""Main CLI application using Cyclopts.

Event commands are a thin HTTP client for the running server; database
commands work on the configured database directly.
"""

import cyclopts

from eventlog.cli.commands import db, events

app = cyclopts.App(
    name="eventlog",
    help="Transactional outbox event log - CLI",
)

app.command(events.app, name="events")
app.command(db.app, name="db")


def main() -> None:
    app()
