"""Event infrastructure - snapshot providers and DI provider.

Import modules directly:
    from eventlog.infrastructure.event.di import EventLogProvider
    from eventlog.infrastructure.event.snapshot import SnapshotRegistry
"""

__all__: list[str] = []
