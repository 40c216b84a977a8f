"""App instance for uvicorn: ``uvicorn eventlog.application.api.rest.asgi:app``.

Logfire must be configured (``logfire.configure()``) before this module is
imported for traces to be exported.
"""

from eventlog.application.api.rest.app import create_app

app = create_app()
