"""Dishka scopes for the event log."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Hierarchy: APP -> UOW

    - APP: engine, session factory, configuration (application lifetime)
    - UOW: one database session and everything built on it; one per HTTP
      request (writes are committed through UoW)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
