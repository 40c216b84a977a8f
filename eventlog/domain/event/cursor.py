"""Cursor codec - opaque client tokens to log positions and back.

A cursor is the id of the last entry a client has seen. The token is the
decimal form of that id; the empty token means "start of the log".
"""

from eventlog.domain.event.model import parse_event_id
from eventlog.domain.shared.error import InvalidCursorError

START = ""


class CursorCodec:
    """Converts between cursor tokens and the last-seen entry id."""

    def decode(self, token: str | None) -> int | None:
        """Decode a cursor token.

        Args:
            token: Token received from the client, or None.

        Returns:
            The last-seen id, or None when reading from the start.

        Raises:
            InvalidCursorError: If the token is not an integer in 0..MAX_EVENT_ID.
        """
        if not token:
            return None
        last_id = parse_event_id(token)
        if last_id is None:
            raise InvalidCursorError(token)
        return last_id

    def encode(self, last_id: int | None) -> str:
        """Encode the last-seen id as a cursor token."""
        if last_id is None:
            return START
        if last_id < 0:
            raise ValueError(f"cursor position must be >= 0, got {last_id}")
        return str(last_id)
