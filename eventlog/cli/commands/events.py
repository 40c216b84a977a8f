"""Events commands - inspect and acknowledge the event log over HTTP."""

import os
import sys
import time
from collections.abc import Callable
from typing import Any

import cyclopts
import httpx

from eventlog.cli.console import get_console

app = cyclopts.App(name="events", help="Inspect and acknowledge the event log")

FLOW_ID_HEADER = "X-Flow-Id"


def get_server_url() -> str:
    """Get server URL from the environment."""
    return os.environ.get("EVENTLOG_SERVER", "http://localhost:8000")


def with_retry[T](
    fn: Callable[[], T],
    retries: int = 3,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> T:
    """Retry a function on transient errors with linear backoff.

    Args:
        fn: Zero-argument callable to retry.
        retries: Max retry attempts (total attempts = retries + 1).
        exceptions: Exception types to catch and retry on.

    Raises:
        The last exception if all retries fail.
    """
    last_error: Exception | None = None
    for attempt in range(retries + 1):
        try:
            return fn()
        except exceptions as e:
            last_error = e
            if attempt < retries:
                time.sleep(0.2 * (attempt + 1))  # Backoff: 0.2, 0.4, 0.6s
    raise last_error  # type: ignore[misc]


def _request(method: str, path: str, **kwargs: Any) -> httpx.Response:
    """Send a request to the server, exiting with a readable message on failure."""
    console = get_console()
    server_url = get_server_url()
    url = f"{server_url}/api/v1{path}"

    try:
        # Only idempotent reads are retried
        if method == "GET":
            response = with_retry(
                lambda: httpx.request(method, url, **kwargs),
                exceptions=(httpx.ReadError, httpx.ConnectError),
            )
        else:
            response = httpx.request(method, url, **kwargs)
        response.raise_for_status()
        return response
    except httpx.ConnectError:
        console.error(
            f"Could not connect to server at {server_url}",
            hint="Is the server running? Set EVENTLOG_SERVER to its URL.",
        )
        sys.exit(1)
    except httpx.TransportError as e:
        console.error(f"Request to {server_url} failed: {type(e).__name__}: {e}")
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        console.error(_describe_problem(e.response))
        sys.exit(1)


def _describe_problem(response: httpx.Response) -> str:
    try:
        problem = response.json()
    except ValueError:
        return f"Server error: {response.status_code} - {response.text}"

    message = problem.get("message", response.text)
    for violation in problem.get("violations", []):
        message += f"\n  - {violation}"
    return f"Server error: {response.status_code} - {message}"


@app.command(name="list")
def list_events(
    cursor: str | None = None,
    status: str | None = None,
    limit: int = 10,
) -> None:
    """Show one page of events in log order.

    Args:
        cursor: Resume after this cursor (from a previous page).
        status: Only show events with this delivery status (e.g. NEW, ERROR).
        limit: Number of events to show.
    """
    console = get_console()
    params: dict[str, str | int] = {"limit": limit}
    if cursor:
        params["cursor"] = cursor
    if status:
        params["status"] = status

    data = _request("GET", "/events", params=params).json()

    events = data.get("events", [])
    if not events:
        console.info("No events found")
        return

    console.events(events, data.get("next_cursor", ""), data.get("sink_id", ""))


@app.command
def ack(
    event_ids: list[str],
    /,
    status: str = "submitted",
) -> None:
    """Set the delivery status of events.

    Args:
        event_ids: Ids of the events to update.
        status: Delivery status to set (ERROR counts as a failed delivery).
    """
    body = {"events": [{"event_id": i, "delivery_status": status} for i in event_ids]}
    data = _request("PATCH", "/events", json=body).json()
    get_console().success(f"Updated {data.get('updated', 0)} event(s) to {status}")


@app.command
def snapshot(
    event_type: str,
    /,
    flow_id: str | None = None,
) -> None:
    """Generate snapshot events for an event type.

    Args:
        event_type: Event type to snapshot (e.g. order.created).
        flow_id: Flow id to record on the snapshot events.
    """
    headers = {FLOW_ID_HEADER: flow_id} if flow_id else {}
    data = _request("POST", f"/events/snapshots/{event_type}", headers=headers).json()
    get_console().success(f"Created {data.get('count', 0)} snapshot event(s) for {event_type}")
