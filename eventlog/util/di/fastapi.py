"""Dishka FastAPI integration opening one Scope.UOW per request."""

from uuid import uuid4

from dishka import AsyncContainer
from starlette.datastructures import Headers, MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from eventlog.domain.event.model import FlowId
from eventlog.util.di.scope import Scope as EventLogScope

FLOW_ID_HEADER = "X-Flow-Id"


class ContainerMiddleware:
    """ASGI middleware that creates a Scope.UOW container for each HTTP request.

    The request's flow id (``X-Flow-Id``, generated when missing) is put
    into the UOW context and echoed on the response.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        flow_id = FlowId(Headers(scope=scope).get(FLOW_ID_HEADER) or uuid4().hex)

        async def send_with_flow_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[FLOW_ID_HEADER] = flow_id
            await send(message)

        async with request.app.state.dishka_container(
            {FlowId: flow_id},
            scope=EventLogScope.UOW,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send_with_flow_id)


def setup_dishka(container: AsyncContainer, app) -> None:
    """Setup Dishka DI with the Scope.UOW middleware.

    Args:
        container: The async DI container
        app: FastAPI or Starlette application
    """
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
