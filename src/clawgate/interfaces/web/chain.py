"""Ordered handler chain mounted in front of the FastAPI routes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class HandlerStatus(Enum):
    NOT_MATCHED = "not_matched"
    HANDLED = "handled"
    ERRORED = "errored"


@dataclass(frozen=True)
class HandlerOutcome:
    """Result of offering a request to one handler"""

    status: HandlerStatus
    response: Response | None = None

    @property
    def handled(self) -> bool:
        return self.status is not HandlerStatus.NOT_MATCHED

    @classmethod
    def not_matched(cls) -> HandlerOutcome:
        return cls(HandlerStatus.NOT_MATCHED)

    @classmethod
    def ok(cls, response: Response) -> HandlerOutcome:
        return cls(HandlerStatus.HANDLED, response)

    @classmethod
    def errored(cls, response: Response) -> HandlerOutcome:
        return cls(HandlerStatus.ERRORED, response)


RequestHandler = Callable[[Request], Awaitable[HandlerOutcome]]


class HandlerChain:
    """Try each handler in order; the first one that matches answers."""

    def __init__(self, handlers: Sequence[RequestHandler] = ()) -> None:
        self.handlers: list[RequestHandler] = list(handlers)

    def add(self, handler: RequestHandler) -> None:
        self.handlers.append(handler)

    async def dispatch(self, request: Request) -> HandlerOutcome:
        for handler in self.handlers:
            outcome = await handler(request)
            if outcome.handled:
                return outcome
        return HandlerOutcome.not_matched()


class HandlerChainMiddleware(BaseHTTPMiddleware):
    """Answer from the chain when a handler matches, otherwise fall through to the app."""

    def __init__(self, app, chain: HandlerChain) -> None:
        super().__init__(app)
        self.chain = chain

    async def dispatch(self, request: Request, call_next) -> Response:
        outcome = await self.chain.dispatch(request)
        if outcome.handled and outcome.response is not None:
            return outcome.response
        return await call_next(request)
