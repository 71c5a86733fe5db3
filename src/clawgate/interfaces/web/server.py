"""clawgate HTTP server: config schema endpoint, health and metrics."""

from __future__ import annotations

import sys
import time

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from clawgate.config.settings import Settings, _project_version
from clawgate.interfaces.web.chain import HandlerChain, HandlerChainMiddleware
from clawgate.interfaces.web.schema_http import ConfigSchemaHandler, SchemaSources


def build_handler_chain(sources: SchemaSources | None = None) -> HandlerChain:
    return HandlerChain([ConfigSchemaHandler(sources)])


def create_app(sources: SchemaSources | None = None) -> FastAPI:
    """Build the FastAPI app; handlers in the chain run before any route."""
    app = FastAPI(title="clawgate", version=_project_version())
    app.add_middleware(HandlerChainMiddleware, chain=build_handler_chain(sources))

    @app.get("/health")
    async def health():
        return JSONResponse(
            {
                "status": "ok",
                "version": _project_version(),
                "build": {
                    "python_version": sys.version.split()[0],
                    "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
                },
            }
        )

    @app.get("/metrics")
    async def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


def run(settings: Settings, sources: SchemaSources | None = None) -> None:
    import uvicorn

    uvicorn.run(create_app(sources), host=settings.web.host, port=settings.web.port, log_level=settings.logging.level.lower())
