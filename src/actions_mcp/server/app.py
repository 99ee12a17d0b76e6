"""HTTP surface — FastAPI application wrapping the protocol dispatcher.

Run with uvicorn::

    uvicorn actions_mcp.server.app:create_app --factory --port 3002

or through the CLI: ``actions-mcp serve``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from actions_mcp import __version__
from actions_mcp.config import ServerSettings
from actions_mcp.protocol.dispatcher import ProtocolDispatcher
from actions_mcp.registry.registry import ToolRegistry
from actions_mcp.runtime.executor import InvocationExecutor
from actions_mcp.tools.actions import build_default_registry

logger = logging.getLogger(__name__)


def build_dispatcher(settings: ServerSettings, registry: ToolRegistry) -> ProtocolDispatcher:
    """Wire a dispatcher and executor from *settings*."""
    executor = InvocationExecutor(default_timeout=settings.invocation_timeout)
    return ProtocolDispatcher(
        registry,
        executor,
        server_name=settings.server_name,
        protocol_version=settings.protocol_version,
    )


def create_app(
    settings: ServerSettings | None = None,
    registry: ToolRegistry | None = None,
) -> FastAPI:
    """Build the gateway application.

    Without arguments, settings come from the environment and the registry
    holds the built-in tools.  Pass a registry to serve a custom tool set.
    """
    if settings is None:
        settings = ServerSettings.from_env()
    if registry is None:
        registry = build_default_registry()
    dispatcher = build_dispatcher(settings, registry)

    app = FastAPI(title=settings.server_name, version=__version__)
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    @app.get("/")
    async def status() -> dict[str, Any]:
        return {
            "name": settings.server_name,
            "version": __version__,
            "status": "running",
            "tools": registry.names(),
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(settings.path)
    async def rpc(request: Request) -> JSONResponse:
        body = await request.body()
        response = await dispatcher.handle_raw(body)
        if response.error is not None:
            logger.info(
                "JSON-RPC error %d for id=%r: %s",
                response.error.code,
                response.id,
                response.error.message,
            )
        return JSONResponse(response.model_dump(mode="json"))

    logger.debug("Gateway app created with %d tool(s) at %s", len(registry), settings.path)
    return app
