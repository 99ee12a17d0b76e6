"""ProtocolDispatcher — turns one JSON-RPC request into one JSON-RPC response.

The dispatcher never raises: every failure, including a body that is not
JSON at all, comes back as a well-formed error envelope whose ``id``
matches the request (or is ``null`` when no id can be recovered).
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from actions_mcp import __version__
from actions_mcp.config import DEFAULT_SERVER_NAME
from actions_mcp.errors import (
    INTERNAL_ERROR,
    GatewayError,
    InvalidParamsError,
    MalformedRequestError,
    MethodNotFoundError,
)
from actions_mcp.protocol.models import (
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    Method,
    RequestId,
    ServerInfo,
)
from actions_mcp.registry.registry import ToolRegistry
from actions_mcp.runtime.executor import InvocationExecutor
from actions_mcp.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    get_tracer,
)

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

DEFAULT_PROTOCOL_VERSION = "2024-11-05"

MethodHandler = Callable[[Any, RequestId], Awaitable[dict[str, Any]]]


def extract_request_id(payload: Any) -> RequestId:
    """Pull a usable ``id`` out of *payload*, however malformed it is."""
    if not isinstance(payload, dict):
        return None
    request_id = payload.get("id")
    if isinstance(request_id, bool):
        return None
    if isinstance(request_id, float):
        return request_id if math.isfinite(request_id) else None
    if isinstance(request_id, (int, str)):
        return request_id
    return None


class ProtocolDispatcher:
    """Routes MCP methods to the registry and the executor.

    Usage::

        dispatcher = ProtocolDispatcher(registry)
        response = await dispatcher.handle(
            {"jsonrpc": "2.0", "id": 1, "method": "tools/list"}
        )
        response.model_dump()  # {"jsonrpc": "2.0", "id": 1, "result": {...}}
    """

    def __init__(
        self,
        registry: ToolRegistry,
        executor: InvocationExecutor | None = None,
        *,
        server_name: str = DEFAULT_SERVER_NAME,
        server_version: str = __version__,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
    ) -> None:
        self._registry = registry
        self._executor = executor or InvocationExecutor()
        self._server_info = ServerInfo(name=server_name, version=server_version)
        self._protocol_version = protocol_version
        self._calls_by_request: dict[int | float | str, set[str]] = {}
        self._handlers: dict[Method, MethodHandler] = {
            Method.INITIALIZE: self._initialize,
            Method.INITIALIZED: self._acknowledge,
            Method.CANCELLED: self._cancel,
            Method.PING: self._acknowledge,
            Method.TOOLS_LIST: self._list_tools,
            Method.TOOLS_CALL: self._call_tool,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def executor(self) -> InvocationExecutor:
        return self._executor

    @property
    def server_info(self) -> ServerInfo:
        return self._server_info

    async def handle_raw(self, body: bytes | str) -> JsonRpcResponse:
        """Decode *body* as JSON and dispatch it."""
        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError) as exc:
            logger.debug("Rejecting undecodable request body: %s", exc)
            return self._error_response(None, MalformedRequestError("body is not valid JSON"))
        return await self.handle(payload)

    async def handle(self, payload: Any) -> JsonRpcResponse:
        """Dispatch a decoded JSON-RPC envelope."""
        request_id = extract_request_id(payload)
        with _tracer.start_as_current_span("rpc.dispatch") as span:
            if request_id is not None:
                span.set_attribute(ATTR_RPC_ID, str(request_id))
            try:
                request = self._parse(payload)
                span.set_attribute(ATTR_RPC_METHOD, request.method)
                result = await self._dispatch(request)
            except GatewayError as exc:
                span.set_attribute(ATTR_RPC_ERROR_CODE, exc.code)
                return self._error_response(request_id, exc)
            except Exception as exc:
                logger.exception("Unhandled error while dispatching request %r", request_id)
                span.set_attribute(ATTR_RPC_ERROR_CODE, INTERNAL_ERROR)
                return JsonRpcResponse.failure(
                    request_id, INTERNAL_ERROR, str(exc) or "Internal error"
                )
            return JsonRpcResponse.success(request.id, result)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(payload: Any) -> JsonRpcRequest:
        if not isinstance(payload, dict):
            msg = "request must be a JSON object"
            raise MalformedRequestError(msg)
        try:
            return JsonRpcRequest.model_validate(payload)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            raise MalformedRequestError(f"invalid envelope fields: {fields}") from exc

    async def _dispatch(self, request: JsonRpcRequest) -> dict[str, Any]:
        method = Method.lookup(request.method)
        if method is None:
            raise MethodNotFoundError(request.method)
        logger.debug("Dispatching %s (id=%r)", method.value, request.id)
        return await self._handlers[method](request.params, request.id)

    @staticmethod
    def _error_response(request_id: RequestId, exc: GatewayError) -> JsonRpcResponse:
        return JsonRpcResponse.failure(request_id, exc.code, str(exc))

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    async def _initialize(self, params: Any, request_id: RequestId) -> dict[str, Any]:
        result = InitializeResult(
            protocol_version=self._protocol_version,
            server_info=self._server_info,
        )
        return result.model_dump(by_alias=True)

    async def _acknowledge(self, params: Any, request_id: RequestId) -> dict[str, Any]:
        return {}

    async def _list_tools(self, params: Any, request_id: RequestId) -> dict[str, Any]:
        return {"tools": [descriptor.to_wire() for descriptor in self._registry.list()]}

    async def _call_tool(self, params: Any, request_id: RequestId) -> dict[str, Any]:
        if params is None:
            params = {}
        if not isinstance(params, dict):
            msg = "params must be an object"
            raise InvalidParamsError(msg)

        name = params.get("name")
        if not isinstance(name, str) or not name:
            msg = "params.name must be a non-empty string"
            raise InvalidParamsError(msg)

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            msg = "params.arguments must be an object"
            raise InvalidParamsError(msg)

        tool = self._registry.resolve(name)
        invocation_id = uuid4().hex[:12]
        self._track(request_id, invocation_id)
        try:
            result = await self._executor.invoke(tool, arguments, invocation_id=invocation_id)
        finally:
            self._untrack(request_id, invocation_id)
        return result.model_dump(mode="json")

    async def _cancel(self, params: Any, request_id: RequestId) -> dict[str, Any]:
        if not isinstance(params, dict):
            return {}
        target = extract_request_id({"id": params.get("requestId")})
        if target is None:
            return {}
        cancelled = [
            invocation_id
            for invocation_id in list(self._calls_by_request.get(target, ()))
            if self._executor.cancel(invocation_id)
        ]
        if cancelled:
            logger.info(
                "Cancelled %d invocation(s) for request %r (reason: %s)",
                len(cancelled),
                target,
                params.get("reason", "unspecified"),
            )
        return {}

    def _track(self, request_id: RequestId, invocation_id: str) -> None:
        if request_id is not None:
            self._calls_by_request.setdefault(request_id, set()).add(invocation_id)

    def _untrack(self, request_id: RequestId, invocation_id: str) -> None:
        if request_id is None:
            return
        calls = self._calls_by_request.get(request_id)
        if calls is None:
            return
        calls.discard(invocation_id)
        if not calls:
            del self._calls_by_request[request_id]
