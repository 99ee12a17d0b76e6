"""Protocol models — JSON-RPC 2.0 envelopes and MCP payloads.

Implements the message format used by the Model Context Protocol for
the handshake (``initialize``), tool discovery (``tools/list``) and
execution (``tools/call``).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr, model_serializer, model_validator

RequestId = Union[
    StrictInt,
    Annotated[float, Field(strict=True, allow_inf_nan=False)],
    StrictStr,
    None,
]

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class Method(str, Enum):
    """The closed set of methods the gateway serves."""

    INITIALIZE = "initialize"
    INITIALIZED = "notifications/initialized"
    CANCELLED = "notifications/cancelled"
    PING = "ping"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"

    @classmethod
    def lookup(cls, name: Any) -> Method | None:
        """Return the member for *name*, or ``None`` if it is not served."""
        try:
            return cls(name)
        except ValueError:
            return None


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    id: RequestId = None
    params: Any = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set; the other is omitted
    from the serialized form.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId = None
    result: Any = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> JsonRpcResponse:
        if self.error is not None and self.result is not None:
            msg = "a response carries either 'result' or 'error', not both"
            raise ValueError(msg)
        if self.error is None and self.result is None:
            msg = "a response must carry 'result' or 'error'"
            raise ValueError(msg)
        return self

    @model_serializer(mode="wrap")
    def _omit_absent_outcome(self, handler: Any) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        if self.error is None:
            data.pop("error", None)
        else:
            data.pop("result", None)
            if self.error.data is None:
                data["error"].pop("data", None)
        return data

    @classmethod
    def success(cls, request_id: RequestId, result: Any) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: RequestId,
        code: int,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message, data=data))


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class InvocationResult(BaseModel):
    """The payload of a successful ``tools/call``."""

    content: list[TextContent] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> InvocationResult:
        """Create a result with a single text content part."""
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        """Concatenated text of all content parts."""
        return "\n".join(part.text for part in self.content)


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """The ``initialize`` handshake result."""

    model_config = {"populate_by_name": True}

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    server_info: ServerInfo = Field(alias="serverInfo")
