"""Server configuration — listen address, protocol identity, runtime limits."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field

ENV_PREFIX = "ACTIONS_MCP_"
DEFAULT_SERVER_NAME = "claude-code-actions-mcp"

LogLevel = Literal["critical", "error", "warning", "info", "debug"]


class ServerSettings(BaseModel):
    """Settings for one gateway process.

    Build from the environment with :meth:`from_env`; every field maps to
    ``ACTIONS_MCP_<FIELD>``.  The bare ``PORT`` variable is honoured as well
    and takes precedence, matching the convention of container platforms.
    """

    host: str = "0.0.0.0"
    port: int = Field(default=3002, ge=0, le=65535)
    path: str = Field(default="/mcp", pattern=r"^/")
    server_name: str = DEFAULT_SERVER_NAME
    protocol_version: str = "2024-11-05"
    invocation_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds a tool may run before it is failed; unset means no limit.",
    )
    log_level: LogLevel = "info"
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP/gRPC collector for trace export; unset disables it.",
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerSettings:
        """Load settings from *environ* (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        if env.get("PORT"):
            values["port"] = env["PORT"]
        if "log_level" in values:
            values["log_level"] = values["log_level"].lower()
        return cls.model_validate(values)
