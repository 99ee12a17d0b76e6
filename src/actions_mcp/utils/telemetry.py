"""Tracing for the gateway.

The dispatcher opens an ``rpc.dispatch`` span per request and the executor
a nested ``tool.invoke`` span per invocation, tagged with the ``ATTR_*``
keys below.  Only ``opentelemetry-api`` is required: until
:func:`configure_telemetry` installs an SDK provider (``actions-mcp[otel]``),
every span is a no-op.  ``actions-mcp serve --telemetry`` and
``--otlp-endpoint`` call it at startup.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from opentelemetry import trace

ATTR_RPC_METHOD = "actions_mcp.rpc.method"
ATTR_RPC_ID = "actions_mcp.rpc.id"
ATTR_RPC_ERROR_CODE = "actions_mcp.rpc.error_code"
ATTR_TOOL_NAME = "actions_mcp.tool.name"
ATTR_INVOCATION_ID = "actions_mcp.invocation.id"
ATTR_INVOCATION_STATE = "actions_mcp.invocation.state"

_INSTRUMENTATION_NAME = "actions_mcp"
DEFAULT_SERVICE_NAME = "actions-mcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*, from whatever provider is installed."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = DEFAULT_SERVICE_NAME,
    console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider (requires ``actions-mcp[otel]``).

    Spans go to stdout when *console* is set and to an OTLP/gRPC collector
    when *otlp_endpoint* is given; both may be active at once.

    Raises
    ------
    ImportError
        If ``opentelemetry-sdk``, or the OTLP exporter when
        *otlp_endpoint* is set, is not installed.
    """
    sdk = _import_sdk()
    provider = sdk.TracerProvider(resource=sdk.Resource.create({"service.name": service_name}))
    for processor in _span_processors(sdk, console=console, otlp_endpoint=otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _import_sdk() -> SimpleNamespace:
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install actions-mcp[otel]"
        )
        raise ImportError(msg) from exc
    return SimpleNamespace(
        Resource=Resource,
        TracerProvider=TracerProvider,
        BatchSpanProcessor=BatchSpanProcessor,
        ConsoleSpanExporter=ConsoleSpanExporter,
        SimpleSpanProcessor=SimpleSpanProcessor,
    )


def _span_processors(
    sdk: SimpleNamespace,
    *,
    console: bool,
    otlp_endpoint: str | None,
) -> list[Any]:
    processors: list[Any] = []
    if console:
        processors.append(sdk.SimpleSpanProcessor(sdk.ConsoleSpanExporter()))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = (
                "opentelemetry-exporter-otlp is required for OTLP export. "
                "Install it with: pip install actions-mcp[otel]"
            )
            raise ImportError(msg) from exc
        processors.append(sdk.BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
