"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from opentelemetry import trace

from actions_mcp.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_TOOL_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "actions_mcp"
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("test") as span:
            span.set_attribute(ATTR_TOOL_NAME, "run_action")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with patch.object(trace, "set_tracer_provider"):
                with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                    configure_telemetry(
                        console=False,
                        otlp_endpoint="http://localhost:4317",
                    )

    def test_configures_console_provider(self) -> None:
        try:
            from opentelemetry.sdk.trace import TracerProvider
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch.object(trace, "set_tracer_provider") as mock_set:
            configure_telemetry(service_name="test-svc", console=True)

        provider = mock_set.call_args.args[0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "test-svc"

    def test_otlp_processor_attached(self) -> None:
        try:
            from opentelemetry.sdk.trace import TracerProvider
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        exporter_module = MagicMock()
        with (
            patch.dict(
                "sys.modules",
                {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": exporter_module},
            ),
            patch.object(TracerProvider, "add_span_processor") as mock_add,
            patch.object(trace, "set_tracer_provider"),
        ):
            configure_telemetry(console=False, otlp_endpoint="http://collector:4317")

        exporter_module.OTLPSpanExporter.assert_called_once_with(endpoint="http://collector:4317")
        assert mock_add.call_count == 1


class TestAttributeConstants:
    def test_constants_are_namespaced(self) -> None:
        assert ATTR_TOOL_NAME.startswith("actions_mcp.")
