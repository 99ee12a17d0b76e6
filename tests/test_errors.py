"""Tests for the gateway error hierarchy."""

from actions_mcp.errors import (
    DuplicateToolError,
    GatewayError,
    InvalidParamsError,
    InvocationCancelledError,
    InvocationTimeoutError,
    MalformedRequestError,
    MethodNotFoundError,
    SchemaValidationError,
    ToolExecutionError,
    UnknownToolError,
)


class TestErrorHierarchy:
    def test_all_are_gateway_errors(self) -> None:
        for cls in (
            DuplicateToolError,
            UnknownToolError,
            InvalidParamsError,
            SchemaValidationError,
            MethodNotFoundError,
            MalformedRequestError,
            ToolExecutionError,
        ):
            assert issubclass(cls, GatewayError)

    def test_schema_error_is_invalid_params(self) -> None:
        assert issubclass(SchemaValidationError, InvalidParamsError)

    def test_cancel_and_timeout_are_execution_errors(self) -> None:
        assert issubclass(InvocationCancelledError, ToolExecutionError)
        assert issubclass(InvocationTimeoutError, ToolExecutionError)


class TestCodes:
    def test_invalid_params_codes(self) -> None:
        assert UnknownToolError("x").code == -32602
        assert SchemaValidationError("x", ["bad"]).code == -32602
        assert InvalidParamsError("bad").code == -32602

    def test_method_not_found_code(self) -> None:
        assert MethodNotFoundError("bogus").code == -32601

    def test_internal_codes(self) -> None:
        assert ToolExecutionError("x", "boom").code == -32603
        assert MalformedRequestError().code == -32603
        assert InvocationTimeoutError("x", 1.0).code == -32603


class TestMessages:
    def test_unknown_tool(self) -> None:
        err = UnknownToolError("ghost")
        assert err.name == "ghost"
        assert str(err) == "Unknown tool: ghost"

    def test_schema_error_joins_violations(self) -> None:
        err = SchemaValidationError("run_action", ["a: missing", "b: wrong"])
        assert err.violations == ["a: missing", "b: wrong"]
        assert "a: missing; b: wrong" in str(err)

    def test_execution_error_passes_message_through(self) -> None:
        err = ToolExecutionError("t", "disk full")
        assert str(err) == "disk full"
        assert err.detail == "disk full"

    def test_execution_error_without_detail(self) -> None:
        assert "t" in str(ToolExecutionError("t"))

    def test_malformed_detail(self) -> None:
        assert str(MalformedRequestError("body is not valid JSON")).endswith("body is not valid JSON")

    def test_timeout_attributes(self) -> None:
        err = InvocationTimeoutError("slow", 30.0)
        assert err.timeout == 30.0
        assert "30.0s" in str(err)
