"""Tests for ``actions-mcp tools`` CLI commands."""

from __future__ import annotations

import json

from click.testing import CliRunner

from actions_mcp.cli import main


class TestToolsList:
    def test_table(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list"])
        assert result.exit_code == 0
        assert "list_actions" in result.output
        assert "run_action" in result.output

    def test_json(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [t["name"] for t in data["tools"]] == ["list_actions", "run_action"]


class TestToolsCall:
    def test_call_success(self) -> None:
        result = CliRunner().invoke(
            main, ["tools", "call", "run_action", "--args", '{"action_id": "a1"}']
        )
        assert result.exit_code == 0
        assert "completed" in result.output

    def test_call_validation_error(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "run_action"])
        assert result.exit_code == 1
        assert "-32602" in result.output

    def test_call_unknown_tool(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "ghost"])
        assert result.exit_code == 1
        assert "Unknown tool" in result.output

    def test_invalid_args_json(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "run_action", "--args", "{oops"])
        assert result.exit_code == 2
        assert "Invalid --args JSON" in result.output
