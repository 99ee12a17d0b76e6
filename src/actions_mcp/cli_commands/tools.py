"""``actions-mcp tools`` — inspect and call the registered tools in-process."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from actions_mcp.cli_commands._output import console, print_tools_table


@click.group()
def tools() -> None:
    """Inspect and call tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_tools(as_json: bool) -> None:
    """List the tools the gateway serves."""
    from actions_mcp.tools.actions import build_default_registry

    registry = build_default_registry()
    if as_json:
        click.echo(json.dumps({"tools": [d.to_wire() for d in registry.list()]}, indent=2))
        return

    if not len(registry):
        console.print("[yellow]No tools registered.[/yellow]")
        return

    print_tools_table(registry.list())


@tools.command("call")
@click.argument("name")
@click.option("--args", "args_json", default="{}", help="Tool arguments as a JSON object.")
def call(name: str, args_json: str) -> None:
    """Call tool NAME through the dispatcher and print the JSON-RPC response."""
    from actions_mcp.config import ServerSettings
    from actions_mcp.server.app import build_dispatcher
    from actions_mcp.tools.actions import build_default_registry

    try:
        arguments = json.loads(args_json)
    except ValueError as exc:
        console.print(f"[red]Invalid --args JSON:[/red] {exc}")
        sys.exit(2)

    dispatcher = build_dispatcher(ServerSettings.from_env(), build_default_registry())
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments},
    }
    response = asyncio.run(dispatcher.handle(request))
    click.echo(json.dumps(response.model_dump(mode="json"), indent=2))
    if response.error is not None:
        sys.exit(1)
