"""actions-mcp CLI entrypoint."""

from __future__ import annotations

import click

from actions_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="actions-mcp")
def main() -> None:
    """actions-mcp — MCP tool gateway."""


# Register subcommands
from actions_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
