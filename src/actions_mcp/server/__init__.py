"""HTTP transport for the gateway."""

from actions_mcp.server.app import build_dispatcher, create_app

__all__ = ["build_dispatcher", "create_app"]
