"""``actions-mcp serve`` — run the HTTP gateway."""

from __future__ import annotations

import sys

import click

from actions_mcp.cli_commands._output import configure_logging, console


@click.command()
@click.option("--host", default=None, help="Interface to bind (default: 0.0.0.0).")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (default: $PORT or 3002).")
@click.option(
    "--log-level",
    type=click.Choice(["critical", "error", "warning", "info", "debug"]),
    default=None,
    help="Log level for the gateway and uvicorn.",
)
@click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans to the console.")
@click.option(
    "--otlp-endpoint",
    default=None,
    help="Export OpenTelemetry spans to this OTLP/gRPC collector.",
)
def serve(
    host: str | None,
    port: int | None,
    log_level: str | None,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve the MCP endpoint over HTTP."""
    import uvicorn

    from actions_mcp.config import ServerSettings
    from actions_mcp.server.app import create_app

    try:
        settings = ServerSettings.from_env()
    except ValueError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    overrides = {
        key: value
        for key, value in {
            "host": host,
            "port": port,
            "log_level": log_level,
            "otlp_endpoint": otlp_endpoint,
        }.items()
        if value is not None
    }
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)

    if telemetry or settings.otlp_endpoint:
        from actions_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=settings.server_name,
                console=telemetry,
                otlp_endpoint=settings.otlp_endpoint,
            )
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    app = create_app(settings)
    console.print(
        f"[green]{settings.server_name}[/green] listening on "
        f"http://{settings.host}:{settings.port}{settings.path}"
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
