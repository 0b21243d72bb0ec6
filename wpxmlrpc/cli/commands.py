"""CLI commands for wpxmlrpc.

Single entry point: registers the top-level ``call`` and ``version`` commands
and the command groups (post, media, options, config).
"""

from pathlib import Path

import typer
from rich.console import Console

from wpxmlrpc import __version__
from wpxmlrpc.cli.command_groups.config_commands import register_config_commands
from wpxmlrpc.cli.command_groups.posts_command import register_post_commands
from wpxmlrpc.cli.shared.client_utils import CliOptions, build_client, run_and_print
from wpxmlrpc.cli.shared.logging_utils import configure_console_logging, ensure_rotating_log_file
from wpxmlrpc.cli.shared.output_utils import parse_params

app = typer.Typer(
    name="wpxmlrpc",
    help="wpxmlrpc - WordPress XML-RPC client",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(None, "--config", "-c", help="Config file (default ~/.wpxmlrpc/config.json)"),
    endpoint: str = typer.Option(None, "--endpoint", "-e", help="XML-RPC endpoint URL"),
    username: str = typer.Option(None, "--username", "-u"),
    password: str = typer.Option(None, "--password", "-p"),
    transport: str = typer.Option(None, "--transport", help="httpx or urllib"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
    log_file: bool = typer.Option(False, "--log-file", help="Also log to ~/.wpxmlrpc/logs/wpxmlrpc.log"),
) -> None:
    configure_console_logging(verbose)
    if log_file:
        ensure_rotating_log_file("wpxmlrpc", level="DEBUG" if verbose else "INFO")
    ctx.obj = CliOptions(
        config_path=config,
        endpoint=endpoint,
        username=username,
        password=password,
        transport=transport,
    )


@app.command("call")
def call_command(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="Remote procedure, e.g. wp.getPost"),
    params: str = typer.Argument(None, help='JSON array of positional params, e.g. [1, "bob", "pw", 229]'),
) -> None:
    """Call any XML-RPC method with raw params."""
    try:
        values = parse_params(params)
    except ValueError as e:
        console.print(f"[red]Invalid params JSON:[/red] {e}")
        raise typer.Exit(1)
    client = build_client(ctx.obj, console)
    run_and_print(console, client, lambda: client.call_custom_method(method, values))


@app.command("version")
def version() -> None:
    """Show the installed version."""
    console.print(f"wpxmlrpc v{__version__}")


register_post_commands(app, console)
register_config_commands(app, console)


if __name__ == "__main__":
    app()
