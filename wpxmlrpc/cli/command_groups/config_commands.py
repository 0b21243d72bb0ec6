"""Config show/init command group."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from wpxmlrpc.cli.shared.client_utils import resolve_config
from wpxmlrpc.config.loader import get_config_path, save_config
from wpxmlrpc.config.schema import ClientConfig


def register_config_commands(app: typer.Typer, console: Console) -> None:
    """Register the config command group."""
    config_app = typer.Typer(help="Config helpers (show/init)")
    app.add_typer(config_app, name="config")

    @config_app.command("show")
    def config_show(ctx: typer.Context) -> None:
        """Print the effective configuration with passwords masked."""
        config = resolve_config(ctx.obj, console)
        table = Table(title="Effective configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in config.masked().items():
            table.add_row(key, "" if value is None else str(value))
        console.print(table)

    @config_app.command("init")
    def config_init(
        endpoint: str = typer.Option(..., "--endpoint", prompt=True, help="XML-RPC endpoint URL"),
        username: str = typer.Option(..., "--username", prompt=True),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
        force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
    ) -> None:
        """Write a config file with endpoint and credentials."""
        path = get_config_path()
        if path.exists() and not force:
            console.print(f"[yellow]Config already exists:[/yellow] {path} (use --force to overwrite)")
            raise typer.Exit(1)
        save_config(ClientConfig(endpoint=endpoint, username=username, password=password), path)
        console.print(f"[green]✓[/green] Saved {path}")
