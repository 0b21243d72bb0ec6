"""Client construction and error reporting for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import typer
from rich.console import Console
from rich.markup import escape

from wpxmlrpc.client import WordpressClient
from wpxmlrpc.config.loader import load_config
from wpxmlrpc.config.schema import ClientConfig
from wpxmlrpc.cli.shared.output_utils import format_call_error, print_result
from wpxmlrpc.utils.exceptions import WpXmlrpcError


@dataclass
class CliOptions:
    """Global options collected by the root callback."""
    config_path: Path | None = None
    endpoint: str | None = None
    username: str | None = None
    password: str | None = None
    transport: str | None = None


def resolve_config(options: CliOptions, console: Console) -> ClientConfig:
    """Load the config file and apply command line overrides."""
    try:
        config = load_config(options.config_path)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    overrides = {
        "endpoint": options.endpoint,
        "username": options.username,
        "password": options.password,
        "transport": options.transport,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}
    if updates:
        try:
            config = ClientConfig.model_validate({**config.model_dump(), **updates})
        except ValueError as e:
            console.print(f"[red]Invalid option:[/red] {escape(str(e))}")
            raise typer.Exit(1)
    return config


def build_client(options: CliOptions, console: Console) -> WordpressClient:
    config = resolve_config(options, console)
    try:
        return WordpressClient.from_config(config)
    except WpXmlrpcError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(e.message)}")
        raise typer.Exit(1)


def run_and_print(console: Console, client: WordpressClient, fn: Callable[[], Any]) -> Any:
    """Run one client call, print its result as JSON, exit 1 on failure."""
    try:
        result = fn()
    except WpXmlrpcError as exc:
        style, detail = format_call_error(exc, client.error_message)
        console.print(f"[{style}]Error:[/{style}] {escape(detail)}")
        raise typer.Exit(1)
    print_result(console, result)
    return result
