"""Post, media and option convenience commands."""

from __future__ import annotations

import json
import mimetypes
from pathlib import Path

import typer
from rich.console import Console

from wpxmlrpc.cli.shared.client_utils import build_client, run_and_print


def register_post_commands(app: typer.Typer, console: Console) -> None:
    """Register post/media/options command groups."""
    post_app = typer.Typer(help="Posts (wp.getPost, wp.getPosts, wp.newPost, wp.deletePost)")
    app.add_typer(post_app, name="post")

    @post_app.command("get")
    def post_get(
        ctx: typer.Context,
        post_id: int = typer.Argument(..., help="Post id"),
        field: list[str] = typer.Option(None, "--field", "-f", help="Restrict response fields (repeatable)"),
    ) -> None:
        """Show one post."""
        client = build_client(ctx.obj, console)
        run_and_print(console, client, lambda: client.get_post(post_id, field or None))

    @post_app.command("list")
    def post_list(
        ctx: typer.Context,
        filters: str = typer.Option("", "--filter", help='JSON struct, e.g. {"number": 5}'),
    ) -> None:
        """List posts."""
        try:
            parsed = json.loads(filters) if filters.strip() else {}
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid --filter JSON:[/red] {e}")
            raise typer.Exit(1)
        client = build_client(ctx.obj, console)
        run_and_print(console, client, lambda: client.get_posts(parsed))

    @post_app.command("new")
    def post_new(
        ctx: typer.Context,
        title: str = typer.Argument(..., help="Post title"),
        body: str = typer.Argument(..., help="Post content (HTML)"),
        status: str = typer.Option("publish", "--status", help="post_status"),
    ) -> None:
        """Create a post and print its id."""
        client = build_client(ctx.obj, console)
        run_and_print(console, client, lambda: client.new_post(title, body, {"post_status": status}))

    @post_app.command("delete")
    def post_delete(
        ctx: typer.Context,
        post_id: int = typer.Argument(..., help="Post id"),
    ) -> None:
        """Delete a post."""
        client = build_client(ctx.obj, console)
        run_and_print(console, client, lambda: client.delete_post(post_id))

    media_app = typer.Typer(help="Media library (wp.getMediaItem, wp.uploadFile)")
    app.add_typer(media_app, name="media")

    @media_app.command("get")
    def media_get(
        ctx: typer.Context,
        item_id: int = typer.Argument(..., help="Attachment id"),
    ) -> None:
        """Show one media item."""
        client = build_client(ctx.obj, console)
        run_and_print(console, client, lambda: client.get_media_item(item_id))

    @media_app.command("upload")
    def media_upload(
        ctx: typer.Context,
        path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to upload"),
        mime: str = typer.Option("", "--mime", help="MIME type (guessed from the name when empty)"),
        post_id: int = typer.Option(None, "--post-id", help="Attach to this post"),
        overwrite: bool = typer.Option(False, "--overwrite", help="Replace a file with the same name"),
    ) -> None:
        """Upload a file to the media library."""
        mime_type = mime or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        bits = path.read_bytes()
        client = build_client(ctx.obj, console)
        run_and_print(
            console,
            client,
            lambda: client.upload_file(path.name, mime_type, bits, overwrite=overwrite or None, post_id=post_id),
        )

    @app.command("options")
    def options_get(
        ctx: typer.Context,
        name: list[str] = typer.Argument(None, help="Option names (all when omitted)"),
    ) -> None:
        """Show blog options (wp.getOptions)."""
        client = build_client(ctx.obj, console)
        run_and_print(console, client, lambda: client.get_options(name or None))
