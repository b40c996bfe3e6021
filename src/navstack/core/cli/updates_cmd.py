"""Recent updates and bookmark export commands."""

from __future__ import annotations

import click

from .common import build_notification_log, echo_json, get_config_from_ctx, get_service, run


@click.command()
@click.pass_context
def updates(ctx: click.Context) -> None:
    """Show the recently added links, newest first."""
    from navstack.core.exceptions import NavstackError
    from navstack.service import recent_updates

    try:
        log = build_notification_log(get_config_from_ctx(ctx))
    except NavstackError as e:
        raise click.ClickException(str(e)) from e
    echo_json(recent_updates(log))


@click.command("export-bookmarks")
@click.option("--remote", is_flag=True, help="Read documents from GitHub instead of the local data directory.")
@click.pass_context
def export_bookmarks(ctx: click.Context, remote: bool) -> None:
    """Regenerate the Netscape bookmark file."""
    service = get_service(ctx, local=None if remote else True, export_local=not remote)
    path = run(service.export_bookmarks())
    click.echo(path)
