"""Link commands: files, show, add, update, delete, search."""

from __future__ import annotations

import click

from .common import echo_json, get_service, run

# Field names match the web front end's request bodies.
LINK_OPTIONS = ("url", "logo", "description")


@click.command()
@click.pass_context
def files(ctx: click.Context) -> None:
    """List the navigation documents."""
    service = get_service(ctx)
    echo_json(run(service.list_documents()))


@click.command()
@click.argument("filename")
@click.pass_context
def show(ctx: click.Context, filename: str) -> None:
    """Print one document's YAML."""
    service = get_service(ctx)
    click.echo(run(service.read_document(filename)), nl=False)


@click.command()
@click.argument("filename")
@click.option("--taxonomy", required=True, help="Category to add the link to.")
@click.option("--term", default=None, help="Sub-category inside the category.")
@click.option("--title", default="", help="Link title.")
@click.option("--url", default="", help="Link URL.")
@click.option("--logo", default="", help="Logo image URL.")
@click.option("--description", default="", help="Short description.")
@click.option("--icon", default=None, help="Icon for a newly created category.")
@click.pass_context
def add(
    ctx: click.Context,
    filename: str,
    taxonomy: str,
    term: str | None,
    title: str,
    url: str,
    logo: str,
    description: str,
    icon: str | None,
) -> None:
    """Add a link to FILENAME and announce it."""
    from navstack.taxonomy.models import LinkEntry

    entry = LinkEntry(title=title, logo=logo, url=url, description=description)
    service = get_service(ctx)
    event = run(service.add_link(filename, taxonomy, entry, term=term, icon=icon))
    click.echo(f"Added '{event.title}' to {filename}.")


@click.command()
@click.argument("filename")
@click.argument("title")
@click.option("--new-title", default=None, help="Rename the link.")
@click.option("--url", default=None, help="New URL.")
@click.option("--logo", default=None, help="New logo URL.")
@click.option("--description", default=None, help="New description.")
@click.pass_context
def update(
    ctx: click.Context,
    filename: str,
    title: str,
    new_title: str | None,
    url: str | None,
    logo: str | None,
    description: str | None,
) -> None:
    """Update every link titled TITLE in FILENAME."""
    values = {"url": url, "logo": logo, "description": description}
    patch = {name: values[name] for name in LINK_OPTIONS if values[name] is not None}
    if new_title is not None:
        patch["title"] = new_title
    if not patch:
        raise click.UsageError("Nothing to update; pass at least one of --new-title, --url, --logo, --description.")

    service = get_service(ctx)
    count = run(service.update_link(filename, title, patch))
    click.echo(f"Updated {count} link(s).")


@click.command()
@click.argument("filename")
@click.argument("title")
@click.pass_context
def delete(ctx: click.Context, filename: str, title: str) -> None:
    """Delete every link titled TITLE from FILENAME."""
    service = get_service(ctx)
    count = run(service.delete_link(filename, title))
    click.echo(f"Deleted {count} link(s).")


@click.command()
@click.argument("filename")
@click.argument("keyword")
@click.pass_context
def search(ctx: click.Context, filename: str, keyword: str) -> None:
    """Find links in FILENAME whose title or description contains KEYWORD."""
    service = get_service(ctx)
    results = run(service.search(filename, keyword))
    echo_json([link.to_dict() for link in results])
