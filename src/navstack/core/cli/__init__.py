"""navstack CLI: manage links, recent updates and bookmark export."""

import click

from navstack import __version__


@click.group()
@click.version_option(version=__version__, package_name="navstack")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML or JSON config file.")
@click.option("--local", is_flag=True, help="Use the local data directory instead of GitHub.")
@click.option("-v", "--verbose", count=True, help="More logging (-v info, -vv debug).")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, local: bool, verbose: int) -> None:
    """navstack: manage the link directory of a navigation site."""
    from navstack.core.config import Config
    from navstack.core.utils.logging import setup_logging

    config = Config(config_file=config_file)
    level = {0: config.get("logging.level", "WARNING"), 1: "INFO"}.get(verbose, "DEBUG")
    setup_logging(level=level, log_file=config.get_path("logging.file") or None)
    ctx.obj = {"config": config, "local": local}


from .links_cmd import add, delete, files, search, show, update
from .updates_cmd import export_bookmarks, updates

main.add_command(files)
main.add_command(show)
main.add_command(add)
main.add_command(update)
main.add_command(delete)
main.add_command(search)
main.add_command(updates)
main.add_command(export_bookmarks)
