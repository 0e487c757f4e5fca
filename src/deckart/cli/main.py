"""Command-line entry point.

Usage:
    deckart USERNAME OUTPUT_DIR [--color NAME] [--dry-run]
"""

from typing import Optional

import click

from deckart.colors import available_colors, resolve_color
from deckart.config import settings as settings_module
from deckart.core.logging import get_logger, setup_logging
from deckart.errors import DeckArtError
from deckart.pipeline import build_pipeline

from .common import resolve_output_path, write_json_summary

logger = get_logger(__name__)


def _list_colors(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    for name in available_colors():
        click.echo(name)
    ctx.exit()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("username")
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=str))
@click.option(
    "--color",
    "-c",
    "color_name",
    default=None,
    help="Border color name (default: black). See --list-colors.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be deleted and fetched without changing anything.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Console log level.",
)
@click.option(
    "--summary-json",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Write a JSON run summary to this path.",
)
@click.option(
    "--list-colors",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_list_colors,
    help="Print the accepted color names and exit.",
)
def cli(
    username: str,
    output_dir: str,
    color_name: Optional[str],
    dry_run: bool,
    log_level: Optional[str],
    summary_json: Optional[str],
) -> None:
    """Mirror the card images of USERNAME's Moxfield decks into OUTPUT_DIR."""
    settings = settings_module.settings
    setup_logging(log_level)

    color_name = color_name or settings.default_color
    cache_dir = resolve_output_path(output_dir)

    try:
        # Fail on a bad color before touching the network.
        resolve_color(color_name)
        pipeline = build_pipeline(settings)
        summary = pipeline.run(username, cache_dir, color_name, dry_run=dry_run)
    except DeckArtError as error:
        raise click.ClickException(str(error)) from error
    except OSError as error:
        raise click.ClickException(f"File system error: {error}") from error

    try:
        written_to = write_json_summary(summary.to_dict(), summary_json)
    except OSError as error:
        raise click.ClickException(f"Could not write summary {summary_json}: {error}") from error
    if written_to is not None:
        logger.info("Summary written to {}", written_to)

    if dry_run:
        click.echo(
            f"Dry run: {len(summary.deleted)} to delete, "
            f"{len(summary.pending)} to fetch, {len(summary.kept)} up to date."
        )
    else:
        click.echo(
            f"{len(summary.written)} written, {len(summary.skipped)} skipped, "
            f"{len(summary.deleted)} deleted, {len(summary.kept)} up to date."
        )


if __name__ == "__main__":
    cli()
