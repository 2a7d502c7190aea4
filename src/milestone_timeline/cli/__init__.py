"""Command line entry points for milestone-timeline."""

import logging

from typer import Option, Typer

from .timeline import timeline_app
from .years import years_app
from ..configuration.cli import config_app


cli = Typer(help="Milestone timeline command line tools")
cli.add_typer(timeline_app, name="timeline")
cli.add_typer(years_app, name="years")
cli.add_typer(config_app, name="config")


@cli.callback()
def main(
    verbose: bool = Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Extract dated milestones from markdown notes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = ["cli", "timeline_app", "years_app", "config_app"]
