"""brew-taps command line."""

import asyncio
import logging
import sys

import click

from .exceptions import TapError
from .installer import install_tap
from .schema import InstallStatus
from .settings import TapSettings

logger = logging.getLogger(__name__)


@click.command()
@click.argument("tap_name", required=False)
@click.argument("url", required=False)
@click.option("--full", is_flag=True, help="Clone full history instead of a shallow copy")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors")
@click.option("--list-pinned", is_flag=True, help="List pinned taps")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
def main(tap_name: str | None, url: str | None, full: bool, quiet: bool, list_pinned: bool, verbose: bool) -> None:
    """Tap a formula repository, or list installed taps.

    With URL unspecified, taps https://github.com/USER/homebrew-REPO.
    Re-running is safe; retapping with a different URL fails, so untap first.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    settings = TapSettings()
    lock = settings.lock()
    registry = settings.registry(lock=lock)

    if list_pinned:
        for name in registry.list_pinned():
            click.echo(name)
        return

    if tap_name is None:
        for name in registry.names():
            click.echo(name)
        return

    try:
        tap = registry.fetch_name(tap_name)
    except TapError as e:
        raise click.UsageError(e.message) from e

    options = settings.install_options(full=full, quiet=quiet, clone_target=url)
    outcome = asyncio.run(install_tap(tap, options, mirror=settings.mirror(), lock=lock))

    if outcome.status is InstallStatus.FAILED:
        click.echo(f"Error: {outcome.message}", err=True)
        sys.exit(1)
    if outcome.status in (InstallStatus.ALREADY_INSTALLED, InstallStatus.ALREADY_FULL):
        log = logger.debug if quiet else logger.info
        log(outcome.message)


if __name__ == "__main__":
    main()
