"""Main CLI entry point for the blueprint updater."""

import logging
import os
import sys
from pathlib import Path

import click

from dspbp_updater import __version__
from dspbp_updater.cli.terminal import Terminal
from dspbp_updater.cli.updater import Updater
from dspbp_updater.core.errors import UpdaterError
from dspbp_updater.core.repository import GIT_ERRORS, BlueprintRepository
from dspbp_updater.models.settings import UpdaterSettings

DEBUG_ENV = "DSPBP_UPDATER_DEBUG"

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = logging.DEBUG if os.environ.get(DEBUG_ENV) else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _fail(terminal: Terminal, message: str) -> None:
    """Show a fatal error, keep the window open, then exit with status 1."""
    terminal.warn(message)
    terminal.wait_for_key()
    sys.exit(1)


@click.command()
@click.version_option(version=__version__, prog_name="dspbp-updater")
def main():
    """Clone or update FactoryBluePrints in the current directory."""
    _configure_logging()
    terminal = Terminal.from_environment()
    settings = UpdaterSettings()
    repository = BlueprintRepository(Path.cwd(), settings)

    try:
        outcome = Updater(repository, terminal, settings).run()
    except UpdaterError as e:
        _fail(terminal, str(e))
    except GIT_ERRORS as e:
        logger.debug("Unwrapped error", exc_info=True)
        _fail(terminal, f"Unexpected error: {e}")

    logger.debug("Finished with %s", outcome.value)
    terminal.wait_for_key()


if __name__ == "__main__":
    main()
