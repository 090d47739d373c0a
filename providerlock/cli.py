"""
Command-line interface for providerlock.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from providerlock.config import load_config
from providerlock.__version__ import VERSION_STRING, __version__
from providerlock.context import ProviderLockContext
from providerlock.exceptions import ConfigError, ProviderLockError
from providerlock.utils.logger import get_logger, setup_logging
from providerlock.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="PROVIDERLOCK_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="PROVIDERLOCK_COLOR",
)
@click.version_option(version=__version__, message=VERSION_STRING)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """providerlock: resolve provider checksums for dependency lock files.

    \b
    Available commands:
      providerlock hashes          Resolve h1/zh checksums for provider versions
      providerlock latest          Show the latest release of a provider source

    \b
    Examples:
      providerlock hashes hashicorp/null@3.2.1
      providerlock hashes hashicorp/null@3.2.1 -p linux_amd64 -p darwin_arm64
      providerlock latest github hashicorp/terraform-provider-null

    Use ``providerlock COMMAND --help`` for command-specific options.
    """
    # NO_COLOR must be set before the first console or log handler is built
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    lock_ctx = ProviderLockContext()
    lock_ctx.config_path = config or loaded_config.source_path
    lock_ctx.config = loaded_config
    lock_ctx.color = color
    lock_ctx.verbose = verbose
    ctx.obj = lock_ctx

    logger.debug("providerlock v%s", __version__)
    logger.debug("Config path: %s", lock_ctx.config_path)
    logger.debug("Configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from providerlock.commands.hashes import hashes  # noqa: E402
from providerlock.commands.latest import latest  # noqa: E402

cli.add_command(hashes)
cli.add_command(latest)


def main() -> int:
    """Main entry point for the providerlock CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except ProviderLockError as exc:
        print_error(str(exc))
        logger.debug(
            "ProviderLockError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
