"""Hashes command implementation for providerlock.

Resolves the lock-entry checksums of one or more provider versions and
prints them. Every provider is resolved concurrently through a single
:class:`LockIndex`, so a version named twice on the command line is only
downloaded once.

Typical usage::

    # Default platforms from configuration
    $ providerlock hashes hashicorp/null@3.2.1

    # Explicit platforms, machine-readable output
    $ providerlock hashes hashicorp/null@3.2.1 hashicorp/random@3.6.0 \\
        -p linux_amd64 -p darwin_arm64 --format json
"""

from __future__ import annotations

import sys
import click
import asyncio
from typing import Any, Dict, List, Sequence, Tuple

from providerlock.models import ProviderVersion
from providerlock.exceptions import ProviderLockError
from providerlock.context import pass_context, ProviderLockContext
from providerlock.core import LockIndex, RegistryDownloader
from providerlock.utils import (
    HTTPClient,
    get_logger,
    print_error,
    print_json,
    print_success,
    print_table,
)

logger = get_logger("commands.hashes")


@click.command()
@click.argument("providers", nargs=-1, required=True, metavar="PROVIDER@VERSION...")
@click.option(
    "--platform",
    "-p",
    "platforms",
    multiple=True,
    help="Platform to resolve (os_arch). Repeatable. Defaults to configured platforms.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def hashes(
    ctx: ProviderLockContext,
    providers: Sequence[str],
    platforms: Sequence[str],
    format: str,
) -> None:
    """Resolve lock-entry checksums for provider versions.

    Each PROVIDER@VERSION is an address such as ``hashicorp/null`` or
    ``registry.terraform.io/hashicorp/null`` followed by ``@`` and an exact
    version.

    Exits:
        0 when every provider resolved, 1 on the first resolution error.
    """
    targets = [_split_target(value) for value in providers]
    selected = list(platforms) or list(ctx.config.platforms)

    try:
        records = asyncio.run(_hashes_async(ctx, targets, selected))
    except ProviderLockError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in hashes command")
        sys.exit(1)

    if format.lower() == "json":
        print_json([record.to_dict() for record in records])
    else:
        for record in records:
            _display_table(record)
        print_success(f"Resolved {len(records)} provider version(s)")


def _split_target(value: str) -> Tuple[str, str]:
    """Split ``address@version`` into its parts."""
    address, sep, version = value.rpartition("@")
    if not sep or not address or not version:
        raise click.BadParameter(
            f"expected PROVIDER@VERSION, got '{value}'",
            param_hint="PROVIDER@VERSION",
        )
    return address, version


async def _hashes_async(
    ctx: ProviderLockContext,
    targets: Sequence[Tuple[str, str]],
    platforms: Sequence[str],
) -> List[ProviderVersion]:
    """Resolve every target through one shared index.

    All resolutions run to completion before the HTTP client closes; the
    first failure in command-line order is then raised.
    """
    config = ctx.config

    async with HTTPClient(timeout=config.timeout, max_retries=config.max_retries) as client:
        index = LockIndex(RegistryDownloader(client, config.registry_url))
        results = await asyncio.gather(
            *(index.resolve(address, version, platforms) for address, version in targets),
            return_exceptions=True,
        )

    records: List[ProviderVersion] = []
    for result in results:
        if isinstance(result, BaseException):
            raise result
        records.append(result)

    logger.info("Resolved %d provider version(s)", len(records))
    return records


def _display_table(record: ProviderVersion) -> None:
    """Render one record: requested platforms first, then zh-only ones."""
    rows: List[Dict[str, Any]] = []

    for platform in record.platforms:
        rows.append(
            {
                "Platform": platform,
                "h1": record.h1_hashes[platform],
                "zh": record.zh_hashes.get(platform, "-"),
            }
        )

    for platform in sorted(set(record.zh_hashes) - set(record.platforms)):
        rows.append({"Platform": platform, "h1": "-", "zh": record.zh_hashes[platform]})

    print_table(
        rows,
        headers=["Platform", "h1", "zh"],
        title=f"{record.address} {record.version}",
        column_styles={"Platform": "bold", "h1": "digest", "zh": "digest"},
    )
