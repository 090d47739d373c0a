"""Latest command implementation for providerlock.

Prints the latest released version of a provider's source repository with
its tag prefix removed, e.g. ``v3.2.1`` → ``3.2.1``.

Typical usage::

    $ providerlock latest github hashicorp/terraform-provider-null
    3.2.1

    $ GITLAB_TOKEN=... providerlock latest gitlab my-group/terraform-provider-foo
"""

from __future__ import annotations

import os
import sys
import click
import asyncio
from typing import Optional

from providerlock.exceptions import ProviderLockError
from providerlock.context import pass_context, ProviderLockContext
from providerlock.core import GitHubRelease, GitLabRelease
from providerlock.constants import DEFAULT_GITHUB_API_URL, DEFAULT_GITLAB_API_URL
from providerlock.utils import HTTPClient, get_logger, print_error, print_plain

logger = get_logger("commands.latest")

_TOKEN_ENV = {"github": "GITHUB_TOKEN", "gitlab": "GITLAB_TOKEN"}
_BASE_URL_ENV = {"github": "GITHUB_BASE_URL", "gitlab": "GITLAB_BASE_URL"}
_DEFAULT_BASE_URL = {"github": DEFAULT_GITHUB_API_URL, "gitlab": DEFAULT_GITLAB_API_URL}


@click.command()
@click.argument("source_type", type=click.Choice(["github", "gitlab"]))
@click.argument("source", metavar="OWNER/PROJECT")
@click.option(
    "--base-url",
    help="API base URL (env: GITHUB_BASE_URL / GITLAB_BASE_URL).",
)
@click.option(
    "--include-prerelease",
    is_flag=True,
    help="Accept pre-release versions (GitLab only).",
)
@pass_context
def latest(
    ctx: ProviderLockContext,
    source_type: str,
    source: str,
    base_url: Optional[str],
    include_prerelease: bool,
) -> None:
    """Print the latest released version of a source repository.

    Access tokens are read from GITHUB_TOKEN or GITLAB_TOKEN.
    """
    owner, sep, project = source.partition("/")
    if not sep or not owner or not project:
        raise click.BadParameter(
            f"expected OWNER/PROJECT, got '{source}'",
            param_hint="OWNER/PROJECT",
        )

    base_url = (
        base_url
        or os.environ.get(_BASE_URL_ENV[source_type])
        or _DEFAULT_BASE_URL[source_type]
    )
    token = os.environ.get(_TOKEN_ENV[source_type])

    try:
        version = asyncio.run(
            _latest_async(
                ctx,
                source_type,
                owner,
                project,
                base_url=base_url,
                token=token,
                include_prerelease=include_prerelease,
            )
        )
    except ProviderLockError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in latest command")
        sys.exit(1)

    print_plain(version)


async def _latest_async(
    ctx: ProviderLockContext,
    source_type: str,
    owner: str,
    project: str,
    *,
    base_url: str,
    token: Optional[str],
    include_prerelease: bool,
) -> str:
    config = ctx.config

    async with HTTPClient(timeout=config.timeout, max_retries=config.max_retries) as client:
        if source_type == "gitlab":
            release = GitLabRelease(
                client,
                owner,
                project,
                token=token,
                base_url=base_url,
                include_prerelease=include_prerelease,
            )
            return await release.latest()

        return await GitHubRelease(
            client,
            owner,
            project,
            base_url=base_url,
            token=token,
        ).latest()
