"""Latest-release lookup for provider source repositories.

Provider releases are tagged in their source repositories, usually with a
leading ``v`` (``v3.2.1``). The resolvers here ask a hosting service for
the latest release and return its version with that tag prefix removed,
ready to be handed to :class:`~providerlock.core.index.LockIndex`.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional
from urllib.parse import quote

from packaging.version import InvalidVersion, Version

from providerlock.utils.http import HTTPClient
from providerlock.utils.logger import get_logger
from providerlock.exceptions import ConfigError, RegistryError, ReleaseNotFoundError
from providerlock.constants import DEFAULT_GITHUB_API_URL, DEFAULT_GITLAB_API_URL

logger = get_logger("release")

__all__ = ["GitHubRelease", "GitLabRelease", "strip_version_prefix"]

_TAG_PREFIX = re.compile(r"^[^0-9]+")


def strip_version_prefix(tag: str) -> str:
    """Remove the non-numeric prefix of a release tag.

    Examples:
        >>> strip_version_prefix("v3.2.1")
        '3.2.1'
        >>> strip_version_prefix("3.2.1")
        '3.2.1'
    """
    return _TAG_PREFIX.sub("", tag)


class GitHubRelease:
    """Latest published release of a GitHub repository.

    Drafts and pre-releases are excluded by GitHub's ``releases/latest``
    endpoint itself.

    Args:
        http_client: Shared :class:`HTTPClient`.
        owner: Repository owner.
        repo: Repository name.
        base_url: GitHub API base URL (GitHub Enterprise uses its own).
        token: Optional access token, raises the API rate limit.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        owner: str,
        repo: str,
        *,
        base_url: str = DEFAULT_GITHUB_API_URL,
        token: Optional[str] = None,
    ) -> None:
        self.http_client = http_client
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.token = token

    @property
    def source(self) -> str:
        return f"{self.owner}/{self.repo}"

    async def latest(self) -> str:
        """Return the latest release version without its tag prefix.

        Raises:
            ReleaseNotFoundError: The repository has no published release.
            NetworkError: The API request failed.
        """
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        url = f"{self.base_url}/repos/{self.owner}/{self.repo}/releases/latest"
        try:
            release = await self.http_client.get_json_object(url, headers=headers)
        except RegistryError as exc:
            if exc.status_code == 404:
                raise ReleaseNotFoundError(
                    "No releases found",
                    source=self.source,
                ) from exc
            raise

        tag = release.get("tag_name")
        if not tag:
            raise ReleaseNotFoundError("No releases found", source=self.source)

        version = strip_version_prefix(tag)
        logger.debug("Latest release of %s: %s (%s)", self.source, version, tag)
        return version


class GitLabRelease:
    """Latest published release of a GitLab project.

    GitLab lists releases newest first. The first entry that is neither an
    upcoming release nor (unless *include_prerelease*) a pre-release wins.

    Args:
        http_client: Shared :class:`HTTPClient`.
        owner: Group or user that owns the project.
        project: Project name.
        token: Personal access token; the GitLab API requires one.
        base_url: GitLab API base URL.
        include_prerelease: Accept pre-release versions as latest.

    Raises:
        ConfigError: *token* is empty.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        owner: str,
        project: str,
        *,
        token: Optional[str],
        base_url: str = DEFAULT_GITLAB_API_URL,
        include_prerelease: bool = False,
    ) -> None:
        if not token:
            raise ConfigError(
                "Failed to get personal access token (env: GITLAB_TOKEN)",
                option="token",
            )

        self.http_client = http_client
        self.owner = owner
        self.project = project
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.include_prerelease = include_prerelease

    @property
    def source(self) -> str:
        return f"{self.owner}/{self.project}"

    async def latest(self) -> str:
        """Return the latest release version without its tag prefix.

        Raises:
            ReleaseNotFoundError: No acceptable release exists.
            NetworkError: The API request failed.
        """
        project_id = quote(self.source, safe="")
        url = f"{self.base_url}/projects/{project_id}/releases"
        releases = await self.http_client.get_json(
            url,
            headers={"PRIVATE-TOKEN": self.token},
        )

        if not isinstance(releases, list):
            raise ReleaseNotFoundError("No releases found", source=self.source)

        for release in releases:
            version = self._accept(release)
            if version is not None:
                logger.debug("Latest release of %s: %s", self.source, version)
                return version

        raise ReleaseNotFoundError("No releases found", source=self.source)

    def _accept(self, release: Dict[str, Any]) -> Optional[str]:
        """Return the release's version if it qualifies as latest."""
        if release.get("upcoming_release"):
            return None

        tag = release.get("tag_name")
        if not tag:
            return None

        version = strip_version_prefix(tag)
        if self.include_prerelease:
            return version

        try:
            parsed = Version(version)
        except InvalidVersion:
            logger.debug("Skipping release with unparseable tag %s", tag)
            return None

        return None if parsed.is_prerelease else version
