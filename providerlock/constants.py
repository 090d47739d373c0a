"""
Centralized constants for providerlock.

This module defines immutable configuration values used across providerlock,
including registry endpoints, the recognized platform vocabulary, digest
prefixes, network settings, and logging formats. All values are intended
to be treated as read-only.
"""

from typing import Final, FrozenSet, Sequence

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "providerlock/{version}"

# ---------------------------------------------------------------------------
# Provider addresses
# ---------------------------------------------------------------------------

#: Registry host assumed when an address carries no host segment.
DEFAULT_REGISTRY_HOST: Final[str] = "registry.terraform.io"

#: Namespace marker of legacy (pre-namespace) providers, e.g. ``-/null``.
LEGACY_NAMESPACE: Final[str] = "-"

#: Namespace marker of a provider whose namespace could not be determined.
UNKNOWN_NAMESPACE: Final[str] = "?"

# ---------------------------------------------------------------------------
# Platforms
# ---------------------------------------------------------------------------

#: Operating systems providers are published for (Go ``GOOS`` values).
KNOWN_OS: Final[FrozenSet[str]] = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "illumos",
        "ios",
        "linux",
        "netbsd",
        "openbsd",
        "plan9",
        "solaris",
        "windows",
    }
)

#: Architectures providers are published for (Go ``GOARCH`` values).
KNOWN_ARCH: Final[FrozenSet[str]] = frozenset(
    {
        "386",
        "amd64",
        "arm",
        "arm64",
        "loong64",
        "mips",
        "mips64",
        "mips64le",
        "mipsle",
        "ppc64",
        "ppc64le",
        "riscv64",
        "s390x",
    }
)

#: Separator between the OS and architecture parts of a platform token.
PLATFORM_SEPARATOR: Final[str] = "_"

#: Platforms resolved when neither the CLI nor the config names any.
DEFAULT_PLATFORMS: Final[Sequence[str]] = (
    "linux_amd64",
    "darwin_amd64",
    "darwin_arm64",
)

# ---------------------------------------------------------------------------
# Digests
# ---------------------------------------------------------------------------

#: Prefix of a digest over one platform's unpacked package contents.
H1_PREFIX: Final[str] = "h1:"

#: Prefix of a digest over a packaged (zipped) release artifact.
ZH_PREFIX: Final[str] = "zh:"

# ---------------------------------------------------------------------------
# Registry and release endpoints
# ---------------------------------------------------------------------------

#: Base URL of the public provider registry.
DEFAULT_REGISTRY_URL: Final[str] = "https://registry.terraform.io"

#: Provider registry download metadata endpoint (relative to the registry URL).
PROVIDER_DOWNLOAD_PATH: Final[str] = (
    "/v1/providers/{namespace}/{type}/{version}/download/{os}/{arch}"
)

#: Base URL of the GitHub REST API.
DEFAULT_GITHUB_API_URL: Final[str] = "https://api.github.com"

#: Base URL of the GitLab REST API.
DEFAULT_GITLAB_API_URL: Final[str] = "https://gitlab.com/api/v4"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Maximum number of retries for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 3

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
