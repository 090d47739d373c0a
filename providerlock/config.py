"""Configuration file loader for providerlock.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``providerlock.toml``: settings under ``[providerlock]`` table
- ``pyproject.toml``: settings under ``[tool.providerlock]`` table

Discovery order:

1. Explicit path from ``--config`` or ``PROVIDERLOCK_CONFIG``
2. ``providerlock.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.providerlock]`` section

Example (``providerlock.toml``)::

    [providerlock]
    platforms = ["linux_amd64", "darwin_arm64", "windows_amd64"]
    registry_url = "https://registry.terraform.io"
    timeout = 60
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from providerlock.exceptions import ConfigError, InvalidPlatformError
from providerlock.models.platform import parse_platform
from providerlock.utils.logger import get_logger
from providerlock.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_PLATFORMS,
    DEFAULT_REGISTRY_URL,
    DEFAULT_TIMEOUT,
)

logger = get_logger("config")


@dataclass
class ProviderLockConfig:
    """Parsed and validated providerlock configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        platforms: Platform tokens resolved when the CLI names none.
        registry_url: Base URL of the provider registry.
        timeout: HTTP timeout in seconds.
        max_retries: HTTP retry attempts for transient failures.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    platforms: List[str] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: int = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "platforms": list(self.platforms),
            "registry_url": self.registry_url,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    own_toml = cwd / "providerlock.toml"
    if own_toml.is_file():
        logger.debug("Found providerlock.toml: %s", own_toml)
        return own_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.providerlock] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Return True if *path* has a ``[tool.providerlock]`` table.

    An unreadable pyproject.toml just means "not ours"; discovery moves on.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "providerlock" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> ProviderLockConfig:
    """Load and validate providerlock configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`ProviderLockConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        return ProviderLockConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("providerlock", {})
    else:
        section = raw.get("providerlock", {})

    if not section:
        logger.debug("Config file found but no providerlock section, using defaults")
        return ProviderLockConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


_KNOWN_KEYS = frozenset({"platforms", "registry_url", "timeout", "max_retries"})


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> ProviderLockConfig:
    """Parse and validate a ``[providerlock]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types, or unrecognized platforms.
    """
    config = ProviderLockConfig()

    unknown = set(section.keys()) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    if "platforms" in section:
        val = section["platforms"]
        if not isinstance(val, list) or not all(isinstance(p, str) for p in val):
            raise ConfigError(
                "platforms must be a list of strings",
                config_path=config_path,
                option="platforms",
            )
        for platform in val:
            try:
                parse_platform(platform)
            except InvalidPlatformError as exc:
                raise ConfigError(
                    f"Invalid platform '{platform}': {exc.message}",
                    config_path=config_path,
                    option="platforms",
                ) from exc
        if len(set(val)) != len(val):
            raise ConfigError(
                "platforms must not contain duplicates",
                config_path=config_path,
                option="platforms",
            )
        config.platforms = list(val)

    if "registry_url" in section:
        val = section["registry_url"]
        if not isinstance(val, str) or not val.startswith(("http://", "https://")):
            raise ConfigError(
                "registry_url must be an http(s) URL",
                config_path=config_path,
                option="registry_url",
            )
        config.registry_url = val

    if "timeout" in section:
        val = section["timeout"]
        # bool is an int subclass; reject it explicitly
        if isinstance(val, bool) or not isinstance(val, int) or val <= 0:
            raise ConfigError(
                f"timeout must be a positive integer, got {val!r}",
                config_path=config_path,
                option="timeout",
            )
        config.timeout = val

    if "max_retries" in section:
        val = section["max_retries"]
        if isinstance(val, bool) or not isinstance(val, int) or val < 0:
            raise ConfigError(
                f"max_retries must be a non-negative integer, got {val!r}",
                config_path=config_path,
                option="max_retries",
            )
        config.max_retries = val

    return config
