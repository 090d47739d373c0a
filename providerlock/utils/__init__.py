"""
Utility helpers for providerlock.

This package provides reusable utilities used across providerlock, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Async HTTP client utilities
- Package digest helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from providerlock.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from providerlock.utils.console import (
    get_raw_console,
    print_error,
    print_json,
    print_plain,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# HTTP utilities
# ---------------------------------------------------------------------------

from providerlock.utils.http import HTTPClient

# ---------------------------------------------------------------------------
# Digest utilities
# ---------------------------------------------------------------------------

from providerlock.utils.hashing import hash_zip_v1, parse_shasums, zh_digest

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_json",
    "print_plain",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # HTTP
    "HTTPClient",
    # Digests
    "hash_zip_v1",
    "parse_shasums",
    "zh_digest",
]
