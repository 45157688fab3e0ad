"""
Version information for the storefront analytics backend.

Single source of truth: pyproject.toml
Runtime access via importlib.metadata with fallback.
"""

from __future__ import annotations

import os
import sys
from datetime import UTC, datetime
from typing import Any

# Fallback version if package metadata unavailable (dev mode)
_FALLBACK_VERSION = "0.1.0"

DISTRIBUTION_NAME = "storefront-analytics-backend"


def get_version() -> str:
    """Get the package version from metadata or fallback."""
    try:
        from importlib.metadata import version

        return version(DISTRIBUTION_NAME)
    except Exception:
        return _FALLBACK_VERSION


VERSION = get_version()


def version_info() -> dict[str, Any]:
    """
    Get version and build information.

    Build metadata comes from the ``GIT_COMMIT``, ``BUILD_DATE`` and
    ``BUILD_NUMBER`` environment variables set by the image build.

    Returns:
        dict with version, python_version, git commit and build info
    """
    commit = os.environ.get("GIT_COMMIT")

    return {
        "version": VERSION,
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "git_commit": commit[:8] if commit else None,
        "build_date": os.environ.get("BUILD_DATE") or datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "build_number": os.environ.get("BUILD_NUMBER"),
        "environment": os.environ.get("ENVIRONMENT", "development"),
    }


def version_string() -> str:
    """
    Get formatted version string for display.

    Returns:
        Formatted version string like "v0.1.0 (abc1234)"
    """
    info = version_info()
    parts = [f"v{info['version']}"]
    if info.get("git_commit"):
        parts.append(f"({info['git_commit']})")
    return " ".join(parts)


__all__ = ["VERSION", "get_version", "version_info", "version_string"]
