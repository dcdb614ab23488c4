"""
VCS Detection Module
====================

This module probes for a working jj executable and provides the
get_backend() factory. A missing executable or a path outside any jj
workspace makes the backend inapplicable (``None``) rather than an error.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vc_jj.core.config import VCConfig

    from .jujutsu import JujutsuVCS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JJHandle:
    """Proof that a jj executable was found and answered ``--version``."""

    program: str
    executable: str
    version: str | None = None


# =============================================================================
# Tool Detection Functions
# =============================================================================


@lru_cache(maxsize=8)
def is_jj_available(program: str = "jj") -> bool:
    """
    Check if jj is installed and working.

    Returns:
        True if jj is installed and responds to --version, False otherwise.
    """
    if shutil.which(program) is None:
        return False
    try:
        result = subprocess.run(
            [program, "--version"],
            capture_output=True,
            timeout=5,
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, OSError):
        return False


@lru_cache(maxsize=8)
def get_jj_version(program: str = "jj") -> str | None:
    """
    Get installed jj version, or None if not installed.

    Returns:
        Version string (e.g., "0.23.0") or None if jj is not available.
    """
    if not is_jj_available(program):
        return None
    try:
        result = subprocess.run(
            [program, "--version"],
            capture_output=True,
            timeout=5,
            text=True,
        )
        if result.returncode != 0:
            return None
        # jj version format: "jj 0.23.0" or "jj 0.23.0-<hash>"
        output = result.stdout.strip()
        match = re.search(r"jj\s+(\d+\.\d+\.\d+)", output)
        if match:
            return match.group(1)
        if output.startswith("jj "):
            return output[3:].strip()
        return "unknown"
    except (subprocess.TimeoutExpired, OSError):
        return None


def probe_jj(program: str = "jj") -> JJHandle | None:
    """Return a handle for ``program`` when it is a usable jj, else None."""
    if not is_jj_available(program):
        logger.debug("jj executable %r not available", program)
        return None
    executable = shutil.which(program) or program
    return JJHandle(program=program, executable=executable, version=get_jj_version(program))


def find_repo_root(path: Path) -> Path | None:
    """
    Walk up from ``path`` to the nearest directory holding a ``.jj`` dir.

    Args:
        path: A file or directory, which need not exist yet.

    Returns:
        The workspace root, or None when ``path`` is not inside one.
    """
    current = path.expanduser().resolve()
    for parent in [current, *current.parents]:
        if (parent / ".jj").is_dir():
            return parent
    return None


# =============================================================================
# Factory Function
# =============================================================================


def get_backend(path: Path, config: "VCConfig | None" = None) -> "JujutsuVCS | None":
    """
    Factory function returning a jj backend responsible for ``path``.

    Args:
        path: A file or directory the host wants to query.
        config: Explicit configuration; defaults to ``VCConfig()``.

    Returns:
        JujutsuVCS, or None when jj is unavailable or ``path`` is not in a
        jj workspace.
    """
    from vc_jj.core.config import VCConfig

    config = config or VCConfig()
    handle = probe_jj(config.program)
    if handle is None:
        return None
    if find_repo_root(path) is None:
        logger.debug("%s is not inside a jj workspace", path)
        return None

    # Lazy import to avoid circular imports
    from .jujutsu import JujutsuVCS

    return JujutsuVCS(handle, config)


# =============================================================================
# Cache Management (for testing)
# =============================================================================


def _clear_detection_cache() -> None:
    """
    Clear the detection cache. For testing purposes only.

    This clears the cached results of is_jj_available and get_jj_version.
    """
    is_jj_available.cache_clear()
    get_jj_version.cache_clear()
