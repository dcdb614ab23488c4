"""
VCS Backend Package
===================

This package adapts the Jujutsu (jj) command line tool to a generic editor
version-control callback contract.

Usage:
    from vc_jj.core.vcs import get_backend, FileStatus

    backend = get_backend(path)  # None when jj is unavailable or path is not in a workspace
    if backend is not None:
        status = backend.state(path)
"""

from __future__ import annotations

# Enums
from .types import FileStatus

# Dataclasses
from .types import (
    AnnotationLine,
    ChangeRecord,
    DiffSummary,
    DirEntry,
    ModeLineString,
    OutputSink,
)

# Protocol
from .protocol import VCBackendProtocol

# Exceptions
from .exceptions import (
    VCSCommandError,
    VCSError,
    VCSNotFoundError,
)

# Detection and factory
from .detection import (
    JJHandle,
    find_repo_root,
    get_backend,
    get_jj_version,
    is_jj_available,
    probe_jj,
)

# Buffers
from .buffer import ConsoleSink, OutputBuffer

# Backend
from .jujutsu import JujutsuVCS

__all__ = [
    # Enums
    "FileStatus",
    # Dataclasses
    "AnnotationLine",
    "ChangeRecord",
    "DiffSummary",
    "DirEntry",
    "ModeLineString",
    "OutputSink",
    # Protocol
    "VCBackendProtocol",
    # Exceptions
    "VCSError",
    "VCSNotFoundError",
    "VCSCommandError",
    # Detection
    "JJHandle",
    "find_repo_root",
    "get_backend",
    "get_jj_version",
    "is_jj_available",
    "probe_jj",
    # Buffers
    "ConsoleSink",
    "OutputBuffer",
    # Backend
    "JujutsuVCS",
]
