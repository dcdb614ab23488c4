from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

from vc_jj.core.vcs import JJHandle
from vc_jj.core.vcs.detection import _clear_detection_cache


def _subcommand(argv: list[str]) -> tuple[str, ...]:
    """Leading non-flag words after the program name, e.g. ("file", "list")."""
    words: list[str] = []
    for arg in argv[1:]:
        if arg.startswith("-"):
            break
        words.append(arg)
    return tuple(words)


@dataclass
class FakeJJ:
    """Stands in for subprocess.run, answering jj invocations by subcommand."""

    responses: dict[tuple[str, ...], subprocess.CompletedProcess] = field(default_factory=dict)
    calls: list[tuple[list[str], str]] = field(default_factory=list)

    def respond(self, *subcommand: str, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self.responses[subcommand] = subprocess.CompletedProcess(
            args=["jj", *subcommand], returncode=returncode, stdout=stdout, stderr=stderr
        )

    def __call__(self, argv, cwd=None, **_kwargs) -> subprocess.CompletedProcess:
        self.calls.append((list(argv), cwd))
        response = self.responses.get(_subcommand(list(argv)))
        if response is None:
            return subprocess.CompletedProcess(args=argv, returncode=0, stdout="", stderr="")
        return response

    def argv_for(self, *subcommand: str) -> list[str]:
        for argv, _cwd in self.calls:
            if _subcommand(argv) == subcommand:
                return argv
        raise AssertionError(f"jj {' '.join(subcommand)} was not run")

    def cwd_for(self, *subcommand: str) -> str:
        for argv, cwd in self.calls:
            if _subcommand(argv) == subcommand:
                return cwd
        raise AssertionError(f"jj {' '.join(subcommand)} was not run")


@pytest.fixture()
def fake_jj() -> Iterator[FakeJJ]:
    fake = FakeJJ()
    with patch("vc_jj.core.vcs.process.subprocess.run", side_effect=fake):
        yield fake


@pytest.fixture()
def handle() -> JJHandle:
    return JJHandle(program="jj", executable="/usr/bin/jj", version="0.30.0")


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """A directory that looks like a jj workspace root (no jj needed)."""
    root = tmp_path / "repo"
    (root / ".jj").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def clear_detection_cache() -> Iterator[None]:
    _clear_detection_cache()
    yield
    _clear_detection_cache()
