"""Tests for the vc-jj command line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from vc_jj.cli import app
from vc_jj.core.config import VCConfig
from vc_jj.core.vcs import JujutsuVCS

runner = CliRunner()

RECORD_OUTPUT = "kmx\nkmxqyzpwlvnr\n3f2\n3f2a9c0e1b7d\n\n\ntrue\nfalse\nfalse\n"


@pytest.fixture()
def cli_backend(handle, fake_jj):
    """Route every command to a JujutsuVCS built around the fake jj."""
    created: list[JujutsuVCS] = []

    def _factory(path: Path, config: VCConfig | None = None):
        backend = JujutsuVCS(handle, config)
        created.append(backend)
        return backend

    with patch("vc_jj.cli.commands._common.get_backend", side_effect=_factory):
        yield created


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("state", "status", "header", "log", "diff", "annotate", "ignore"):
        assert command in result.output


def test_state(cli_backend, fake_jj, workspace):
    target = workspace / "a.txt"
    target.write_text("x", encoding="utf-8")
    fake_jj.respond("file", "list", stdout="a.txt\n")
    fake_jj.respond("diff", stdout="M a.txt\n")

    result = runner.invoke(app, ["state", str(target)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "edited"


def test_status_json(cli_backend, fake_jj, workspace):
    fake_jj.respond("file", "list", stdout="a.txt\nb.txt\n")
    fake_jj.respond("diff", stdout="A b.txt\n")
    fake_jj.respond("resolve", returncode=2, stderr="Error: No conflicts found at this revision\n")

    result = runner.invoke(app, ["status", str(workspace), "--json", "--all"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [
        {"path": "a.txt", "status": "up-to-date"},
        {"path": "b.txt", "status": "added"},
    ]


def test_status_hides_up_to_date_by_default(cli_backend, fake_jj, workspace):
    fake_jj.respond("file", "list", stdout="a.txt\n")

    result = runner.invoke(app, ["status", str(workspace), "--json"])

    assert json.loads(result.output) == []


def test_header(cli_backend, fake_jj, workspace):
    fake_jj.respond("log", stdout=RECORD_OUTPUT)

    result = runner.invoke(app, ["header", str(workspace)])

    assert result.exit_code == 0, result.output
    assert "(no description set)" in result.output
    assert "kmxqyzpwlvnr" in result.output
    assert "(conflict)" in result.output


def test_mode_line(cli_backend, fake_jj, workspace):
    fake_jj.respond("log", stdout=RECORD_OUTPUT)

    result = runner.invoke(app, ["mode-line", str(workspace), "--tooltip"])

    assert result.output.splitlines() == ["JJ:kmx", "kmxqyzpwlvnr", "(no description set)"]


def test_color_option_reaches_backend(cli_backend, fake_jj, workspace):
    result = runner.invoke(app, ["--color", "log", str(workspace), "--short"])

    assert result.exit_code == 0, result.output
    assert cli_backend[0].config.colorize is True
    assert "--color=always" in fake_jj.argv_for("log")


def test_config_file_option(cli_backend, fake_jj, workspace, tmp_path):
    config_path = tmp_path / "vc-jj.yaml"
    config_path.write_text("log_template: builtin_log_detailed\n", encoding="utf-8")

    runner.invoke(app, ["--config", str(config_path), "log", str(workspace)])

    argv = fake_jj.argv_for("log")
    assert argv[argv.index("-T") + 1] == "builtin_log_detailed"


def test_diff_exit_code_reflects_changes(cli_backend, fake_jj, workspace):
    assert runner.invoke(app, ["diff", str(workspace)]).exit_code == 0

    fake_jj.respond("diff", stdout="diff --git a/x b/x\n")
    result = runner.invoke(app, ["diff", str(workspace)])
    assert result.exit_code == 1
    assert "diff --git a/x b/x" in result.output


def test_command_error_exits_1(cli_backend, fake_jj, workspace):
    fake_jj.respond("log", returncode=1, stderr="Error: Revision `nope` doesn't exist\n")

    result = runner.invoke(app, ["log", str(workspace), "--rev", "nope"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "doesn't exist" in result.output


def test_ignore_command(cli_backend, workspace):
    result = runner.invoke(app, ["ignore", "*.log", "--dir", str(workspace)])

    assert result.exit_code == 0, result.output
    assert (workspace / ".gitignore").read_text(encoding="utf-8") == "*.log\n"


def test_not_a_workspace(tmp_path):
    with patch("vc_jj.cli.commands._common.get_backend", return_value=None), patch(
        "vc_jj.cli.commands._common.probe_jj", return_value=object()
    ):
        result = runner.invoke(app, ["state", str(tmp_path / "a.txt")])

    assert result.exit_code == 1
    assert "not inside a jj workspace" in result.output


def test_jj_missing(tmp_path):
    with patch("vc_jj.cli.commands._common.get_backend", return_value=None), patch(
        "vc_jj.cli.commands._common.probe_jj", return_value=None
    ):
        result = runner.invoke(app, ["state", str(tmp_path / "a.txt")])

    assert result.exit_code == 1
    assert "jj is not available" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("vc-jj ")
