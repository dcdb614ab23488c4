"""Backend configuration, read from a YAML file and passed explicitly."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from platformdirs import user_config_dir
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from vc_jj.core.vcs.exceptions import VCSError

APP_NAME = "vc-jj"
DEFAULT_LOG_TEMPLATE = "builtin_log_compact"
SHORT_LOG_TEMPLATE = "builtin_log_oneline"


class VCConfigError(VCSError):
    """Raised when the configuration file cannot be read."""


@dataclass(slots=True, frozen=True)
class VCConfig:
    """Options forwarded into every jj invocation that needs them."""

    program: str = "jj"
    log_template: str = DEFAULT_LOG_TEMPLATE
    colorize: bool = False
    diff_switches: tuple[str, ...] = field(default=("--git",))

    @property
    def color_flag(self) -> str:
        return "--color=always" if self.colorize else "--color=never"

    def to_dict(self) -> dict[str, object]:
        return {
            "program": self.program,
            "log_template": self.log_template,
            "colorize": self.colorize,
            "diff_switches": list(self.diff_switches),
        }

    def with_overrides(self, **changes: object) -> "VCConfig":
        """Copy with every non-None keyword applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "VCConfig":
        if not isinstance(data, dict):
            return cls()

        defaults = cls()
        program = data.get("program")
        log_template = data.get("log_template")
        colorize = data.get("colorize")
        diff_switches = data.get("diff_switches")

        if isinstance(diff_switches, str):
            switches = tuple(diff_switches.split())
        elif isinstance(diff_switches, (list, tuple)):
            switches = tuple(str(item) for item in diff_switches)
        else:
            switches = defaults.diff_switches

        return cls(
            program=program.strip() if isinstance(program, str) and program.strip() else defaults.program,
            log_template=(
                log_template.strip()
                if isinstance(log_template, str) and log_template.strip()
                else defaults.log_template
            ),
            colorize=colorize if isinstance(colorize, bool) else defaults.colorize,
            diff_switches=switches,
        )


def default_config_path() -> Path:
    return Path(user_config_dir(APP_NAME)) / "config.yaml"


def load_vc_config(path: Path | None = None) -> VCConfig:
    """Load configuration from ``path`` or the per-user default location."""
    config_path = path or default_config_path()
    if not config_path.exists():
        return VCConfig()

    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise VCConfigError(f"Failed to parse {config_path}: {exc}") from exc

    return VCConfig.from_dict(payload if isinstance(payload, dict) else None)
