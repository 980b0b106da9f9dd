"""Configuration for TactSpectre runs.
Settings come from a TOML file: a standalone ``tactspectre.toml`` (keys at
top level or under ``[tool.tactspectre]``) or the ``[tool.tactspectre]``
table of a ``pyproject.toml``. The file is found by walking up from the
working directory, then falling back to the home directory.
"""
from __future__ import annotations
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any
from tactspectre.execution.executor import ExecutionConfig
from tactspectre.logging import get_logger
CONFIG_FILES = [
    "tactspectre.toml",
    ".tactspectre.toml",
    "pyproject.toml",
]
HOME_CONFIG_FILES = [".tactspectre.toml", "tactspectre.toml"]
OUTPUT_FORMATS = ("text", "json", "markdown")
@dataclass
class LimitsConfig:
    """Exploration budget. Unset (None) limits are unbounded."""
    max_depth: int | None = None
    max_paths: int | None = None
    timeout_seconds: float | None = None
@dataclass
class SolverConfig:
    backend: str = "z3"
    timeout_ms: int = 10000
    caching: bool = True
@dataclass
class ExecutionSection:
    """How fall-through paths and per-path failures are handled."""
    report_fall_through: bool = False
    fail_fast: bool = False
@dataclass
class OutputConfig:
    format: str = "text"
    color: bool = True
    verbose: bool = False
    show_expressions: bool = True
@dataclass
class TactSpectreConfig:
    """All settings of one run, grouped by TOML table."""
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    execution: ExecutionSection = field(default_factory=ExecutionSection)
    output: OutputConfig = field(default_factory=OutputConfig)
    project_root: Path | None = None
    config_file: Path | None = None
    def sections(self) -> dict[str, Any]:
        return {
            "limits": self.limits,
            "solver": self.solver,
            "execution": self.execution,
            "output": self.output,
        }
    def to_dict(self) -> dict[str, Any]:
        """Settings as nested plain dicts, without the file location."""
        return {name: asdict(section) for name, section in self.sections().items()}
    def to_execution_config(self) -> ExecutionConfig:
        return ExecutionConfig(
            max_paths=self.limits.max_paths,
            max_depth=self.limits.max_depth,
            timeout_seconds=self.limits.timeout_seconds,
            report_fall_through=self.execution.report_fall_through,
            fail_fast=self.execution.fail_fast,
            solver_backend=self.solver.backend,
            solver_timeout_ms=self.solver.timeout_ms,
            enable_caching=self.solver.caching,
        )
    def to_toml(self) -> str:
        """Render as a ``[tool.tactspectre]`` document.
        TOML cannot spell None, so unbounded limits are emitted commented out.
        """
        lines = ["[tool.tactspectre]"]
        for name, values in self.to_dict().items():
            lines.extend(["", f"[tool.tactspectre.{name}]"])
            lines.extend(_toml_line(key, value) for key, value in values.items())
        return "\n".join(lines) + "\n"
def _toml_line(key: str, value: Any) -> str:
    if value is None:
        return f"# {key} = "
    if isinstance(value, bool):
        return f"{key} = {'true' if value else 'false'}"
    if isinstance(value, str):
        return f'{key} = "{value}"'
    return f"{key} = {value}"
def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest config file at or above `start_dir`, else one in the home directory."""
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for name in CONFIG_FILES:
            candidate = directory / name
            if candidate.exists():
                return candidate
    home = Path.home()
    for name in HOME_CONFIG_FILES:
        candidate = home / name
        if candidate.exists():
            return candidate
    return None
def load_config(
    config_path: Path | None = None,
    start_dir: Path | None = None,
) -> TactSpectreConfig:
    """Load settings from `config_path`, or from the discovered file.
    A missing or unreadable file yields the defaults; the latter is
    reported as a warning.
    """
    config = TactSpectreConfig()
    if config_path is None:
        config_path = find_config_file(start_dir)
    if config_path is None or not config_path.exists():
        return config
    config.config_file = config_path
    config.project_root = config_path.parent
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        get_logger().warning(f"Failed to parse config file {config_path}: {e}", category="config")
        return config
    tool_table = data.get("tool", {}).get("tactspectre")
    if config_path.name == "pyproject.toml":
        data = tool_table or {}
    elif tool_table is not None:
        data = tool_table
    _apply_config(config, data)
    return config
def _apply_config(config: TactSpectreConfig, data: dict[str, Any]) -> None:
    for name, section in config.sections().items():
        table = data.get(name)
        if not isinstance(table, dict):
            continue
        for f in fields(section):
            if f.name in table:
                setattr(section, f.name, table[f.name])
    if config.output.format not in OUTPUT_FORMATS:
        get_logger().warning(
            f"Unknown output format '{config.output.format}', using text",
            category="config",
        )
        config.output.format = "text"
def generate_default_config() -> str:
    return TactSpectreConfig().to_toml()
def init_config(directory: Path | None = None) -> Path:
    """Write the default ``tactspectre.toml`` into `directory` (default: cwd).
    Raises FileExistsError rather than overwrite an existing file.
    """
    config_path = (directory or Path.cwd()) / "tactspectre.toml"
    if config_path.exists():
        raise FileExistsError(f"Config file already exists: {config_path}")
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path
__all__ = [
    "TactSpectreConfig",
    "LimitsConfig",
    "SolverConfig",
    "ExecutionSection",
    "OutputConfig",
    "load_config",
    "find_config_file",
    "generate_default_config",
    "init_config",
]
