"""
Configuration file loader for prompt-consolidator.

Supports loading configuration from:
- consolidate.toml / .consolidate.toml
- consolidate.yml / .consolidate.yml / consolidate.yaml / .consolidate.yaml

CLI flags override config file values.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config import ConsolidatorConfig
from .errors import ConfigError

# Config file search order (first found wins)
CONFIG_FILE_NAMES = [
    "consolidate.toml",
    ".consolidate.toml",
    "consolidate.yml",
    ".consolidate.yml",
    "consolidate.yaml",
    ".consolidate.yaml",
]

# Section name accepted in place of flat top-level keys
CONFIG_SECTION = "consolidate"


@dataclass
class ProjectConfig:
    """
    Project-level configuration loaded from config files.

    All fields are optional - CLI flags will override any values set here.
    """

    prompts_dir: Path | None = None
    instructions_path: Path | None = None
    output_path: Path | None = None
    priority_order: list[str] | None = None
    atomic_write: bool | None = None

    # Source file path (for debugging)
    _config_file: Path | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert set values to a JSON-serializable dictionary with sorted keys."""
        result: dict[str, Any] = {}

        if self.prompts_dir is not None:
            result["prompts_dir"] = str(self.prompts_dir)
        if self.instructions_path is not None:
            result["instructions"] = str(self.instructions_path)
        if self.output_path is not None:
            result["output"] = str(self.output_path)
        if self.priority_order is not None:
            result["priority_order"] = list(self.priority_order)
        if self.atomic_write is not None:
            result["atomic_write"] = self.atomic_write
        if self._config_file is not None:
            result["_loaded_from"] = str(self._config_file)

        return dict(sorted(result.items()))


def find_config_file(root: Path) -> Path | None:
    """
    Find a configuration file in the project root.

    Args:
        root: Project root directory

    Returns:
        Path to the config file, or None if not found
    """
    for name in CONFIG_FILE_NAMES:
        config_path = root / name
        if config_path.is_file():
            return config_path
    return None


def _unwrap_section(data: dict[str, Any]) -> dict[str, Any]:
    """Support both flat keys and a nested `[consolidate]` section."""
    if CONFIG_SECTION in data and isinstance(data[CONFIG_SECTION], dict):
        return dict(data[CONFIG_SECTION])
    return data


def _parse_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML config file into a dict."""
    with open(path, "rb") as f:
        data: dict[str, Any] = tomllib.load(f)
    return _unwrap_section(data)


def _parse_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML config file into a dict; an empty document yields `{}`.

    Raises:
        ConfigError: If the document is a list or a scalar instead of a mapping.
    """
    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f)

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigError(path, f"expected a mapping, got {type(raw_data).__name__}")
    return _unwrap_section(dict(raw_data))


def _normalize_priority(value: Any) -> list[str] | None:
    """Normalize priority input (comma-separated string or list) to file names.

    Names without a suffix get `.md` appended.
    """
    if value is None:
        return None

    if isinstance(value, str):
        value = value.split(",")

    if not isinstance(value, (list, tuple)):
        raise TypeError(f"priority_order must be a list of file names, got {type(value).__name__}")

    result = []
    for name in value:
        name = str(name).strip()
        if name:
            if not name.endswith(".md"):
                name = f"{name}.md"
            result.append(name)
    return result


def _resolve(root: Path, value: Any) -> Path:
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else root / path


def load_config(root: Path, config_path: Path | None = None) -> ProjectConfig:
    """
    Load configuration from a config file.

    Args:
        root: Project root; relative paths in the file resolve against it
        config_path: Explicit path to config file (optional)

    Returns:
        ProjectConfig with loaded values (unset values remain None).

    Raises:
        ConfigError: If the file cannot be parsed or holds values of the wrong type.
    """
    if config_path is None:
        config_path = find_config_file(root)

    if config_path is None:
        return ProjectConfig()

    if not config_path.exists():
        raise ConfigError(config_path, "file does not exist")

    # Parse based on extension
    suffix = config_path.suffix.lower()
    try:
        if suffix == ".toml":
            data = _parse_toml(config_path)
        elif suffix in (".yml", ".yaml"):
            data = _parse_yaml(config_path)
        else:
            raise ConfigError(config_path, f"unsupported config format '{suffix}'")
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(config_path, e) from e

    config = ProjectConfig(_config_file=config_path)

    try:
        if "prompts_dir" in data:
            config.prompts_dir = _resolve(root, data["prompts_dir"])

        instructions = data.get("instructions") or data.get("instructions_file")
        if instructions:
            config.instructions_path = _resolve(root, instructions)

        output = data.get("output") or data.get("output_file")
        if output:
            config.output_path = _resolve(root, output)

        priority = data.get("priority_order", data.get("priority"))
        config.priority_order = _normalize_priority(priority)

        if "atomic_write" in data:
            if not isinstance(data["atomic_write"], bool):
                raise TypeError(
                    f"atomic_write must be true or false, got {type(data['atomic_write']).__name__}"
                )
            config.atomic_write = data["atomic_write"]
    except TypeError as e:
        raise ConfigError(config_path, e) from e

    return config


def merge_cli_with_config(
    config: ProjectConfig,
    root: Path,
    *,
    # CLI arguments (None means not specified on CLI)
    prompts_dir: Path | None = None,
    instructions: Path | None = None,
    output: Path | None = None,
    priority: list[str] | None = None,
    no_atomic: bool = False,
) -> ConsolidatorConfig:
    """Merge CLI arguments with config file values (CLI wins).

    Args:
        config: Config loaded from file (may have unset values).
        root: Project root providing the default layout.
        prompts_dir: CLI override for the prompt directory (optional).
        instructions: CLI override for the instructions file (optional).
        output: CLI override for the output file (optional).
        priority: CLI priority names; an explicit list replaces the configured one.
        no_atomic: CLI flag to write the output in place.

    Returns:
        The `ConsolidatorConfig` used by the run.
    """
    defaults = ConsolidatorConfig.from_root(root)
    overrides: dict[str, Any] = {}

    # Prompt directory
    if prompts_dir is not None:
        overrides["prompts_dir"] = prompts_dir
    elif config.prompts_dir is not None:
        overrides["prompts_dir"] = config.prompts_dir

    # Instructions file
    if instructions is not None:
        overrides["instructions_path"] = instructions
    elif config.instructions_path is not None:
        overrides["instructions_path"] = config.instructions_path

    # Output file
    if output is not None:
        overrides["output_path"] = output
    elif config.output_path is not None:
        overrides["output_path"] = config.output_path

    # Priority order
    if priority:
        overrides["priority_order"] = tuple(_normalize_priority(priority) or ())
    elif config.priority_order is not None:
        overrides["priority_order"] = tuple(config.priority_order)
    else:
        overrides["priority_order"] = defaults.priority_order

    # Atomic write (CLI --no-atomic sets False)
    if no_atomic:
        overrides["atomic_write"] = False
    elif config.atomic_write is not None:
        overrides["atomic_write"] = config.atomic_write

    return ConsolidatorConfig.from_root(root, **overrides)
