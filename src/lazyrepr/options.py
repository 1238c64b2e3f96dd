"""Print options and their configuration files.

Options are read-only for the duration of a print call. They can be built
directly, taken from a preset, or loaded from YAML files:

- User config file (~/.config/lazyrepr/print.yaml)
- Files listed in the LAZYREPR_PRINT_OPTIONS environment variable
- An explicit path passed to load_print_options()

Later sources override earlier ones. Example file:

    force: true
    track_repeated: true
    max_depth: 8
    max_attrs: unlimited
    ansi_colors: false

Environment Variables:
    LAZYREPR_PRINT_OPTIONS: Colon-separated (or semicolon on Windows) paths
                            to YAML option files.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError

__all__ = [
    "UNLIMITED",
    "LAZYREPR_PRINT_OPTIONS",
    "PrintOptions",
    "ERROR_PRINT_OPTIONS",
    "config_paths",
    "load_print_options",
]

logger = logging.getLogger(__name__)

UNLIMITED = sys.maxsize

# Environment variable name for option file paths
LAZYREPR_PRINT_OPTIONS = "LAZYREPR_PRINT_OPTIONS"

_BOOL_OPTIONS = ("force", "derivation_paths", "track_repeated", "ansi_colors")
_LIMIT_OPTIONS = ("max_depth", "max_attrs", "max_list_items", "max_string_length")


@dataclass(frozen=True)
class PrintOptions:
    """How to print a value."""

    force: bool = False
    """Force thunks before printing them. Evaluation errors are printed inline."""

    derivation_paths: bool = False
    """Print derivations as `«derivation /store/...»`. Only applies when forcing."""

    track_repeated: bool = False
    """Print `«repeated»` for composites already printed in this call."""

    max_depth: int = UNLIMITED
    """Composites nested this deep print as `{ ... }` / `[ ... ]`."""

    max_attrs: int = UNLIMITED
    """Total number of attributes printed across the whole output."""

    max_list_items: int = UNLIMITED
    """Total number of list items printed across the whole output."""

    max_string_length: int = UNLIMITED
    """Characters printed per string before eliding the rest."""

    ansi_colors: bool = False
    """Wrap output in terminal color codes."""

    def __post_init__(self):
        for name in _BOOL_OPTIONS:
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"option '{name}' must be a boolean")
        for name in _LIMIT_OPTIONS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"option '{name}' must be a non-negative integer")

    def replace(self, **changes: Any) -> "PrintOptions":
        """Return a copy with some options changed."""
        return dataclasses.replace(self, **changes)


# Used when values are embedded in error messages.
ERROR_PRINT_OPTIONS = PrintOptions(
    ansi_colors=True,
    max_depth=10,
    max_attrs=10,
    max_list_items=10,
    max_string_length=1024,
    track_repeated=True,
)


def config_paths() -> List[Path]:
    """Return option files to load, lowest priority first.

    Search order:
        1. User config file (~/.config/lazyrepr/print.yaml)
        2. Files from LAZYREPR_PRINT_OPTIONS, in the order listed
    """
    paths: List[Path] = []

    if sys.platform == "win32":
        config_base = Path(os.environ.get("APPDATA", "~")).expanduser()
    else:
        config_base = Path.home() / ".config"

    user_config = config_base / "lazyrepr" / "print.yaml"
    if user_config.is_file():
        paths.append(user_config)

    env_path = os.environ.get(LAZYREPR_PRINT_OPTIONS)
    if env_path:
        for p in env_path.split(os.pathsep):
            p = p.strip()
            if p:
                path = Path(p).expanduser()
                if not path.is_file():
                    raise ConfigError(f"print options file not found: {path}")
                paths.append(path)

    return paths


def _parse_limit(name: str, value: Any, path: Path) -> int:
    if value is None or value == "unlimited":
        return UNLIMITED
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{path}: '{name}' must be an integer or 'unlimited', got {value!r}")
    return value


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load and validate one options file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"invalid options format in {path}: expected a mapping at root")

    options: Dict[str, Any] = {}
    for name, value in data.items():
        if name in _BOOL_OPTIONS:
            if not isinstance(value, bool):
                raise ConfigError(f"{path}: '{name}' must be true or false, got {value!r}")
            options[name] = value
        elif name in _LIMIT_OPTIONS:
            options[name] = _parse_limit(name, value, path)
        else:
            raise ConfigError(f"{path}: unknown print option '{name}'")

    logger.debug("loaded print options from %s: %s", path, sorted(options))
    return options


def load_print_options(
    path: Optional[Path] = None,
    base: Optional[PrintOptions] = None,
    **overrides: Any,
) -> PrintOptions:
    """Build PrintOptions from configuration files.

    Args:
        path: Optional explicit YAML file, applied after the search path
        base: Options to start from (defaults to PrintOptions())
        **overrides: Options applied last

    Returns:
        The merged PrintOptions

    Raises:
        ConfigError: If a file is missing, malformed, or has bad values
    """
    merged: Dict[str, Any] = {}
    files = config_paths()
    if path is not None:
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"print options file not found: {path}")
        files.append(path)

    for config_file in files:
        merged.update(_load_yaml(config_file))
    merged.update(overrides)

    try:
        return (base or PrintOptions()).replace(**merged)
    except TypeError as e:
        raise ConfigError(str(e)) from e
