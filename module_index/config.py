"""Loading AnalysisPolicy from YAML configuration files."""

import os
from dataclasses import fields
from pathlib import Path

import yaml

from module_index.exceptions import ConfigError
from module_index.models import AnalysisPolicy

CONFIG_ENV_VAR = "MODULE_INDEX_CONFIG"


def load_policy(path: Path | str | None = None) -> AnalysisPolicy:
    """Load an AnalysisPolicy from a YAML file.

    Args:
        path: Path to a YAML mapping of policy fields. If None, the file
              named by $MODULE_INDEX_CONFIG is used, and the default policy
              is returned when that variable is unset.

    Returns:
        The loaded AnalysisPolicy

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, is not a
                     mapping, or names unknown policy fields

    Example:
        >>> policy = load_policy(Path("module-index.yaml"))
        >>> policy.max_line_length
        4096
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return AnalysisPolicy()

    config_path = Path(path).expanduser()

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file must contain a YAML mapping, got {type(data).__name__}"
        )

    known = {f.name for f in fields(AnalysisPolicy)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    return AnalysisPolicy.from_dict(data)
