"""Configuration loading for the LFS warning check."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from lfs_warning.analysis.patterns import PatternSet
from lfs_warning.analysis.size_limit import DEFAULT_FILE_SIZE_LIMIT

DEFAULT_CONFIG_PATH = ".lfs-warning.yaml"

# Action input / camelCase names mapped to Config fields
_ALIASES = {
    "filesizelimit": "file_size_limit",
    "exclusionPatterns": "exclusion_patterns",
    "inclusionPatterns": "inclusion_patterns",
    "binaryPatterns": "binary_patterns",
    "labelName": "label_name",
    "labelColor": "label_color",
    "labelDescription": "label_description",
    "binaryProbe": "binary_probe",
}

_LIST_FIELDS = {"exclusion_patterns", "inclusion_patterns", "binary_patterns"}


@dataclass
class Config:
    """Main configuration object."""

    file_size_limit: str = DEFAULT_FILE_SIZE_LIMIT
    exclusion_patterns: list[str] = field(default_factory=list)
    inclusion_patterns: list[str] = field(default_factory=list)
    binary_patterns: list[str] = field(default_factory=list)
    label_name: str = "lfs-detected!"
    label_color: str = "ff1493"
    label_description: str = (
        "Warning Label for use when LFS is detected in the commits of a Pull Request"
    )
    binary_probe: str = "grep"

    @property
    def patterns(self) -> PatternSet:
        return PatternSet(
            exclusion=list(self.exclusion_patterns),
            inclusion=list(self.inclusion_patterns),
            binary_extension=list(self.binary_patterns),
        )


def _split_lines(value: str) -> list[str]:
    """Multi-line input to list, dropping blank lines."""
    return [line.strip() for line in value.splitlines() if line.strip()]


def _coerce(name: str, value: object) -> object:
    if name in _LIST_FIELDS:
        if value is None:
            return []
        if isinstance(value, str):
            return _split_lines(value)
        return [str(v) for v in value]
    return str(value)


def _update(config: Config, data: Mapping[str, object]) -> None:
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name in Config.__dataclass_fields__:
            setattr(config, name, _coerce(name, value))


def load_config(path: Path) -> Config:
    """Load configuration from YAML file, with defaults for missing values."""
    config = Config()

    if not path.exists():
        return config

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")

    _update(config, data)
    return config


def apply_action_inputs(config: Config, environ: Mapping[str, str]) -> Config:
    """Overlay GitHub Action inputs (``INPUT_<NAME>`` variables).

    Empty inputs leave the current value untouched.
    """
    inputs = {}
    for key in _ALIASES:
        raw = environ.get(f"INPUT_{key.upper()}", "")
        if raw.strip():
            inputs[key] = raw.strip() if _ALIASES[key] not in _LIST_FIELDS else raw
    _update(config, inputs)
    return config
