"""
Generator configuration.

Every knob of the generator lives in one dataclass so a build can pin
its settings in a YAML file next to the schema.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional

import yaml

from fieldlist.errors import ConfigError
from fieldlist.parser import DEFAULT_MAX_FIELDS


@dataclass
class GeneratorConfig:
    """
    Settings shared by the compiler and every backend.

    Properties:
        max_fields: Ceiling on entries per field list (None = unbounded)
        archive_name: Name of the archive parameter in the generated routine
        nvp_helper: C++ expression that builds a named value
        const_method: Emit the C++ serialize method as ``const``
        indent: One level of indentation in generated code
        reject_duplicates: Fail on repeated field names instead of
            leaving them to the host compiler
        runtime_module: Module generated Python code imports make_nvp from
        dialect: Default backend ("cpp" or "python")
    """

    max_fields: Optional[int] = DEFAULT_MAX_FIELDS
    archive_name: str = "ar"
    nvp_helper: str = "::cereal::make_nvp"
    const_method: bool = False
    indent: str = "  "
    reject_duplicates: bool = False
    runtime_module: str = "fieldlist.runtime"
    dialect: str = "cpp"


_BOOL_KEYS = ("const_method", "reject_duplicates")
_STR_KEYS = ("archive_name", "nvp_helper", "indent", "runtime_module", "dialect")


def config_to_dict(config: GeneratorConfig) -> Dict[str, Any]:
    return asdict(config)


def config_from_dict(d: Dict[str, Any] | None) -> GeneratorConfig:
    if d is None:
        return GeneratorConfig()
    if not isinstance(d, dict):
        raise ConfigError(f"configuration must be a mapping, got {type(d).__name__}")
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
    max_fields = d.get("max_fields", DEFAULT_MAX_FIELDS)
    # bool is an int subclass; true is not a ceiling of 1
    if max_fields is not None and (
        isinstance(max_fields, bool) or not isinstance(max_fields, int) or max_fields < 0
    ):
        raise ConfigError(f"max_fields must be a non-negative integer or null, got {max_fields!r}")
    for key in _BOOL_KEYS:
        if key in d and not isinstance(d[key], bool):
            raise ConfigError(f"{key} must be true or false, got {d[key]!r}")
    for key in _STR_KEYS:
        if key in d and not isinstance(d[key], str):
            raise ConfigError(f"{key} must be a string, got {d[key]!r}")
    return GeneratorConfig(**d)


def load_config(path: str) -> GeneratorConfig:
    """
    Load a GeneratorConfig from a YAML file.

    Raises:
        ConfigError: If the file is missing, not YAML, or has unknown keys
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}")
    return config_from_dict(data)
