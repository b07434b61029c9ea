from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .common import load_json_object, validate_with_schema
from .errors import ConfigError

DEFAULT_FILE_HEADER_COMMENT = "/* Automatically generated by abi_c_backend. Do not edit manually. */"
DEFAULT_IFNDEF = "ABI_GENERATED_H"

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class HeaderConfig:
    file_header_comment: str = DEFAULT_FILE_HEADER_COMMENT
    ifndef: str = DEFAULT_IFNDEF
    custom_defines: str = ""
    function_attribute: str = ""
    function_prefix: str = ""
    imports: bool = True
    directives: bool = True
    documentation: bool = True
    indent: str = "  "

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


_STRING_KEYS = ["file_header_comment", "ifndef", "custom_defines", "function_attribute", "function_prefix", "indent"]
_BOOL_KEYS = ["imports", "directives", "documentation"]


def is_c_identifier(value: str) -> bool:
    return bool(_IDENTIFIER.fullmatch(value))


def resolve_header_config(payload: Any, label: str = "config") -> HeaderConfig:
    if payload is None:
        return HeaderConfig()
    if not isinstance(payload, dict):
        raise ConfigError(f"{label} must be an object")

    unknown = sorted(key for key in payload if key not in _STRING_KEYS and key not in _BOOL_KEYS)
    if unknown:
        raise ConfigError(f"{label} has unknown keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key in _STRING_KEYS:
        value = payload.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"{label}.{key} must be string when specified")
        values[key] = value
    for key in _BOOL_KEYS:
        value = payload.get(key)
        if value is None:
            continue
        if not isinstance(value, bool):
            raise ConfigError(f"{label}.{key} must be boolean when specified")
        values[key] = value

    config = HeaderConfig(**values)
    validate_header_config(config, label)
    return config


def validate_header_config(config: HeaderConfig, label: str = "config") -> None:
    if config.directives and not is_c_identifier(config.ifndef):
        raise ConfigError(f"{label}.ifndef must be a non-empty identifier, got '{config.ifndef}'")
    if config.function_prefix and not is_c_identifier(config.function_prefix):
        raise ConfigError(f"{label}.function_prefix must be an identifier prefix, got '{config.function_prefix}'")
    if config.indent.strip():
        raise ConfigError(f"{label}.indent must contain only whitespace")


def load_header_config(path: Path) -> HeaderConfig:
    payload = load_json_object(path, ConfigError)
    validate_with_schema("config", payload, ConfigError)
    return resolve_header_config(payload, label=f"config '{path.name}'")
