from __future__ import annotations

import difflib
import json
from pathlib import Path
from typing import Any

import jsonschema

from .errors import HeaderGenerationError, InputError, WriteFailureError

SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
SCHEMA_FILES = {
    "config": "config.schema.json",
    "library": "library.schema.json",
}


def load_json_object(path: Path, error_type: type[InputError] = InputError) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise error_type(f"Unable to read JSON file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise error_type(f"Invalid JSON in '{path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise error_type(f"JSON root in '{path}' must be an object")
    return payload


def get_schema_path(kind: str) -> Path:
    if kind not in SCHEMA_FILES:
        raise HeaderGenerationError(f"Unknown schema kind: {kind}")
    return SCHEMA_ROOT / SCHEMA_FILES[kind]


def validate_with_schema(kind: str, payload: Any, error_type: type[InputError] = InputError) -> None:
    schema_payload = json.loads(get_schema_path(kind).read_text(encoding="utf-8"))
    try:
        jsonschema.validate(payload, schema_payload)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise error_type(f"{kind} failed JSON schema validation at {location}: {exc.message}") from exc


def header_diff(path: Path, old: str, new: str) -> str:
    return "\n".join(
        difflib.unified_diff(
            old.splitlines(),
            new.splitlines(),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
            lineterm="",
        )
    )


def write_if_changed(path: Path, content: str, check: bool = False, dry_run: bool = False) -> int:
    """Bring ``path`` up to date with ``content``.

    In check mode a stale file is left alone, its diff is printed and 1 is
    returned. Every other outcome returns 0.
    """
    try:
        current = path.read_text(encoding="utf-8") if path.is_file() else None
    except OSError as exc:
        raise WriteFailureError(f"Unable to read existing header '{path}': {exc}") from exc

    if current == content:
        return 0
    if check:
        print(header_diff(path, current or "", content))
        return 1
    if dry_run:
        return 0

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteFailureError(f"Unable to write header '{path}': {exc}") from exc
    return 0
