from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .common import write_if_changed
from .config import HeaderConfig, load_header_config, validate_header_config
from .document import render_header
from .errors import HeaderGenerationError
from .idl import load_library


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abi-c-backend",
        description="Render a C99 header from a JSON ABI library description.",
    )
    parser.add_argument("--idl", required=True, help="Path to the library IDL JSON.")
    parser.add_argument("--out", required=True, help="Header path to write.")
    parser.add_argument("--config", help="Optional header configuration JSON.")
    parser.add_argument("--ifndef", help="Include guard macro (overrides config).")
    parser.add_argument("--function-attribute", help="Text prefixed verbatim to every prototype (overrides config).")
    parser.add_argument("--function-prefix", help="Prefix prepended to every function name (overrides config).")
    parser.add_argument("--file-header-comment", help="Comment block emitted first (overrides config).")
    parser.add_argument("--no-directives", action="store_true", help="Omit the include guard and extern \"C\" block.")
    parser.add_argument("--no-imports", action="store_true", help="Omit the standard #include block.")
    parser.add_argument("--no-documentation", action="store_true", help="Omit /// documentation comments.")
    parser.add_argument("--check", action="store_true", help="Fail with a diff when the header is out of date.")
    parser.add_argument("--dry-run", action="store_true", help="Render without writing.")
    return parser


def resolve_cli_config(args: argparse.Namespace) -> HeaderConfig:
    config = load_header_config(Path(args.config)) if args.config else HeaderConfig()

    overrides: dict[str, object] = {}
    if args.ifndef is not None:
        overrides["ifndef"] = args.ifndef
    if args.function_attribute is not None:
        overrides["function_attribute"] = args.function_attribute
    if args.function_prefix is not None:
        overrides["function_prefix"] = args.function_prefix
    if args.file_header_comment is not None:
        overrides["file_header_comment"] = args.file_header_comment
    if args.no_directives:
        overrides["directives"] = False
    if args.no_imports:
        overrides["imports"] = False
    if args.no_documentation:
        overrides["documentation"] = False

    config = dataclasses.replace(config, **overrides)
    validate_header_config(config, "command line")
    return config


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_cli_config(args)
        library = load_library(Path(args.idl))
        header = render_header(library, config)
        return write_if_changed(Path(args.out), header, args.check, args.dry_run)
    except HeaderGenerationError as exc:
        print(f"abi-c-backend error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
