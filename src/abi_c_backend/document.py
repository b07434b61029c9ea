"""Header assembly.

Each stage is a plain function of the writer and the configuration;
``write_all`` composes them in the fixed order a C header needs:

    file header comment
    #ifndef / #define guard            (directives)
    extern "C" opening                 (directives)
    system includes                    (imports)
    custom defines
    constants
    type definitions, dependency sorted
    function prototypes
    extern "C" closing, #endif          (directives)

Stages that produce nothing leave no blank lines behind.
"""

from __future__ import annotations

from typing import Callable

from .config import HeaderConfig, validate_header_config
from .converter import FunctionNamer
from .declarations import write_type_definitions
from .ir import Library
from .prototypes import write_constants, write_functions
from .writer import IndentWriter, TextSink

Body = Callable[[IndentWriter], None]

SYSTEM_INCLUDES = ("stddef.h", "stdint.h", "stdbool.h")


def write_file_header_comments(w: IndentWriter, config: HeaderConfig) -> None:
    w.lines(config.file_header_comment)


def write_imports(w: IndentWriter) -> None:
    for include in SYSTEM_INCLUDES:
        w.indented(f"#include <{include}>")


def write_custom_defines(w: IndentWriter, config: HeaderConfig) -> None:
    w.lines(config.custom_defines)


def write_ifndef(w: IndentWriter, config: HeaderConfig, body: Body) -> None:
    if config.directives:
        w.indented(f"#ifndef {config.ifndef}")
        w.indented(f"#define {config.ifndef}")
        w.separator()

    body(w)

    if config.directives:
        w.separator()
        w.indented(f"#endif /* {config.ifndef} */")


def write_ifdefcpp(w: IndentWriter, config: HeaderConfig, body: Body) -> None:
    if config.directives:
        w.indented("#ifdef __cplusplus")
        w.indented('extern "C" {')
        w.indented("#endif")
        w.separator()

    body(w)

    if config.directives:
        w.separator()
        w.indented("#ifdef __cplusplus")
        w.indented("}")
        w.indented("#endif")


def write_body(
    w: IndentWriter,
    library: Library,
    config: HeaderConfig,
    function_namer: FunctionNamer | None = None,
) -> None:
    if config.imports:
        write_imports(w)
        w.separator()

    write_custom_defines(w, config)
    w.separator()

    write_constants(w, library)
    w.separator()

    write_type_definitions(w, library, config)
    w.separator()

    write_functions(w, library, config, function_namer)


def write_all(
    w: IndentWriter,
    library: Library,
    config: HeaderConfig,
    function_namer: FunctionNamer | None = None,
) -> None:
    write_file_header_comments(w, config)
    w.separator()

    write_ifndef(
        w,
        config,
        lambda w: write_ifdefcpp(
            w,
            config,
            lambda w: write_body(w, library, config, function_namer),
        ),
    )


def render_header(
    library: Library,
    config: HeaderConfig | None = None,
    function_namer: FunctionNamer | None = None,
) -> str:
    config = config or HeaderConfig()
    validate_header_config(config)
    w = IndentWriter(indent=config.indent)
    write_all(w, library, config, function_namer)
    return w.getvalue()


def write_header(
    target: TextSink,
    library: Library,
    config: HeaderConfig | None = None,
    function_namer: FunctionNamer | None = None,
) -> None:
    config = config or HeaderConfig()
    validate_header_config(config)
    write_all(IndentWriter(target, indent=config.indent), library, config, function_namer)
