from __future__ import annotations

from typing import Sequence

from .config import HeaderConfig
from .converter import (
    FunctionNamer,
    constant_value_to_value,
    function_name_to_c_name,
    primitive_to_typename,
    type_to_type_specifier,
)
from .errors import UnsupportedConstantTypeError
from .ir import Constant, Function, Library, Primitive, type_label
from .writer import IndentWriter


def write_documentation(w: IndentWriter, documentation: Sequence[str]) -> None:
    for entry in documentation:
        # Every physical line must stay inside the comment.
        for line in entry.splitlines() or [""]:
            w.indented(f"/// {line}".rstrip())


def write_constants(w: IndentWriter, library: Library) -> None:
    for constant in library.constants:
        write_constant(w, constant)


def write_constant(w: IndentWriter, constant: Constant) -> None:
    the_type = constant.the_type
    if not isinstance(the_type, Primitive) or the_type is Primitive.VOID:
        raise UnsupportedConstantTypeError(constant.name, type_label(the_type))
    typename = primitive_to_typename(the_type)
    w.indented(f"const {typename} {constant.name} = {constant_value_to_value(constant.value)};")


def write_functions(
    w: IndentWriter,
    library: Library,
    config: HeaderConfig,
    function_namer: FunctionNamer | None = None,
) -> None:
    for function in library.functions:
        if config.documentation:
            write_documentation(w, function.documentation)
        write_function_declaration(w, function, config, function_namer)


def write_function_declaration(
    w: IndentWriter,
    function: Function,
    config: HeaderConfig,
    function_namer: FunctionNamer | None = None,
) -> None:
    attr = config.function_attribute
    rval = type_to_type_specifier(function.rval)
    if function_namer is not None:
        name = function_namer(function)
    else:
        name = function_name_to_c_name(function, config.function_prefix)

    params = [f"{type_to_type_specifier(param.the_type)} {param.name}" for param in function.parameters]
    params_text = ",".join(params) if params else "void"
    w.indented(f"{attr}{rval} {name}({params_text});")
