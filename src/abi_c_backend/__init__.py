from .common import load_json_object, write_if_changed
from .config import HeaderConfig, load_header_config, resolve_header_config
from .converter import type_to_type_specifier
from .document import render_header, write_all, write_header
from .errors import (
    ConfigError,
    DependencyCycleError,
    HeaderGenerationError,
    IdlError,
    UnsupportedConstantTypeError,
    WriteFailureError,
)
from .idl import library_from_payload, load_library
from .ir import (
    AsciiPointer,
    CompositeType,
    Constant,
    CType,
    Documentation,
    EnumType,
    Field,
    FnPointerType,
    Function,
    Library,
    OpaqueType,
    OptionType,
    Parameter,
    Primitive,
    ReadPointer,
    ReadWritePointer,
    SliceType,
    SuccessEnum,
    TypePattern,
    Variant,
)
from .sorting import sort_types_by_dependencies
from .writer import IndentWriter

__all__ = [
    "AsciiPointer",
    "CType",
    "CompositeType",
    "ConfigError",
    "Constant",
    "DependencyCycleError",
    "Documentation",
    "EnumType",
    "Field",
    "FnPointerType",
    "Function",
    "HeaderConfig",
    "HeaderGenerationError",
    "IdlError",
    "IndentWriter",
    "Library",
    "OpaqueType",
    "OptionType",
    "Parameter",
    "Primitive",
    "ReadPointer",
    "ReadWritePointer",
    "SliceType",
    "SuccessEnum",
    "TypePattern",
    "UnsupportedConstantTypeError",
    "Variant",
    "WriteFailureError",
    "library_from_payload",
    "load_header_config",
    "load_json_object",
    "load_library",
    "render_header",
    "resolve_header_config",
    "sort_types_by_dependencies",
    "type_to_type_specifier",
    "write_all",
    "write_header",
    "write_if_changed",
]
