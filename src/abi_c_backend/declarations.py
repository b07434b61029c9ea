from __future__ import annotations

from .config import HeaderConfig
from .converter import fn_pointer_to_typename, type_to_type_specifier
from .errors import HeaderGenerationError
from .ir import (
    AsciiPointer,
    CompositeType,
    CType,
    EnumType,
    Field,
    FnPointerType,
    Library,
    OpaqueType,
    OptionType,
    POINTER_TYPES,
    Primitive,
    SliceType,
    SuccessEnum,
    Variant,
    unknown_type,
)
from .prototypes import write_documentation
from .sorting import sort_types_by_dependencies
from .writer import IndentWriter


def write_type_definitions(w: IndentWriter, library: Library, config: HeaderConfig) -> None:
    for the_type in sort_types_by_dependencies(library.ctypes()):
        write_type_definition(w, the_type, config)


def write_type_definition(w: IndentWriter, the_type: CType, config: HeaderConfig) -> None:
    if isinstance(the_type, (Primitive, AsciiPointer)) or isinstance(the_type, POINTER_TYPES):
        return
    if isinstance(the_type, EnumType):
        write_type_definition_enum(w, the_type, config)
    elif isinstance(the_type, OpaqueType):
        write_type_definition_opaque(w, the_type, config)
    elif isinstance(the_type, CompositeType):
        write_type_definition_composite(w, the_type, config)
    elif isinstance(the_type, FnPointerType):
        write_type_definition_fn_pointer(w, the_type)
    elif isinstance(the_type, SuccessEnum):
        write_type_definition_enum(w, the_type.the_enum, config)
    elif isinstance(the_type, (SliceType, OptionType)):
        write_type_definition_composite(w, the_type.composite, config)
    else:
        unknown_type(the_type)
    w.separator()


def write_type_definition_fn_pointer(w: IndentWriter, the_type: FnPointerType) -> None:
    rval = type_to_type_specifier(the_type.rval)
    name = fn_pointer_to_typename(the_type)
    params = [f"{type_to_type_specifier(param)} x{index}" for index, param in enumerate(the_type.parameters)]
    params_text = ",".join(params) if params else "void"
    w.indented(f"typedef {rval} (*{name})({params_text});")


def write_type_definition_enum(w: IndentWriter, the_type: EnumType, config: HeaderConfig) -> None:
    if not the_type.variants:
        raise HeaderGenerationError(f"enum '{the_type.name}' has no variants; C requires at least one enumerator")
    if config.documentation:
        write_documentation(w, the_type.documentation)
    w.indented(f"typedef enum {the_type.name} {{")
    with w.indented_block():
        for variant in the_type.variants:
            write_type_definition_enum_variant(w, variant, config)
    w.indented(f"}} {the_type.name};")


def write_type_definition_enum_variant(w: IndentWriter, variant: Variant, config: HeaderConfig) -> None:
    if config.documentation:
        write_documentation(w, variant.documentation)
    w.indented(f"{variant.name} = {variant.value},")


def write_type_definition_opaque(w: IndentWriter, the_type: OpaqueType, config: HeaderConfig) -> None:
    if config.documentation:
        write_documentation(w, the_type.documentation)
    write_forward_declaration(w, the_type.name)


def write_forward_declaration(w: IndentWriter, name: str) -> None:
    w.indented(f"typedef struct {name} {name};")


def write_type_definition_composite(w: IndentWriter, the_type: CompositeType, config: HeaderConfig) -> None:
    if config.documentation:
        write_documentation(w, the_type.documentation)
    if the_type.is_empty():
        # C has no zero-member structs; consumers get an incomplete type instead.
        write_forward_declaration(w, the_type.name)
        return
    w.indented(f"typedef struct {the_type.name} {{")
    with w.indented_block():
        for item in the_type.fields:
            write_type_definition_composite_field(w, item, config)
    w.indented(f"}} {the_type.name};")


def write_type_definition_composite_field(w: IndentWriter, item: Field, config: HeaderConfig) -> None:
    if config.documentation:
        write_documentation(w, item.documentation)
    w.indented(f"{type_to_type_specifier(item.the_type)} {item.name};")
