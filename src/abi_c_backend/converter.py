from __future__ import annotations

import math
from typing import Callable

from .errors import HeaderGenerationError
from .ir import (
    AsciiPointer,
    CompositeType,
    CType,
    EnumType,
    FnPointerType,
    Function,
    OpaqueType,
    OptionType,
    Primitive,
    PrimitiveValue,
    ReadPointer,
    ReadWritePointer,
    SliceType,
    SuccessEnum,
    unknown_type,
)

FunctionNamer = Callable[[Function], str]

PRIMITIVE_TYPENAMES: dict[Primitive, str] = {
    Primitive.VOID: "void",
    Primitive.BOOL: "bool",
    Primitive.U8: "uint8_t",
    Primitive.U16: "uint16_t",
    Primitive.U32: "uint32_t",
    Primitive.U64: "uint64_t",
    Primitive.I8: "int8_t",
    Primitive.I16: "int16_t",
    Primitive.I32: "int32_t",
    Primitive.I64: "int64_t",
    Primitive.F32: "float",
    Primitive.F64: "double",
    Primitive.USIZE: "size_t",
    Primitive.ISIZE: "ptrdiff_t",
}

ASCII_POINTER_TYPENAME = "const char*"


def primitive_to_typename(primitive: Primitive) -> str:
    return PRIMITIVE_TYPENAMES[primitive]


def fn_pointer_to_typename(the_type: FnPointerType) -> str:
    return the_type.name


def type_to_type_specifier(the_type: CType) -> str:
    """Return the C type specifier for ``the_type`` (no declarator name)."""
    if isinstance(the_type, Primitive):
        return primitive_to_typename(the_type)
    if isinstance(the_type, (EnumType, OpaqueType, CompositeType)):
        return the_type.name
    if isinstance(the_type, FnPointerType):
        return fn_pointer_to_typename(the_type)
    if isinstance(the_type, ReadPointer):
        inner = type_to_type_specifier(the_type.inner)
        # const must bind to the pointee, which for a pointer pointee sits after its '*'
        if inner.endswith("*"):
            return f"{inner} const*"
        return f"const {inner}*"
    if isinstance(the_type, ReadWritePointer):
        return f"{type_to_type_specifier(the_type.inner)}*"
    if isinstance(the_type, AsciiPointer):
        return ASCII_POINTER_TYPENAME
    if isinstance(the_type, SuccessEnum):
        return the_type.the_enum.name
    if isinstance(the_type, (SliceType, OptionType)):
        return the_type.composite.name
    unknown_type(the_type)


def constant_value_to_value(value: PrimitiveValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise HeaderGenerationError(f"Constant value {value!r} has no C literal form")
        return repr(value)
    raise HeaderGenerationError(f"Unsupported constant value: {value!r}")


def function_name_to_c_name(function: Function, prefix: str = "") -> str:
    return f"{prefix}{function.name}"
