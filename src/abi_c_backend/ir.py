"""Read-only model of a native library's ABI surface.

Every node is an immutable value. Named nodes (enums, opaques, composites,
function pointers) are identified by their name; two nodes with the same
name are assumed to describe the same type.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NoReturn, Union


class Primitive(enum.Enum):
    VOID = "void"
    BOOL = "bool"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"
    USIZE = "usize"
    ISIZE = "isize"

    @classmethod
    def from_keyword(cls, keyword: str) -> Primitive | None:
        try:
            return cls(keyword)
        except ValueError:
            return None


PrimitiveValue = Union[bool, int, float]

# One entry per paragraph; entries may span several lines.
Documentation = tuple[str, ...]


@dataclass(frozen=True)
class Variant:
    name: str
    value: int
    documentation: Documentation = ()


@dataclass(frozen=True)
class EnumType:
    name: str
    variants: tuple[Variant, ...] = ()
    documentation: Documentation = ()


@dataclass(frozen=True)
class OpaqueType:
    name: str
    documentation: Documentation = ()


@dataclass(frozen=True)
class Field:
    name: str
    the_type: CType
    documentation: Documentation = ()


@dataclass(frozen=True)
class CompositeType:
    name: str
    fields: tuple[Field, ...] = ()
    documentation: Documentation = ()

    def is_empty(self) -> bool:
        return not self.fields


@dataclass(frozen=True)
class FnPointerType:
    name: str
    parameters: tuple[CType, ...] = ()
    rval: CType = Primitive.VOID


@dataclass(frozen=True)
class ReadPointer:
    inner: CType


@dataclass(frozen=True)
class ReadWritePointer:
    inner: CType


@dataclass(frozen=True)
class AsciiPointer:
    pass


@dataclass(frozen=True)
class SuccessEnum:
    the_enum: EnumType


@dataclass(frozen=True)
class SliceType:
    composite: CompositeType


@dataclass(frozen=True)
class OptionType:
    composite: CompositeType


TypePattern = Union[AsciiPointer, SuccessEnum, SliceType, OptionType]

CType = Union[
    Primitive,
    EnumType,
    OpaqueType,
    CompositeType,
    FnPointerType,
    ReadPointer,
    ReadWritePointer,
    AsciiPointer,
    SuccessEnum,
    SliceType,
    OptionType,
]

POINTER_TYPES = (ReadPointer, ReadWritePointer)


def unknown_type(the_type: object) -> NoReturn:
    raise TypeError(f"Unsupported C type node: {the_type!r}")


def type_label(the_type: CType) -> str:
    """Short human-readable description used in error messages."""
    if isinstance(the_type, Primitive):
        return f"primitive '{the_type.value}'"
    if isinstance(the_type, EnumType):
        return f"enum '{the_type.name}'"
    if isinstance(the_type, OpaqueType):
        return f"opaque '{the_type.name}'"
    if isinstance(the_type, CompositeType):
        return f"composite '{the_type.name}'"
    if isinstance(the_type, FnPointerType):
        return f"function pointer '{the_type.name}'"
    if isinstance(the_type, ReadPointer):
        return f"read pointer to {type_label(the_type.inner)}"
    if isinstance(the_type, ReadWritePointer):
        return f"read-write pointer to {type_label(the_type.inner)}"
    if isinstance(the_type, AsciiPointer):
        return "ascii pointer"
    if isinstance(the_type, SuccessEnum):
        return f"success enum '{the_type.the_enum.name}'"
    if isinstance(the_type, SliceType):
        return f"slice '{the_type.composite.name}'"
    if isinstance(the_type, OptionType):
        return f"option '{the_type.composite.name}'"
    unknown_type(the_type)


def embedded_types(the_type: CType) -> list[CType]:
    """Types referenced directly (one level deep) by ``the_type``."""
    if isinstance(the_type, (Primitive, EnumType, OpaqueType, AsciiPointer)):
        return []
    if isinstance(the_type, CompositeType):
        return [item.the_type for item in the_type.fields]
    if isinstance(the_type, FnPointerType):
        return [*the_type.parameters, the_type.rval]
    if isinstance(the_type, POINTER_TYPES):
        return [the_type.inner]
    if isinstance(the_type, SuccessEnum):
        return [the_type.the_enum]
    if isinstance(the_type, (SliceType, OptionType)):
        return [the_type.composite]
    unknown_type(the_type)


@dataclass(frozen=True)
class Parameter:
    name: str
    the_type: CType


@dataclass(frozen=True)
class Function:
    name: str
    parameters: tuple[Parameter, ...] = ()
    rval: CType = Primitive.VOID
    documentation: Documentation = ()


@dataclass(frozen=True)
class Constant:
    name: str
    the_type: CType
    value: PrimitiveValue


@dataclass(frozen=True)
class Library:
    functions: tuple[Function, ...] = ()
    constants: tuple[Constant, ...] = ()
    types: tuple[CType, ...] = ()

    def ctypes(self) -> list[CType]:
        """All type nodes reachable from functions, constants and extra types.

        Nodes are listed in discovery order (pre-order, functions first) and
        each distinct node appears once.
        """
        seen: set[CType] = set()
        out: list[CType] = []

        def visit(the_type: CType) -> None:
            if the_type in seen:
                return
            seen.add(the_type)
            out.append(the_type)
            for inner in embedded_types(the_type):
                visit(inner)

        for function in self.functions:
            for param in function.parameters:
                visit(param.the_type)
            visit(function.rval)
        for constant in self.constants:
            visit(constant.the_type)
        for extra in self.types:
            visit(extra)
        return out
