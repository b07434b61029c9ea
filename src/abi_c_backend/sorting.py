from __future__ import annotations

from typing import Iterable

from .errors import DependencyCycleError
from .ir import (
    AsciiPointer,
    CompositeType,
    CType,
    EnumType,
    FnPointerType,
    OpaqueType,
    OptionType,
    POINTER_TYPES,
    Primitive,
    SliceType,
    SuccessEnum,
    unknown_type,
)


def declaration_name(the_type: CType) -> str | None:
    """Name of the C declaration ``the_type`` produces, None when it produces none."""
    if isinstance(the_type, (Primitive, AsciiPointer)) or isinstance(the_type, POINTER_TYPES):
        return None
    if isinstance(the_type, (EnumType, OpaqueType, CompositeType, FnPointerType)):
        return the_type.name
    if isinstance(the_type, SuccessEnum):
        return the_type.the_enum.name
    if isinstance(the_type, (SliceType, OptionType)):
        return the_type.composite.name
    unknown_type(the_type)


def _collect_mentions(the_type: CType, out: list[str]) -> None:
    name = declaration_name(the_type)
    if name is not None:
        if name not in out:
            out.append(name)
        return
    if isinstance(the_type, POINTER_TYPES):
        _collect_mentions(the_type.inner, out)


def declaration_dependencies(the_type: CType) -> list[str]:
    """Named declarations mentioned by the definition of ``the_type``.

    Pointer targets and function pointer signatures count as well as by-value
    fields: C needs every typedef name declared before it is spelled.
    """
    out: list[str] = []
    if isinstance(the_type, (SliceType, OptionType)):
        the_type = the_type.composite
    if isinstance(the_type, CompositeType):
        for item in the_type.fields:
            _collect_mentions(item.the_type, out)
    elif isinstance(the_type, FnPointerType):
        for param in the_type.parameters:
            _collect_mentions(param, out)
        _collect_mentions(the_type.rval, out)
    own = declaration_name(the_type)
    return [name for name in out if name != own]


def sort_types_by_dependencies(types: Iterable[CType]) -> list[CType]:
    """Order declarable types so each follows everything it mentions.

    Types without a declaration are dropped and duplicate names are kept
    once. Among types whose dependencies are all emitted, the one earliest in
    the input goes next, so input order survives wherever it is already valid.
    """
    pending: list[tuple[str, CType]] = []
    names: set[str] = set()
    for the_type in types:
        name = declaration_name(the_type)
        if name is None or name in names:
            continue
        names.add(name)
        pending.append((name, the_type))

    dependencies = {
        name: [dep for dep in declaration_dependencies(the_type) if dep in names] for name, the_type in pending
    }

    emitted: set[str] = set()
    ordered: list[CType] = []
    while pending:
        for index, (name, _) in enumerate(pending):
            if all(dep in emitted for dep in dependencies[name]):
                break
        else:
            raise DependencyCycleError([name for name, _ in pending])
        name, the_type = pending.pop(index)
        emitted.add(name)
        ordered.append(the_type)
    return ordered
