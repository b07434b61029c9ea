"""Load a :class:`Library` from a JSON IDL document.

Named types live in the top-level ``types`` list and are referenced by
name everywhere else. A reference is resolved into a nested immutable
node, so recursion through names is rejected here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .common import load_json_object, validate_with_schema
from .errors import IdlError
from .ir import (
    AsciiPointer,
    CompositeType,
    Constant,
    CType,
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
    Variant,
)

TYPE_KINDS = {"enum", "opaque", "composite", "fn_pointer", "success_enum", "slice", "option"}


def load_library(path: Path) -> Library:
    payload = load_json_object(path, IdlError)
    return library_from_payload(payload)


def library_from_payload(payload: dict[str, Any]) -> Library:
    validate_with_schema("library", payload, IdlError)
    resolver = TypeResolver(collect_type_definitions(payload.get("types", [])))

    constants = tuple(
        Constant(
            name=item["name"],
            the_type=resolver.resolve_ref(item["type"], f"constants[{index}].type"),
            value=item["value"],
        )
        for index, item in enumerate(payload.get("constants", []))
    )

    functions: list[Function] = []
    for index, item in enumerate(payload.get("functions", [])):
        label = f"functions[{index}]"
        params = tuple(
            Parameter(
                name=param["name"],
                the_type=resolver.resolve_ref(param["type"], f"{label}.parameters[{param_index}].type"),
            )
            for param_index, param in enumerate(item.get("parameters", []))
        )
        functions.append(
            Function(
                name=item["name"],
                parameters=params,
                rval=resolver.resolve_ref(item.get("return", "void"), f"{label}.return"),
                documentation=tuple(item.get("documentation", [])),
            )
        )

    # Declared types are kept even when no function or constant reaches them.
    types = tuple(resolver.resolve_named(name, f"types.{name}") for name in resolver.definitions)
    return Library(functions=tuple(functions), constants=constants, types=types)


def collect_type_definitions(raw_types: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    definitions: dict[str, dict[str, Any]] = {}
    for index, item in enumerate(raw_types):
        name = item["name"]
        if Primitive.from_keyword(name) is not None:
            raise IdlError(f"types[{index}] name '{name}' shadows a primitive type")
        if name in definitions:
            raise IdlError(f"types[{index}] redefines type '{name}'")
        definitions[name] = item
    return definitions


class TypeResolver:
    def __init__(self, definitions: dict[str, dict[str, Any]]) -> None:
        self.definitions = definitions
        self._resolved: dict[str, CType] = {}
        self._in_progress: list[str] = []

    def resolve_ref(self, ref: Any, label: str) -> CType:
        if isinstance(ref, str):
            primitive = Primitive.from_keyword(ref)
            if primitive is not None:
                return primitive
            return self.resolve_named(ref, label)
        if isinstance(ref, dict):
            if "read_pointer" in ref:
                return ReadPointer(self.resolve_ref(ref["read_pointer"], f"{label}.read_pointer"))
            if "read_write_pointer" in ref:
                return ReadWritePointer(self.resolve_ref(ref["read_write_pointer"], f"{label}.read_write_pointer"))
            if ref.get("pattern") == "ascii_pointer":
                return AsciiPointer()
        raise IdlError(f"{label} is not a valid type reference: {ref!r}")

    def resolve_named(self, name: str, label: str) -> CType:
        if name in self._resolved:
            return self._resolved[name]
        definition = self.definitions.get(name)
        if definition is None:
            raise IdlError(f"{label} references unknown type '{name}'")
        if name in self._in_progress:
            chain = " -> ".join([*self._in_progress[self._in_progress.index(name):], name])
            raise IdlError(f"{label} forms a recursive type reference: {chain}")

        self._in_progress.append(name)
        try:
            node = self._build(definition, f"types.{name}")
        finally:
            self._in_progress.pop()
        self._resolved[name] = node
        return node

    def _build(self, definition: dict[str, Any], label: str) -> CType:
        kind = definition["kind"]
        name = definition["name"]
        documentation = tuple(definition.get("documentation", []))
        if kind in ("enum", "success_enum"):
            if not definition.get("variants"):
                raise IdlError(f"{label} is an enum without variants")
            the_enum = EnumType(
                name=name,
                variants=tuple(
                    Variant(
                        name=item["name"],
                        value=item["value"],
                        documentation=tuple(item.get("documentation", [])),
                    )
                    for item in definition.get("variants", [])
                ),
                documentation=documentation,
            )
            return SuccessEnum(the_enum) if kind == "success_enum" else the_enum
        if kind == "opaque":
            return OpaqueType(name=name, documentation=documentation)
        if kind in ("composite", "slice", "option"):
            composite = CompositeType(
                name=name,
                fields=tuple(
                    Field(
                        name=item["name"],
                        the_type=self.resolve_ref(item["type"], f"{label}.fields[{index}].type"),
                        documentation=tuple(item.get("documentation", [])),
                    )
                    for index, item in enumerate(definition.get("fields", []))
                ),
                documentation=documentation,
            )
            if kind == "slice":
                return SliceType(composite)
            if kind == "option":
                return OptionType(composite)
            return composite
        if kind == "fn_pointer":
            return FnPointerType(
                name=name,
                parameters=tuple(
                    self.resolve_ref(item, f"{label}.parameters[{index}]")
                    for index, item in enumerate(definition.get("parameters", []))
                ),
                rval=self.resolve_ref(definition.get("return", "void"), f"{label}.return"),
            )
        raise IdlError(f"{label}.kind must be one of: {', '.join(sorted(TYPE_KINDS))}")
