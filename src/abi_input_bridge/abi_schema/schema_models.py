"""ABI schema entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


class AbiType:
    """Base class for type schema nodes."""

    kind: str = ""

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class FieldType(AbiType):
    """Native field element."""

    kind = "field"


@dataclass(frozen=True)
class IntegerType(AbiType):
    """Integer of a given bit width carried in a field element."""

    width: int
    signed: bool = False
    kind = "integer"

    def describe(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.width}"


@dataclass(frozen=True)
class BooleanType(AbiType):
    """Boolean carried as field zero or one."""

    kind = "boolean"


@dataclass(frozen=True)
class StringType(AbiType):
    """Fixed length text."""

    length: int
    kind = "string"

    def describe(self) -> str:
        return f"str<{self.length}>"


@dataclass(frozen=True)
class ArrayType(AbiType):
    """Fixed length array of one element type."""

    length: int
    element: AbiType
    kind = "array"

    def describe(self) -> str:
        return f"[{self.element.describe()}; {self.length}]"


@dataclass(frozen=True)
class StructType(AbiType):
    """Named fields in declaration order; the order is authoritative for outputs."""

    fields: tuple[tuple[str, AbiType], ...]
    name: str = ""
    kind = "struct"

    def describe(self) -> str:
        inner = ", ".join(
            f"{field_name}: {field_type.describe()}" for field_name, field_type in self.fields
        )
        return f"{self.name or 'struct'} {{ {inner} }}"


@dataclass(frozen=True)
class AbiParameter:
    """One entry point parameter."""

    name: str
    abi_type: AbiType
    visibility: str = "private"


@dataclass(frozen=True)
class Abi:
    """Parameters and their witness index layout."""

    parameters: tuple[AbiParameter, ...]
    param_witnesses: Mapping[str, tuple[int, ...]]
    return_type: AbiType | None = None
    return_witnesses: tuple[int, ...] = ()
