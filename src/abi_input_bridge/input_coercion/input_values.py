"""Untyped and typed input value entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias

from abi_input_bridge.field_codec.field_models import FieldElement

U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class TextValue:
    """Raw string, usually a hex or decimal literal."""

    text: str


@dataclass(frozen=True)
class IntegerValue:
    """Raw unsigned integer that fits in 64 bits."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= U64_MAX:
            raise ValueError(f"Integer input {self.value} does not fit in 64 unsigned bits.")


@dataclass(frozen=True)
class FlagValue:
    """Raw boolean."""

    flag: bool


@dataclass(frozen=True)
class IntegerArrayValue:
    """Raw array of unsigned 64-bit integers."""

    items: tuple[int, ...]

    def __post_init__(self) -> None:
        for item in self.items:
            if not 0 <= item <= U64_MAX:
                raise ValueError(f"Integer input {item} does not fit in 64 unsigned bits.")


@dataclass(frozen=True)
class TextArrayValue:
    """Raw array of strings."""

    items: tuple[str, ...]


@dataclass(frozen=True)
class FlagArrayValue:
    """Raw array of booleans."""

    items: tuple[bool, ...]


@dataclass(frozen=True)
class RecordValue:
    """Raw mapping from field name to nested untyped value."""

    entries: Mapping[str, UntypedValue]


UntypedValue: TypeAlias = (
    TextValue
    | IntegerValue
    | FlagValue
    | IntegerArrayValue
    | TextArrayValue
    | FlagArrayValue
    | RecordValue
)


@dataclass(frozen=True)
class FieldValue:
    """Single field element."""

    element: FieldElement


@dataclass(frozen=True)
class SequenceValue:
    """Ordered field elements."""

    elements: tuple[FieldElement, ...]


@dataclass(frozen=True)
class StringValue:
    """Text passed through unchanged."""

    text: str


@dataclass(frozen=True)
class StructValue:
    """Struct fields in schema declaration order."""

    fields: Mapping[str, InputValue]


InputValue: TypeAlias = FieldValue | SequenceValue | StringValue | StructValue
