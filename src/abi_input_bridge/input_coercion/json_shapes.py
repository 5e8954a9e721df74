"""Adapters between decoded JSON data and input value entities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from abi_input_bridge.field_codec.text_encoding import InputParserError, encode_field_element

from .coercion_engine import DEFAULT_MAX_DEPTH, InputNestingError
from .input_values import (
    U64_MAX,
    FieldValue,
    FlagArrayValue,
    FlagValue,
    InputValue,
    IntegerArrayValue,
    IntegerValue,
    RecordValue,
    SequenceValue,
    StringValue,
    StructValue,
    TextArrayValue,
    TextValue,
    UntypedValue,
)


class UnsupportedJsonValueError(InputParserError):
    """Raised when decoded JSON matches none of the supported input shapes."""

    def __init__(self, path: str, value: Any) -> None:
        super().__init__(
            f"Input at `{path}` has unsupported shape {type(value).__name__}; "
            "use strings for values that do not fit in 64 unsigned bits"
        )
        self.path = path


def classify_json(
    raw: Any, *, path: str = "input", max_depth: int = DEFAULT_MAX_DEPTH
) -> UntypedValue:
    """Map decoded JSON onto the closed set of untyped input shapes.

    Shapes are tried in order: text, unsigned 64-bit integer, boolean, integer
    array, text array, boolean array, record. An empty array is an integer array.

    Records nested deeper than ``max_depth`` raise ``InputNestingError``.
    """
    return _classify(raw, path, max_depth, depth=0)


def _classify(raw: Any, path: str, max_depth: int, *, depth: int) -> UntypedValue:
    if depth > max_depth:
        raise InputNestingError(path, max_depth)
    if isinstance(raw, str):
        return TextValue(text=raw)
    if _is_u64(raw):
        return IntegerValue(value=raw)
    if isinstance(raw, bool):
        return FlagValue(flag=raw)
    if isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)):
        items = list(raw)
        if all(_is_u64(item) for item in items):
            return IntegerArrayValue(items=tuple(items))
        if all(isinstance(item, str) for item in items):
            return TextArrayValue(items=tuple(items))
        if all(isinstance(item, bool) for item in items):
            return FlagArrayValue(items=tuple(items))
        raise UnsupportedJsonValueError(path, raw)
    if isinstance(raw, Mapping):
        entries: dict[str, UntypedValue] = {}
        for key, child in raw.items():
            if not isinstance(key, str):
                raise UnsupportedJsonValueError(f"{path}.{key}", key)
            entries[key] = _classify(child, f"{path}.{key}", max_depth, depth=depth + 1)
        return RecordValue(entries=entries)
    raise UnsupportedJsonValueError(path, raw)


def to_untyped(value: InputValue) -> UntypedValue:
    """Project a typed value back onto untyped shapes using canonical hex text."""
    if isinstance(value, FieldValue):
        return TextValue(text=encode_field_element(value.element))
    if isinstance(value, SequenceValue):
        return TextArrayValue(
            items=tuple(encode_field_element(element) for element in value.elements)
        )
    if isinstance(value, StringValue):
        return TextValue(text=value.text)
    if isinstance(value, StructValue):
        return RecordValue(
            entries={name: to_untyped(child) for name, child in value.fields.items()}
        )
    raise TypeError(f"Unsupported typed value: {value!r}")


def to_json(value: UntypedValue) -> Any:
    """Return plain JSON-compatible data for an untyped value."""
    if isinstance(value, TextValue):
        return value.text
    if isinstance(value, IntegerValue):
        return value.value
    if isinstance(value, FlagValue):
        return value.flag
    if isinstance(value, (IntegerArrayValue, TextArrayValue, FlagArrayValue)):
        return list(value.items)
    if isinstance(value, RecordValue):
        return {name: to_json(child) for name, child in value.entries.items()}
    raise TypeError(f"Unsupported untyped value: {value!r}")


def _is_u64(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX
