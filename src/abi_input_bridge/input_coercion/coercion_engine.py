"""Schema-directed coercion of untyped input values into typed values."""

from __future__ import annotations

from dataclasses import dataclass

from abi_input_bridge.abi_schema.schema_models import (
    AbiType,
    ArrayType,
    StringType,
    StructType,
)
from abi_input_bridge.field_codec.field_models import BN254, PrimeField
from abi_input_bridge.field_codec.text_encoding import InputParserError, parse_numeric

from .input_values import (
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

DEFAULT_MAX_DEPTH = 64


class AbiTypeMismatchError(InputParserError):
    """Raised when the input shape cannot satisfy the declared type."""

    def __init__(self, expected: AbiType, path: str) -> None:
        super().__init__(
            f"The value passed for parameter `{path}` does not match the expected type "
            f"{expected.describe()}"
        )
        self.expected = expected
        self.path = path


class MissingArgumentError(InputParserError):
    """Raised when a declared struct field or parameter is absent from the input."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Argument `{path}` is missing from the input")
        self.path = path


class InputNestingError(InputParserError):
    """Raised when struct nesting exceeds the configured depth limit."""

    def __init__(self, path: str, limit: int) -> None:
        super().__init__(f"Input at `{path}` exceeds the maximum nesting depth of {limit}")
        self.path = path
        self.limit = limit


@dataclass(frozen=True)
class _CoercionContext:
    """Read-only settings shared by one coercion call."""

    field: PrimeField
    max_depth: int


def coerce(
    value: UntypedValue,
    abi_type: AbiType,
    path: str,
    *,
    field: PrimeField = BN254,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> InputValue:
    """Convert one untyped value into a typed value under ``abi_type``.

    ``path`` seeds the dotted identifier used in error reports, e.g. ``"arg"``
    yields ``"arg.field"`` for a nested struct field.

    Raises:
      AbiTypeMismatchError: Input shape is incompatible with the declared type.
      MissingArgumentError: A declared struct field is absent.
      ParseHexStrError: A ``0x`` literal is not valid hexadecimal.
      ParseStrError: A decimal literal is not a signed 128-bit integer.
      InputNestingError: Struct nesting goes deeper than ``max_depth``.
    """
    context = _CoercionContext(field=field, max_depth=max_depth)
    return _coerce(value, abi_type, path, context, depth=0)


def _coerce(
    value: UntypedValue,
    abi_type: AbiType,
    path: str,
    context: _CoercionContext,
    *,
    depth: int,
) -> InputValue:
    if depth > context.max_depth:
        raise InputNestingError(path, context.max_depth)

    field = context.field
    if isinstance(value, TextValue):
        if isinstance(abi_type, StringType):
            return StringValue(text=value.text)
        if isinstance(abi_type, (ArrayType, StructType)):
            raise AbiTypeMismatchError(abi_type, path)
        return FieldValue(element=parse_numeric(value.text, field))
    if isinstance(value, IntegerValue):
        return FieldValue(element=field.element(value.value))
    if isinstance(value, FlagValue):
        return FieldValue(element=field.one() if value.flag else field.zero())
    if isinstance(value, RecordValue):
        if not isinstance(abi_type, StructType):
            raise AbiTypeMismatchError(abi_type, path)
        return _coerce_struct(value, abi_type, path, context, depth=depth)

    # Array shapes are not checked against the declared length or element type.
    if isinstance(abi_type, StructType):
        raise AbiTypeMismatchError(abi_type, path)
    if isinstance(value, IntegerArrayValue):
        return SequenceValue(elements=tuple(field.element(item) for item in value.items))
    if isinstance(value, TextArrayValue):
        return SequenceValue(elements=tuple(parse_numeric(item, field) for item in value.items))
    if isinstance(value, FlagArrayValue):
        return SequenceValue(
            elements=tuple(field.one() if item else field.zero() for item in value.items)
        )
    raise TypeError(f"Unsupported untyped value: {value!r}")


def _coerce_struct(
    record: RecordValue,
    struct_type: StructType,
    path: str,
    context: _CoercionContext,
    *,
    depth: int,
) -> StructValue:
    fields: dict[str, InputValue] = {}
    for field_name, field_type in struct_type.fields:
        field_id = f"{path}.{field_name}"
        if field_name not in record.entries:
            raise MissingArgumentError(field_id)
        fields[field_name] = _coerce(
            record.entries[field_name], field_type, field_id, context, depth=depth + 1
        )
    return StructValue(fields=fields)
