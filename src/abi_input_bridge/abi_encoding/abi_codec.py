"""ABI encoding of program inputs into witness maps and back."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from abi_input_bridge.abi_schema.schema_models import (
    Abi,
    AbiType,
    ArrayType,
    BooleanType,
    FieldType,
    IntegerType,
    StringType,
    StructType,
)
from abi_input_bridge.field_codec.field_models import BN254, FieldElement, PrimeField
from abi_input_bridge.input_coercion.coercion_engine import (
    DEFAULT_MAX_DEPTH,
    MissingArgumentError,
    coerce,
)
from abi_input_bridge.input_coercion.input_values import (
    FieldValue,
    InputValue,
    SequenceValue,
    StringValue,
    StructValue,
)
from abi_input_bridge.input_coercion.json_shapes import UnsupportedJsonValueError, classify_json
from abi_input_bridge.witness_bridge.witness_models import WitnessMap

_LOGGER = logging.getLogger("abi_input_bridge.abi_encoding")
_LOGGER.addHandler(logging.NullHandler())

RETURN_PATH = "return"


class WitnessLayoutError(Exception):
    """Raised when values do not line up with the ABI witness indices."""


@dataclass(frozen=True)
class DecodedInputs:
    """Typed parameter values read back from a witness map."""

    inputs: Mapping[str, InputValue]
    return_value: InputValue | None


def encode_inputs(
    abi: Abi,
    inputs: Any,
    return_value: Any = None,
    *,
    field: PrimeField = BN254,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> WitnessMap:
    """Coerce JSON-shaped inputs under the ABI and place them at their witness indices.

    Each parameter is coerced with its own name as the error path. Extra input
    keys are ignored.

    Raises:
      InputParserError: For any coercion failure, including a missing parameter.
      WitnessLayoutError: If the parameter type and its witness list disagree in
        size, or a value flattens to a different number of elements.
    """
    if not isinstance(inputs, Mapping):
        raise UnsupportedJsonValueError("input", inputs)

    witness_map = WitnessMap()
    for parameter in abi.parameters:
        if parameter.name not in inputs:
            raise MissingArgumentError(parameter.name)
        typed = coerce(
            classify_json(inputs[parameter.name], path=parameter.name, max_depth=max_depth),
            parameter.abi_type,
            parameter.name,
            field=field,
            max_depth=max_depth,
        )
        _assign(
            witness_map,
            parameter.name,
            parameter.abi_type,
            flatten_input_value(typed, field),
            abi.param_witnesses.get(parameter.name, ()),
        )
        _LOGGER.debug("Encoded parameter %s", parameter.name)

    if return_value is not None and abi.return_type is not None:
        typed_return = coerce(
            classify_json(return_value, path=RETURN_PATH, max_depth=max_depth),
            abi.return_type,
            RETURN_PATH,
            field=field,
            max_depth=max_depth,
        )
        _assign(
            witness_map,
            RETURN_PATH,
            abi.return_type,
            flatten_input_value(typed_return, field),
            abi.return_witnesses,
        )
    return witness_map


def decode_inputs(abi: Abi, witness_map: Mapping[int, FieldElement]) -> DecodedInputs:
    """Read every parameter back out of ``witness_map``.

    The return value is decoded only when all return witnesses are present.

    Raises:
      WitnessLayoutError: For missing parameter witnesses or a witness count that
        does not match the parameter type.
    """
    inputs: dict[str, InputValue] = {}
    for parameter in abi.parameters:
        indices = abi.param_witnesses.get(parameter.name, ())
        elements = _collect(witness_map, parameter.name, indices)
        inputs[parameter.name] = _read_exact(parameter.abi_type, parameter.name, elements)
        _LOGGER.debug("Decoded parameter %s", parameter.name)

    return_value: InputValue | None = None
    if (
        abi.return_type is not None
        and abi.return_witnesses
        and all(index in witness_map for index in abi.return_witnesses)
    ):
        elements = _collect(witness_map, RETURN_PATH, abi.return_witnesses)
        return_value = _read_exact(abi.return_type, RETURN_PATH, elements)
    return DecodedInputs(inputs=inputs, return_value=return_value)


def flatten_input_value(value: InputValue, field: PrimeField = BN254) -> tuple[FieldElement, ...]:
    """Flatten a typed value into field elements; struct fields follow schema order."""
    if isinstance(value, FieldValue):
        return (value.element,)
    if isinstance(value, SequenceValue):
        return value.elements
    if isinstance(value, StringValue):
        return tuple(field.element(byte) for byte in value.text.encode("utf-8"))
    if isinstance(value, StructValue):
        flattened: list[FieldElement] = []
        for child in value.fields.values():
            flattened.extend(flatten_input_value(child, field))
        return tuple(flattened)
    raise TypeError(f"Unsupported typed value: {value!r}")


def field_count(abi_type: AbiType) -> int:
    """Return how many field elements a value of ``abi_type`` occupies."""
    if isinstance(abi_type, (FieldType, IntegerType, BooleanType)):
        return 1
    if isinstance(abi_type, StringType):
        return abi_type.length
    if isinstance(abi_type, ArrayType):
        return abi_type.length * field_count(abi_type.element)
    if isinstance(abi_type, StructType):
        return sum(field_count(field_type) for _, field_type in abi_type.fields)
    raise TypeError(f"Unsupported ABI type: {abi_type!r}")


def _assign(
    witness_map: WitnessMap,
    name: str,
    abi_type: AbiType,
    elements: Sequence[FieldElement],
    indices: Sequence[int],
) -> None:
    expected = field_count(abi_type)
    if expected != len(indices):
        raise WitnessLayoutError(
            f"Parameter `{name}` expects {expected} witnesses but the ABI lists {len(indices)}."
        )
    if len(elements) != len(indices):
        raise WitnessLayoutError(
            f"Parameter `{name}` has {len(elements)} values but {len(indices)} witnesses."
        )
    for index, element in zip(indices, elements):
        witness_map.insert(index, element)


def _collect(
    witness_map: Mapping[int, FieldElement], name: str, indices: Sequence[int]
) -> list[FieldElement]:
    missing = [index for index in indices if index not in witness_map]
    if missing:
        raise WitnessLayoutError(f"Witness map is missing indices {missing} for `{name}`.")
    return [witness_map[index] for index in indices]


def _read_exact(abi_type: AbiType, name: str, elements: Sequence[FieldElement]) -> InputValue:
    expected = field_count(abi_type)
    if expected != len(elements):
        raise WitnessLayoutError(
            f"Parameter `{name}` expects {expected} witnesses but the ABI lists {len(elements)}."
        )
    return _read_value(abi_type, name, iter(elements))


def _read_value(abi_type: AbiType, name: str, elements: Iterator[FieldElement]) -> InputValue:
    if isinstance(abi_type, (FieldType, IntegerType, BooleanType)):
        return FieldValue(element=next(elements))
    if isinstance(abi_type, StringType):
        return StringValue(text=_read_text(name, [next(elements) for _ in range(abi_type.length)]))
    if isinstance(abi_type, ArrayType):
        return SequenceValue(elements=tuple(next(elements) for _ in range(field_count(abi_type))))
    if isinstance(abi_type, StructType):
        return StructValue(
            fields={
                field_name: _read_value(field_type, f"{name}.{field_name}", elements)
                for field_name, field_type in abi_type.fields
            }
        )
    raise TypeError(f"Unsupported ABI type: {abi_type!r}")


def _read_text(name: str, elements: Sequence[FieldElement]) -> str:
    if any(element.value > 0xFF for element in elements):
        raise WitnessLayoutError(f"String `{name}` holds a witness that is not a byte.")
    try:
        return bytes(element.value for element in elements).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise WitnessLayoutError(f"String `{name}` is not valid UTF-8: {exc}") from exc
