"""ABI encoding tests."""

from __future__ import annotations

import pytest
from abi_input_bridge.abi_encoding.abi_codec import (
    WitnessLayoutError,
    decode_inputs,
    encode_inputs,
    field_count,
    flatten_input_value,
)
from abi_input_bridge.abi_schema.schema_loader import load_abi
from abi_input_bridge.abi_schema.schema_models import (
    ArrayType,
    FieldType,
    StringType,
    StructType,
)
from abi_input_bridge.field_codec.field_models import BN254
from abi_input_bridge.input_coercion.coercion_engine import (
    AbiTypeMismatchError,
    InputNestingError,
    MissingArgumentError,
)
from abi_input_bridge.input_coercion.input_values import (
    FieldValue,
    SequenceValue,
    StringValue,
    StructValue,
)
from abi_input_bridge.input_coercion.json_shapes import UnsupportedJsonValueError
from abi_input_bridge.witness_bridge.witness_models import WitnessMap


def _struct_abi() -> dict:
    return {
        "parameters": [
            {"name": "a", "type": {"kind": "field"}},
            {
                "name": "b",
                "type": {
                    "kind": "struct",
                    "path": "main::B",
                    "fields": [
                        {"name": "c", "type": {"kind": "boolean"}},
                        {"name": "d", "type": {"kind": "string", "length": 2}},
                    ],
                },
            },
        ],
        "param_witnesses": {"a": [1], "b": [2, 3, 4]},
        "return_type": {"kind": "field"},
        "return_witnesses": [5],
    }


def test_field_count_covers_nested_types() -> None:
    pair = StructType(fields=(("p", FieldType()), ("q", FieldType())))
    nested = StructType(
        fields=(
            ("xs", ArrayType(length=2, element=pair)),
            ("s", StringType(length=3)),
        )
    )

    assert field_count(nested) == 7


def test_flatten_orders_struct_fields_and_expands_strings() -> None:
    value = StructValue(
        fields={
            "x": FieldValue(element=BN254.element(9)),
            "s": StringValue(text="hi"),
            "xs": SequenceValue(elements=(BN254.one(), BN254.zero())),
        }
    )

    assert flatten_input_value(value) == (
        BN254.element(9),
        BN254.element(ord("h")),
        BN254.element(ord("i")),
        BN254.one(),
        BN254.zero(),
    )


def test_encode_places_values_at_parameter_witnesses() -> None:
    abi = load_abi(_struct_abi())

    witness_map = encode_inputs(abi, {"a": "5", "b": {"c": True, "d": "ok"}, "unused": 1})

    assert witness_map == WitnessMap(
        {
            1: BN254.element(5),
            2: BN254.one(),
            3: BN254.element(ord("o")),
            4: BN254.element(ord("k")),
        }
    )


def test_encode_includes_return_value_when_given() -> None:
    abi = load_abi(_struct_abi())

    witness_map = encode_inputs(abi, {"a": 1, "b": {"c": False, "d": "ok"}}, "-1")

    assert witness_map[5] == -BN254.one()


def test_encode_reports_missing_parameter_and_nested_field() -> None:
    abi = load_abi(_struct_abi())

    with pytest.raises(MissingArgumentError) as missing_parameter:
        encode_inputs(abi, {"b": {"c": True, "d": "ok"}})
    with pytest.raises(MissingArgumentError) as missing_field:
        encode_inputs(abi, {"a": "1", "b": {"d": "ok"}})

    assert missing_parameter.value.path == "a"
    assert missing_field.value.path == "b.c"


def test_encode_reports_type_mismatch_for_text_struct() -> None:
    abi = load_abi(_struct_abi())

    with pytest.raises(AbiTypeMismatchError) as excinfo:
        encode_inputs(abi, {"a": "1", "b": "0x1"})

    assert excinfo.value.path == "b"


def test_encode_rejects_non_mapping_inputs() -> None:
    with pytest.raises(UnsupportedJsonValueError):
        encode_inputs(load_abi(_struct_abi()), ["a"])


def test_encode_rejects_arrays_that_do_not_fit_the_witness_layout() -> None:
    abi = load_abi(
        {
            "parameters": [
                {
                    "name": "xs",
                    "type": {"kind": "array", "length": 2, "type": {"kind": "field"}},
                }
            ],
            "param_witnesses": {"xs": [1, 2]},
        }
    )

    with pytest.raises(WitnessLayoutError, match="3 values but 2 witnesses"):
        encode_inputs(abi, {"xs": [1, 2, 3]})


def test_encode_applies_the_nesting_limit() -> None:
    abi = load_abi(
        {
            "parameters": [
                {
                    "name": "s",
                    "type": {
                        "kind": "struct",
                        "fields": [{"name": "x", "type": {"kind": "field"}}],
                    },
                }
            ],
            "param_witnesses": {"s": [1]},
        }
    )

    with pytest.raises(InputNestingError):
        encode_inputs(abi, {"s": {"x": "1"}}, max_depth=0)


def test_encode_rejects_deeply_nested_records_before_coercion() -> None:
    abi = load_abi(
        {
            "parameters": [{"name": "a", "type": {"kind": "field"}}],
            "param_witnesses": {"a": [1]},
        }
    )
    deep: dict = {"x": "1"}
    for _ in range(5000):
        deep = {"x": deep}

    with pytest.raises(InputNestingError) as excinfo:
        encode_inputs(abi, {"a": deep}, max_depth=64)

    assert excinfo.value.limit == 64
    assert excinfo.value.path.startswith("a.x.x")


def test_encode_rejects_witness_lists_that_do_not_match_the_type() -> None:
    abi = load_abi(
        {
            "parameters": [{"name": "a", "type": {"kind": "field"}}],
            "param_witnesses": {"a": [1, 2]},
        }
    )

    with pytest.raises(WitnessLayoutError, match="expects 1 witnesses but the ABI lists 2"):
        encode_inputs(abi, {"a": "1"})


def test_decode_rebuilds_typed_values() -> None:
    abi = load_abi(_struct_abi())
    witness_map = encode_inputs(abi, {"a": "0x10", "b": {"c": True, "d": "ok"}}, 7)

    decoded = decode_inputs(abi, witness_map)

    assert decoded.inputs == {
        "a": FieldValue(element=BN254.element(16)),
        "b": StructValue(
            fields={"c": FieldValue(element=BN254.one()), "d": StringValue(text="ok")}
        ),
    }
    assert decoded.return_value == FieldValue(element=BN254.element(7))


def test_decode_skips_absent_return_value() -> None:
    abi = load_abi(_struct_abi())
    witness_map = encode_inputs(abi, {"a": "1", "b": {"c": True, "d": "ok"}})

    assert decode_inputs(abi, witness_map).return_value is None


def test_decode_reports_missing_witnesses() -> None:
    abi = load_abi(_struct_abi())

    with pytest.raises(WitnessLayoutError, match="missing indices"):
        decode_inputs(abi, WitnessMap({1: BN254.one()}))


def test_decode_rejects_witness_count_mismatch() -> None:
    abi = load_abi(
        {
            "parameters": [{"name": "a", "type": {"kind": "field"}}],
            "param_witnesses": {"a": [1, 2]},
        }
    )

    with pytest.raises(WitnessLayoutError, match="expects 1 witnesses"):
        decode_inputs(abi, WitnessMap({1: BN254.one(), 2: BN254.one()}))


def test_decode_rejects_non_byte_string_witness() -> None:
    abi = load_abi(
        {
            "parameters": [{"name": "s", "type": {"kind": "string", "length": 1}}],
            "param_witnesses": {"s": [1]},
        }
    )

    with pytest.raises(WitnessLayoutError, match="not a byte"):
        decode_inputs(abi, WitnessMap({1: BN254.element(256)}))
