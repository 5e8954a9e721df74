"""Schema-directed coercion tests."""

from __future__ import annotations

import pytest
from abi_input_bridge.abi_schema.schema_models import (
    AbiType,
    ArrayType,
    BooleanType,
    FieldType,
    IntegerType,
    StringType,
    StructType,
)
from abi_input_bridge.field_codec.field_models import BN254, PrimeField
from abi_input_bridge.field_codec.text_encoding import ParseHexStrError, ParseStrError
from abi_input_bridge.input_coercion.coercion_engine import (
    AbiTypeMismatchError,
    InputNestingError,
    MissingArgumentError,
    coerce,
)
from abi_input_bridge.input_coercion.input_values import (
    FieldValue,
    FlagArrayValue,
    FlagValue,
    IntegerArrayValue,
    IntegerValue,
    RecordValue,
    SequenceValue,
    StringValue,
    StructValue,
    TextArrayValue,
    TextValue,
)


def _field(value: int) -> FieldValue:
    return FieldValue(element=BN254.element(value))


def _nested_struct(depth: int) -> AbiType:
    node: AbiType = FieldType()
    for _ in range(depth):
        node = StructType(fields=(("inner", node),))
    return node


@pytest.mark.parametrize(
    "abi_type", [FieldType(), IntegerType(width=32), BooleanType()]
)
def test_text_against_scalar_types_parses_numeric(abi_type: AbiType) -> None:
    assert coerce(TextValue(text="0x2a"), abi_type, "arg") == _field(42)
    assert coerce(TextValue(text="-3"), abi_type, "arg") == FieldValue(element=-BN254.element(3))


def test_text_against_string_type_passes_through_unchanged() -> None:
    assert coerce(TextValue(text="not a number"), StringType(length=12), "arg") == StringValue(
        text="not a number"
    )


@pytest.mark.parametrize(
    "abi_type",
    [
        ArrayType(length=2, element=FieldType()),
        StructType(fields=(("a", FieldType()),)),
        StructType(fields=(("a", StructType(fields=(("b", FieldType()),))),)),
    ],
)
def test_text_against_array_or_struct_is_a_type_mismatch(abi_type: AbiType) -> None:
    with pytest.raises(AbiTypeMismatchError) as excinfo:
        coerce(TextValue(text="1"), abi_type, "arg")

    assert excinfo.value.expected == abi_type
    assert excinfo.value.path == "arg"


def test_nested_text_against_struct_reports_nested_path() -> None:
    schema = StructType(fields=(("a", StructType(fields=(("b", FieldType()),))),))

    with pytest.raises(AbiTypeMismatchError) as excinfo:
        coerce(RecordValue(entries={"a": TextValue(text="1")}), schema, "arg")

    assert excinfo.value.path == "arg.a"


def test_integer_and_flag_inputs_become_field_elements() -> None:
    assert coerce(IntegerValue(value=2**64 - 1), FieldType(), "arg") == _field(2**64 - 1)
    assert coerce(FlagValue(flag=True), BooleanType(), "arg") == _field(1)
    assert coerce(FlagValue(flag=False), BooleanType(), "arg") == _field(0)


def test_numeric_input_against_string_type_is_accepted_as_field() -> None:
    assert coerce(IntegerValue(value=5), StringType(length=1), "arg") == _field(5)


def test_array_inputs_become_sequences() -> None:
    array_type = ArrayType(length=3, element=FieldType())

    assert coerce(IntegerArrayValue(items=(1, 2, 3)), array_type, "arg") == SequenceValue(
        elements=(BN254.element(1), BN254.element(2), BN254.element(3))
    )
    assert coerce(TextArrayValue(items=("0x1", "-1")), array_type, "arg") == SequenceValue(
        elements=(BN254.one(), -BN254.one())
    )
    assert coerce(FlagArrayValue(items=(True, False)), array_type, "arg") == SequenceValue(
        elements=(BN254.one(), BN254.zero())
    )


def test_array_length_is_not_checked_during_coercion() -> None:
    result = coerce(IntegerArrayValue(items=(1,)), ArrayType(length=4, element=FieldType()), "arg")

    assert result == SequenceValue(elements=(BN254.one(),))


def test_array_inputs_against_struct_are_a_type_mismatch() -> None:
    with pytest.raises(AbiTypeMismatchError):
        coerce(IntegerArrayValue(items=(1,)), StructType(fields=(("a", FieldType()),)), "arg")


def test_first_bad_array_element_aborts_the_array() -> None:
    with pytest.raises(ParseStrError) as excinfo:
        coerce(
            TextArrayValue(items=("1", "bad", "0xzz")),
            ArrayType(length=3, element=FieldType()),
            "arg",
        )

    assert excinfo.value.text == "bad"


def test_hex_error_surfaces_from_nested_field() -> None:
    schema = StructType(fields=(("a", FieldType()),))

    with pytest.raises(ParseHexStrError) as excinfo:
        coerce(RecordValue(entries={"a": TextValue(text="0xq")}), schema, "arg")

    assert excinfo.value.text == "0xq"


@pytest.mark.parametrize(
    "abi_type", [FieldType(), StringType(length=1), ArrayType(length=1, element=FieldType())]
)
def test_record_against_non_struct_is_a_type_mismatch(abi_type: AbiType) -> None:
    with pytest.raises(AbiTypeMismatchError):
        coerce(RecordValue(entries={}), abi_type, "arg")


def test_struct_follows_schema_order_and_ignores_extra_keys() -> None:
    schema = StructType(
        fields=(("a", FieldType()), ("b", StructType(fields=(("c", BooleanType()),))))
    )
    record = RecordValue(
        entries={
            "extra": TextValue(text="ignored"),
            "b": RecordValue(entries={"c": FlagValue(flag=True)}),
            "a": TextValue(text="5"),
        }
    )

    result = coerce(record, schema, "arg")

    assert result == StructValue(fields={"a": _field(5), "b": StructValue(fields={"c": _field(1)})})
    assert isinstance(result, StructValue)
    assert list(result.fields) == ["a", "b"]


def test_missing_struct_field_names_the_dotted_path() -> None:
    parameter_type = StructType(fields=(("b", FieldType()),))
    schema = StructType(fields=(("a", parameter_type),))

    with pytest.raises(MissingArgumentError) as first:
        coerce(RecordValue(entries={}), parameter_type, "a")
    with pytest.raises(MissingArgumentError) as nested:
        coerce(RecordValue(entries={"a": RecordValue(entries={})}), schema, "root")

    assert first.value.path == "a.b"
    assert nested.value.path == "root.a.b"


def test_missing_field_with_seeded_path() -> None:
    with pytest.raises(MissingArgumentError) as excinfo:
        coerce(RecordValue(entries={}), StructType(fields=(("x", FieldType()),)), "arg")

    assert excinfo.value.path == "arg.x"
    assert "arg.x" in str(excinfo.value)


def test_first_error_wins_in_declared_order() -> None:
    schema = StructType(fields=(("a", FieldType()), ("b", FieldType())))
    record = RecordValue(entries={"b": TextValue(text="bad")})

    with pytest.raises(MissingArgumentError) as excinfo:
        coerce(record, schema, "arg")

    assert excinfo.value.path == "arg.a"


def test_nesting_beyond_limit_is_rejected() -> None:
    schema = _nested_struct(3)
    record = RecordValue(
        entries={
            "inner": RecordValue(
                entries={"inner": RecordValue(entries={"inner": TextValue(text="1")})}
            )
        }
    )

    assert coerce(record, schema, "arg", max_depth=3) == StructValue(
        fields={"inner": StructValue(fields={"inner": StructValue(fields={"inner": _field(1)})})}
    )
    with pytest.raises(InputNestingError) as excinfo:
        coerce(record, schema, "arg", max_depth=2)

    assert excinfo.value.path == "arg.inner.inner.inner"
    assert excinfo.value.limit == 2


def test_coercion_uses_the_given_field() -> None:
    small = PrimeField(name="f7", modulus=7)

    assert coerce(IntegerValue(value=9), FieldType(), "arg", field=small) == FieldValue(
        element=small.element(2)
    )
