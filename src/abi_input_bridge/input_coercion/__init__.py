"""Input coercion exports."""

from .coercion_engine import (
    DEFAULT_MAX_DEPTH,
    AbiTypeMismatchError,
    InputNestingError,
    MissingArgumentError,
    coerce,
)
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
from .json_shapes import UnsupportedJsonValueError, classify_json, to_json, to_untyped

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "AbiTypeMismatchError",
    "InputNestingError",
    "MissingArgumentError",
    "UnsupportedJsonValueError",
    "coerce",
    "classify_json",
    "to_json",
    "to_untyped",
    "FieldValue",
    "FlagArrayValue",
    "FlagValue",
    "InputValue",
    "IntegerArrayValue",
    "IntegerValue",
    "RecordValue",
    "SequenceValue",
    "StringValue",
    "StructValue",
    "TextArrayValue",
    "TextValue",
    "UntypedValue",
]
