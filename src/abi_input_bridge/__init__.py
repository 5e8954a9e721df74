"""Conversion of loosely typed program inputs into field-element witness maps."""

from .field_codec import (
    BN254,
    FieldElement,
    InputParserError,
    ParseHexStrError,
    ParseStrError,
    PrimeField,
    decode_field_element,
    encode_field_element,
    parse_numeric,
)
from .input_coercion import (
    AbiTypeMismatchError,
    InputNestingError,
    MissingArgumentError,
    UnsupportedJsonValueError,
    classify_json,
    coerce,
)
from .witness_bridge import BoundaryProtocolError, WitnessMap, from_foreign, to_foreign

__all__ = [
    "BN254",
    "FieldElement",
    "PrimeField",
    "InputParserError",
    "ParseHexStrError",
    "ParseStrError",
    "AbiTypeMismatchError",
    "MissingArgumentError",
    "InputNestingError",
    "UnsupportedJsonValueError",
    "BoundaryProtocolError",
    "WitnessMap",
    "classify_json",
    "coerce",
    "decode_field_element",
    "encode_field_element",
    "parse_numeric",
    "from_foreign",
    "to_foreign",
]
