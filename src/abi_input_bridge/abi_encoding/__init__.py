"""ABI encoding exports."""

from .abi_codec import (
    DecodedInputs,
    WitnessLayoutError,
    decode_inputs,
    encode_inputs,
    field_count,
    flatten_input_value,
)

__all__ = [
    "DecodedInputs",
    "WitnessLayoutError",
    "decode_inputs",
    "encode_inputs",
    "field_count",
    "flatten_input_value",
]
