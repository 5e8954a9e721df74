"""Field element codec exports."""

from .field_models import BN254, FieldElement, PrimeField, resolve_prime_field
from .text_encoding import (
    InputParserError,
    ParseHexStrError,
    ParseStrError,
    decode_field_element,
    encode_field_element,
    parse_numeric,
)

__all__ = [
    "BN254",
    "FieldElement",
    "PrimeField",
    "resolve_prime_field",
    "InputParserError",
    "ParseHexStrError",
    "ParseStrError",
    "decode_field_element",
    "encode_field_element",
    "parse_numeric",
]
