"""Canonical text encoding of field elements and numeric literal parsing."""

from __future__ import annotations

import re

from .field_models import BN254, FieldElement, PrimeField

HEX_PREFIX = "0x"

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")
_I128_MIN = -(2**127)
_I128_MAX = 2**127 - 1


class InputParserError(Exception):
    """Base class for recoverable input conversion failures."""


class ParseHexStrError(InputParserError):
    """Raised when a ``0x``-prefixed literal is not valid hexadecimal."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Could not parse hex value {text!r}")
        self.text = text


class ParseStrError(InputParserError):
    """Raised when a non-prefixed literal is not a valid signed 128-bit integer."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Could not parse value {text!r}: {reason}")
        self.text = text
        self.reason = reason


def encode_field_element(element: FieldElement) -> str:
    """Render ``0x`` followed by the lowercase hex digits of the canonical residue."""
    return f"{HEX_PREFIX}{element.value:x}"


def decode_field_element(text: str, field: PrimeField = BN254) -> FieldElement:
    """Parse a ``0x``-prefixed hex string into a field element.

    Values at or above the modulus are reduced into the field. A bare ``0x`` is zero.

    Raises:
      ParseHexStrError: If the prefix is missing or the digits are not hexadecimal.
    """
    if not text.startswith(HEX_PREFIX):
        raise ParseHexStrError(text)
    digits = text[len(HEX_PREFIX) :]
    if not _HEX_DIGITS.fullmatch(digits):
        raise ParseHexStrError(text)
    return field.element(int(digits or "0", 16))


def parse_numeric(text: str, field: PrimeField = BN254) -> FieldElement:
    """Parse a hex or signed decimal literal into a field element.

    Negative decimals map to the additive inverse of their absolute value.

    Raises:
      ParseHexStrError: For an invalid ``0x`` literal.
      ParseStrError: For a decimal literal that is not a signed 128-bit integer.
    """
    if text.startswith(HEX_PREFIX):
        return decode_field_element(text, field)
    if not _SIGNED_DECIMAL.fullmatch(text):
        reason = "cannot parse integer from empty string" if not text else "invalid digit found"
        raise ParseStrError(text, reason)
    value = int(text, 10)
    if value > _I128_MAX:
        raise ParseStrError(text, "number too large to fit in target type")
    if value < _I128_MIN:
        raise ParseStrError(text, "number too small to fit in target type")
    magnitude = field.element(abs(value))
    return -magnitude if value < 0 else magnitude
