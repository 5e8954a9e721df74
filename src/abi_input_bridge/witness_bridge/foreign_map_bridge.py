"""Conversion between witness maps and their foreign-facing key/string form."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from abi_input_bridge.field_codec.field_models import BN254, FieldElement, PrimeField
from abi_input_bridge.field_codec.text_encoding import (
    ParseHexStrError,
    decode_field_element,
    encode_field_element,
)

from .witness_models import WITNESS_INDEX_MAX, WitnessMap

_LOGGER = logging.getLogger("abi_input_bridge.witness_bridge")
_LOGGER.addHandler(logging.NullHandler())

ForeignMap = dict[int, str]


class BoundaryProtocolError(Exception):
    """Raised when foreign data violates the boundary contract.

    This is a fault in the caller that built the foreign map, not a user input
    error, and is intentionally not an ``InputParserError``.
    """


def to_foreign(witness_map: Mapping[int, FieldElement]) -> ForeignMap:
    """Return a fresh foreign map with one ``0x`` hex string per witness index."""
    foreign: ForeignMap = {}
    for index in sorted(witness_map):
        foreign[index] = encode_field_element(witness_map[index])
    _LOGGER.debug("Converted %d witnesses to foreign map", len(foreign))
    return foreign


def from_foreign(
    foreign_map: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
    *,
    field: PrimeField = BN254,
) -> WitnessMap:
    """Rebuild a witness map from foreign entries; later entries win on index collision.

    Raises:
      BoundaryProtocolError: For a key that is not a whole number in the witness
        index range, or a value that is not a valid ``0x`` hex string.
    """
    pairs = foreign_map.items() if isinstance(foreign_map, Mapping) else foreign_map
    witness_map = WitnessMap()
    received = 0
    for key, value in pairs:
        witness_map.insert(_witness_index(key), _witness_value(value, field))
        received += 1
    _LOGGER.debug("Converted %d foreign entries to %d witnesses", received, len(witness_map))
    return witness_map


def _witness_index(key: Any) -> int:
    if isinstance(key, bool) or not isinstance(key, (int, float)):
        raise BoundaryProtocolError(f"Witness key must be a number, got {key!r}")
    if isinstance(key, float) and not (math.isfinite(key) and key.is_integer()):
        raise BoundaryProtocolError(f"Witness key must be a whole number, got {key!r}")
    index = int(key)
    if not 0 <= index <= WITNESS_INDEX_MAX:
        raise BoundaryProtocolError(f"Witness key {key!r} is outside 0..{WITNESS_INDEX_MAX}")
    return index


def _witness_value(value: Any, field: PrimeField) -> FieldElement:
    if not isinstance(value, str):
        raise BoundaryProtocolError("failed to parse field element from non-string")
    try:
        return decode_field_element(value, field)
    except ParseHexStrError as exc:
        raise BoundaryProtocolError(f"Invalid hex string: '{value}'") from exc
