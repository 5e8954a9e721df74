"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from abi_input_bridge.field_codec.field_models import BN254, PrimeField
from abi_input_bridge.input_coercion.coercion_engine import DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class FieldSettings:
    """Finite field used for every conversion."""

    prime_field: PrimeField


@dataclass(frozen=True)
class CoercionSettings:
    """Limits applied while coercing untrusted input."""

    max_depth: int


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    field: FieldSettings
    coercion: CoercionSettings


def default_configuration() -> Configuration:
    """Return the configuration used when no file is given."""
    return Configuration(
        path=None,
        field=FieldSettings(prime_field=BN254),
        coercion=CoercionSettings(max_depth=DEFAULT_MAX_DEPTH),
    )
