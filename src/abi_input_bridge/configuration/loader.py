"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from abi_input_bridge.field_codec.field_models import BN254, resolve_prime_field
from abi_input_bridge.input_coercion.coercion_engine import DEFAULT_MAX_DEPTH

from .runtime_settings import CoercionSettings, Configuration, FieldSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        field=_parse_field_section(parsed.get("field")),
        coercion=_parse_coercion_section(parsed.get("coercion")),
    )


def _parse_field_section(value: Any) -> FieldSettings:
    section = _optional_mapping(value, "field")
    modulus = section.get("modulus", BN254.name)
    if isinstance(modulus, bool) or not isinstance(modulus, (str, int)):
        raise ConfigurationError("field.modulus must be a field name or an integer.")
    try:
        prime_field = resolve_prime_field(modulus)
    except ValueError as exc:
        raise ConfigurationError(f"field.modulus is invalid: {exc}") from exc
    return FieldSettings(prime_field=prime_field)


def _parse_coercion_section(value: Any) -> CoercionSettings:
    section = _optional_mapping(value, "coercion")
    max_depth = _require_positive_int(
        section.get("max_depth", DEFAULT_MAX_DEPTH), "coercion.max_depth"
    )
    return CoercionSettings(max_depth=max_depth)


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
