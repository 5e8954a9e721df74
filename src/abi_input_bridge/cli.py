"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import click
import yaml

from abi_input_bridge.abi_encoding import WitnessLayoutError, decode_inputs, encode_inputs
from abi_input_bridge.abi_schema import AbiSchemaError, load_abi_document
from abi_input_bridge.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    default_configuration,
    load_configuration,
    write_placeholder_configuration,
)
from abi_input_bridge.field_codec import InputParserError
from abi_input_bridge.input_coercion import to_json, to_untyped
from abi_input_bridge.witness_bridge import BoundaryProtocolError, from_foreign, to_foreign


class CliError(Exception):
    """Custom CLI error."""


_INTEGER_KEY = re.compile(r"[0-9]+")
_DECIMAL_KEY = re.compile(r"[0-9]+\.[0-9]*")


_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML configuration file",
)
_ABI_OPTION = click.option(
    "--abi",
    "abi_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the program ABI JSON file",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="abi-input-bridge")
@click.option("--verbose", is_flag=True, default=False, help="Emit debug logging to stderr.")
def cli(verbose: bool) -> None:
    """Convert program inputs to witness maps and back."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration with the default settings."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="encode")
@_ABI_OPTION
@click.option(
    "--inputs",
    "inputs_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON or YAML program inputs",
)
@_CONFIG_OPTION
def encode(abi_path: str, inputs_path: str, config_path: str | None) -> None:
    """Encode program inputs into a witness map of 0x-hex strings."""
    try:
        configuration = _resolve_configuration(config_path)
        abi = load_abi_document(abi_path, max_depth=configuration.coercion.max_depth)
        inputs = _read_data_file(inputs_path)
        return_value = inputs.get("return") if isinstance(inputs, Mapping) else None
        witness_map = encode_inputs(
            abi,
            inputs,
            return_value,
            field=configuration.field.prime_field,
            max_depth=configuration.coercion.max_depth,
        )
    except (
        ConfigurationError,
        AbiSchemaError,
        InputParserError,
        WitnessLayoutError,
        OSError,
        ValueError,
    ) as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(to_foreign(witness_map), indent=2))


@cli.command(name="decode")
@_ABI_OPTION
@click.option(
    "--witness",
    "witness_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON witness map of 0x-hex strings",
)
@_CONFIG_OPTION
def decode(abi_path: str, witness_path: str, config_path: str | None) -> None:
    """Decode program inputs from a witness map."""
    try:
        configuration = _resolve_configuration(config_path)
        abi = load_abi_document(abi_path, max_depth=configuration.coercion.max_depth)
        raw_witness = _read_data_file(witness_path)
        if not isinstance(raw_witness, Mapping):
            raise CliError("Witness file must contain a JSON object.")
        witness_map = from_foreign(
            _numeric_keys(raw_witness), field=configuration.field.prime_field
        )
        decoded = decode_inputs(abi, witness_map)
    except (
        ConfigurationError,
        AbiSchemaError,
        BoundaryProtocolError,
        WitnessLayoutError,
        OSError,
        ValueError,
    ) as exc:
        raise CliError(str(exc)) from exc
    payload = {
        "inputs": {name: to_json(to_untyped(value)) for name, value in decoded.inputs.items()},
        "return_value": (
            to_json(to_untyped(decoded.return_value))
            if decoded.return_value is not None
            else None
        ),
    }
    click.echo(json.dumps(payload, indent=2))


def _resolve_configuration(config_path: str | None) -> Configuration:
    if config_path is None:
        return default_configuration()
    return load_configuration(config_path)


def _read_data_file(data_path: str) -> Any:
    path = Path(data_path)
    if not path.exists():
        raise CliError(f"Input file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise CliError(f"Invalid JSON in {path}: {exc}") from exc
        except RecursionError as exc:
            raise CliError(f"JSON in {path} is nested too deeply.") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CliError(f"Invalid YAML in {path}: {exc}") from exc
    except RecursionError as exc:
        raise CliError(f"YAML in {path} is nested too deeply.") from exc


def _numeric_keys(raw_witness: Mapping[Any, Any]) -> dict[Any, Any]:
    # JSON object keys arrive as text; the bridge expects numeric keys.
    # Decimal keys pass through as floats so the bridge can reject fractions.
    numeric: dict[Any, Any] = {}
    for key, value in raw_witness.items():
        if isinstance(key, (int, float)) and not isinstance(key, bool):
            numeric[key] = value
        elif isinstance(key, str) and _INTEGER_KEY.fullmatch(key):
            numeric[int(key)] = value
        elif isinstance(key, str) and _DECIMAL_KEY.fullmatch(key):
            numeric[float(key)] = value
        else:
            raise CliError(f"Witness key {key!r} is not a number.")
    return numeric


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
