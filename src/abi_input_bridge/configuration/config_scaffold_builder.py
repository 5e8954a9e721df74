"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "abi-input-bridge.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for abi-input-bridge.
# Every key is optional; remove a key to use its default.

field:
  # Named field (bn254) or a prime modulus as decimal or 0x-prefixed hex.
  modulus: "bn254"

coercion:
  # Maximum struct nesting accepted from input files.
  max_depth: 64
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
