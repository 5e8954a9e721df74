"""ABI schema loading service."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .schema_models import (
    Abi,
    AbiParameter,
    AbiType,
    ArrayType,
    BooleanType,
    FieldType,
    IntegerType,
    StringType,
    StructType,
)


DEFAULT_TYPE_DEPTH = 64


class AbiSchemaError(Exception):
    """Raised for ABI parsing failures."""


def load_abi_document(abi_path: Path | str, *, max_depth: int = DEFAULT_TYPE_DEPTH) -> Abi:
    """Read and parse an ABI JSON file."""
    path = Path(abi_path)
    if not path.exists():
        raise AbiSchemaError(f"ABI file not found: {path}")
    try:
        root = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise AbiSchemaError(f"Invalid ABI JSON: {exc}") from exc
    except RecursionError as exc:
        raise AbiSchemaError(f"ABI JSON in {path} is nested too deeply.") from exc
    return load_abi(root, max_depth=max_depth)


def load_abi(root: Any, *, max_depth: int = DEFAULT_TYPE_DEPTH) -> Abi:
    """Build an ABI from its decoded JSON form.

    Type nodes nested more than ``max_depth`` arrays or structs deep are rejected.
    """
    if not isinstance(root, Mapping):
        raise AbiSchemaError("ABI root must be an object.")
    raw_parameters = root.get("parameters")
    if not isinstance(raw_parameters, Sequence) or isinstance(raw_parameters, str):
        raise AbiSchemaError("ABI requires a parameters list.")

    parameters: list[AbiParameter] = []
    seen_names: set[str] = set()
    for raw_parameter in raw_parameters:
        if not isinstance(raw_parameter, Mapping):
            raise AbiSchemaError("ABI parameters must be objects.")
        name = _require_name(raw_parameter.get("name"), "parameter")
        if name in seen_names:
            raise AbiSchemaError(f"Duplicate ABI parameter: {name}")
        seen_names.add(name)
        parameters.append(
            AbiParameter(
                name=name,
                abi_type=parse_abi_type(raw_parameter.get("type"), path=name, max_depth=max_depth),
                visibility=str(raw_parameter.get("visibility", "private")),
            )
        )

    param_witnesses = _parse_param_witnesses(root.get("param_witnesses"), seen_names)
    raw_return_type = root.get("return_type")
    return_type = (
        parse_abi_type(raw_return_type, path="return", max_depth=max_depth)
        if raw_return_type is not None
        else None
    )
    return Abi(
        parameters=tuple(parameters),
        param_witnesses=param_witnesses,
        return_type=return_type,
        return_witnesses=_parse_indices(root.get("return_witnesses") or [], "return_witnesses"),
    )


def parse_abi_type(
    node: Any, *, path: str = "", max_depth: int = DEFAULT_TYPE_DEPTH, depth: int = 0
) -> AbiType:
    """Parse one ``{"kind": ...}`` type node."""
    label = path or "<root>"
    if depth > max_depth:
        raise AbiSchemaError(
            f"ABI type for {label} exceeds the maximum nesting depth of {max_depth}."
        )
    if not isinstance(node, Mapping):
        raise AbiSchemaError(f"ABI type for {label} must be an object.")
    kind = node.get("kind")
    if kind == "field":
        return FieldType()
    if kind == "boolean":
        return BooleanType()
    if kind == "integer":
        sign = node.get("sign", "unsigned")
        if sign not in ("signed", "unsigned"):
            raise AbiSchemaError(f"Unknown integer sign for {label}: {sign}")
        return IntegerType(width=_require_size(node.get("width"), label), signed=sign == "signed")
    if kind == "string":
        return StringType(length=_require_size(node.get("length"), label))
    if kind == "array":
        return ArrayType(
            length=_require_size(node.get("length"), label),
            element=parse_abi_type(
                node.get("type"), path=f"{path}[]", max_depth=max_depth, depth=depth + 1
            ),
        )
    if kind == "struct":
        return StructType(
            fields=_parse_struct_fields(node.get("fields"), path, max_depth, depth + 1),
            name=str(node.get("path", "")),
        )
    raise AbiSchemaError(f"Unsupported ABI type kind for {label}: {kind}")


def _parse_struct_fields(
    raw_fields: Any, path: str, max_depth: int, depth: int
) -> tuple[tuple[str, AbiType], ...]:
    label = path or "<root>"
    entries: list[tuple[Any, Any]] = []
    # Older ABIs carry struct fields as an object keyed by field name.
    if isinstance(raw_fields, Mapping):
        entries = list(raw_fields.items())
    elif isinstance(raw_fields, Sequence) and not isinstance(raw_fields, str):
        for raw_field in raw_fields:
            if not isinstance(raw_field, Mapping):
                raise AbiSchemaError(f"Struct fields of {label} must be objects.")
            entries.append((raw_field.get("name"), raw_field.get("type")))
    else:
        raise AbiSchemaError(f"Struct {label} requires fields.")

    fields: list[tuple[str, AbiType]] = []
    seen: set[str] = set()
    for raw_name, raw_type in entries:
        name = _require_name(raw_name, "struct field")
        field_path = name if not path else f"{path}.{name}"
        if name in seen:
            raise AbiSchemaError(f"Duplicate struct field: {field_path}")
        seen.add(name)
        fields.append(
            (name, parse_abi_type(raw_type, path=field_path, max_depth=max_depth, depth=depth))
        )
    return tuple(fields)


def _parse_param_witnesses(
    value: Any, parameter_names: set[str]
) -> Mapping[str, tuple[int, ...]]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise AbiSchemaError("param_witnesses must be an object.")
    witnesses: dict[str, tuple[int, ...]] = {}
    for name, indices in value.items():
        if name not in parameter_names:
            raise AbiSchemaError(f"param_witnesses references unknown parameter: {name}")
        witnesses[name] = _parse_indices(indices, f"param_witnesses.{name}")
    return witnesses


def _parse_indices(value: Any, label: str) -> tuple[int, ...]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise AbiSchemaError(f"{label} must be a list of witness indices.")
    indices: list[int] = []
    for item in value:
        # {"start": a, "end": b} is a half-open witness range.
        if isinstance(item, Mapping):
            start = _require_index(item.get("start"), label)
            end = _require_index(item.get("end"), label)
            indices.extend(range(start, end))
            continue
        indices.append(_require_index(item, label))
    return tuple(indices)


def _require_index(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise AbiSchemaError(f"{label} entries must be non-negative integers.")
    return value


def _require_size(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise AbiSchemaError(f"ABI type for {label} requires a non-negative integer size.")
    return value


def _require_name(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value:
        raise AbiSchemaError(f"ABI {label} name must be a non-empty string.")
    return value
