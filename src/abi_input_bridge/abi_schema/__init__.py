"""ABI schema exports."""

from .schema_loader import AbiSchemaError, load_abi, load_abi_document, parse_abi_type
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

__all__ = [
    "Abi",
    "AbiParameter",
    "AbiType",
    "ArrayType",
    "BooleanType",
    "FieldType",
    "IntegerType",
    "StringType",
    "StructType",
    "AbiSchemaError",
    "load_abi",
    "load_abi_document",
    "parse_abi_type",
]
