"""Finite field entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PrimeField:
    """Prime-characteristic field identified by its modulus."""

    name: str
    modulus: int

    def element(self, value: int) -> FieldElement:
        """Map an arbitrary integer into the field by true modular reduction."""
        return FieldElement(value=value % self.modulus, field=self)

    def zero(self) -> FieldElement:
        return FieldElement(value=0, field=self)

    def one(self) -> FieldElement:
        return FieldElement(value=1, field=self)


@dataclass(frozen=True)
class FieldElement:
    """Field value held as its canonical residue."""

    value: int
    field: PrimeField

    def __post_init__(self) -> None:
        if not 0 <= self.value < self.field.modulus:
            raise ValueError(
                f"{self.value} is outside the canonical range of field {self.field.name}."
            )

    def __neg__(self) -> FieldElement:
        return self.field.element(-self.value)

    def is_zero(self) -> bool:
        return self.value == 0


BN254 = PrimeField(
    name="bn254",
    modulus=21888242871839275222246405745257275088548364400416034343698204186575808495617,
)

_NAMED_FIELDS = {BN254.name: BN254}


def resolve_prime_field(identifier: str | int) -> PrimeField:
    """Return a named field, or a custom field for a decimal / ``0x`` hex modulus."""
    if isinstance(identifier, bool):
        raise ValueError("Field modulus must be a name or an integer.")
    if isinstance(identifier, int):
        modulus = identifier
    else:
        normalized = identifier.strip().lower()
        if normalized in _NAMED_FIELDS:
            return _NAMED_FIELDS[normalized]
        try:
            modulus = int(normalized, 16) if normalized.startswith("0x") else int(normalized, 10)
        except ValueError as exc:
            raise ValueError(f"Unknown field: {identifier}") from exc
    if modulus < 2:
        raise ValueError(f"Field modulus must be at least 2, got {modulus}.")
    for known in _NAMED_FIELDS.values():
        if known.modulus == modulus:
            return known
    return PrimeField(name=f"custom-{modulus:x}", modulus=modulus)
