"""Witness map entities."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from abi_input_bridge.field_codec.field_models import FieldElement

WITNESS_INDEX_MAX = 2**32 - 1


class WitnessMap(Mapping[int, FieldElement]):
    """Field elements keyed by unique witness index, iterated in ascending index order."""

    def __init__(
        self,
        entries: Mapping[int, FieldElement] | Iterable[tuple[int, FieldElement]] = (),
    ) -> None:
        self._entries: dict[int, FieldElement] = {}
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        for index, element in pairs:
            self.insert(index, element)

    def insert(self, index: int, element: FieldElement) -> None:
        """Set ``index`` to ``element``, replacing any earlier value."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Witness index must be an integer, got {index!r}.")
        if not 0 <= index <= WITNESS_INDEX_MAX:
            raise ValueError(f"Witness index {index} is outside 0..{WITNESS_INDEX_MAX}.")
        if not isinstance(element, FieldElement):
            raise TypeError(f"Witness value must be a field element, got {element!r}.")
        self._entries[index] = element

    def __getitem__(self, index: int) -> FieldElement:
        return self._entries[index]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        inner = ", ".join(f"{index}: {self._entries[index].value:#x}" for index in self)
        return f"WitnessMap({{{inner}}})"
