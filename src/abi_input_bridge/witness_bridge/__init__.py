"""Witness bridge exports."""

from .foreign_map_bridge import BoundaryProtocolError, ForeignMap, from_foreign, to_foreign
from .witness_models import WITNESS_INDEX_MAX, WitnessMap

__all__ = [
    "BoundaryProtocolError",
    "ForeignMap",
    "WITNESS_INDEX_MAX",
    "WitnessMap",
    "from_foreign",
    "to_foreign",
]
