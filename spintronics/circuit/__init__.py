"""Circuit model — parts, chains, level occupancy and grid layout.

Submodules:
  models   Enums, snapshot dataclasses and error types.
  layout   Square grid layout (grid_size, grid_positions).
  arrange  Optional non-crossing chain member ordering (shapely).
  engine   The Circuit class (create parts, connect, save).
"""

from .models import (
    Component, ChainLevel, Rotation, Part, Chain, PartIndex, ChainIndex,
    CircuitError, LevelCapacityError, UnknownPartError,
    DuplicateMemberError, EmptyChainError, PartValueError,
    DEFAULT_ROTATION, LEVELS_PER_PART,
)
from .layout import grid_size, grid_position, grid_positions
from .arrange import arrange_members, chain_is_simple
from .engine import Circuit

__all__ = [
    # Models
    "Component", "ChainLevel", "Rotation", "Part", "Chain",
    "PartIndex", "ChainIndex", "DEFAULT_ROTATION", "LEVELS_PER_PART",
    # Errors
    "CircuitError", "LevelCapacityError", "UnknownPartError",
    "DuplicateMemberError", "EmptyChainError", "PartValueError",
    # Layout
    "grid_size", "grid_position", "grid_positions",
    # Arrangement
    "arrange_members", "chain_is_simple",
    # Engine
    "Circuit",
]
