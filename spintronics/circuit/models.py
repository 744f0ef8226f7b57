"""Circuit dataclasses, enums and error types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


PartIndex = int
ChainIndex = int


# ── Enums ──────────────────────────────────────────────────────────


class Component(str, Enum):
    """Kind of part.  The value is the name used in save files."""

    MOTOR = "motor"
    RESISTOR = "resistor"
    JUNCTION = "junction"


class ChainLevel(IntEnum):
    """Physical terminal tier on a part, lowest first."""

    BOTTOM = 0
    MIDDLE = 1
    TOP = 2


class Rotation(Enum):
    """Turning direction of a chain."""

    COUNTER_CLOCKWISE = "ccw"
    CLOCKWISE = "cw"


LEVELS_PER_PART = len(ChainLevel)
LEVEL_SEARCH_ORDER = (ChainLevel.BOTTOM, ChainLevel.MIDDLE, ChainLevel.TOP)

# Every chain built through Circuit.connect turns this way.
DEFAULT_ROTATION = Rotation.CLOCKWISE


# ── Records ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Part:
    """A placed component as seen from outside the circuit."""

    index: PartIndex
    kind: Component
    x: int
    y: int
    value: int | None = None        # resistance, resistors only


@dataclass(frozen=True)
class Chain:
    """A chain joining ``members`` (in order) on one shared level."""

    index: ChainIndex
    level: ChainLevel
    rotation: Rotation
    members: tuple[PartIndex, ...]


# ── Errors ─────────────────────────────────────────────────────────


class CircuitError(Exception):
    """Base class for rejected circuit operations."""


class LevelCapacityError(CircuitError):
    """Raised when no level is free on every member of a new chain.

    Attributes:
        members:   the requested member list, in order.
        occupancy: per-member snapshot of the three level slots
                   (chain index or None), taken when the search failed.
    """

    def __init__(
        self,
        members: tuple[PartIndex, ...],
        occupancy: dict[PartIndex, tuple[ChainIndex | None, ...]],
    ) -> None:
        self.members = members
        self.occupancy = occupancy
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        busy = ", ".join(
            f"{idx}: {list(slots)}" for idx, slots in self.occupancy.items()
        )
        return (
            f"No level is free on all of parts {list(self.members)} "
            f"(occupancy {busy})"
        )


class UnknownPartError(CircuitError):
    """Raised when a chain references a part index that does not exist."""

    def __init__(self, index: int, part_count: int) -> None:
        self.index = index
        self.part_count = part_count
        if part_count:
            valid = f"valid indices: 0-{part_count - 1}"
        else:
            valid = "the circuit has no parts"
        super().__init__(f"Part index {index} does not exist ({valid})")


class DuplicateMemberError(CircuitError):
    """Raised when the same part appears twice in one chain."""

    def __init__(self, index: PartIndex) -> None:
        self.index = index
        super().__init__(f"Part {index} appears more than once in the chain")


class EmptyChainError(CircuitError):
    """Raised when a chain is requested with no members."""

    def __init__(self) -> None:
        super().__init__("A chain needs at least one member part")


class PartValueError(CircuitError, ValueError):
    """Raised when a part's value does not fit its kind.

    Resistors need an integer value; motors and junctions take none.
    """

    def __init__(self, kind: Component, value: object) -> None:
        self.kind = kind
        self.value = value
        if kind is Component.RESISTOR:
            msg = f"Resistor value must be an integer, got {value!r}"
        else:
            msg = f"{kind.value.capitalize()} does not take a value, got {value!r}"
        super().__init__(msg)
