"""Save-file dataclasses — the document the simulator loads."""

from __future__ import annotations

from dataclasses import dataclass, field

from spintronics.circuit.models import ChainLevel, Component, PartIndex, Rotation
from spintronics.config import SAVE_DEFAULTS


@dataclass
class Dimensions:
    width: float = SAVE_DEFAULTS.view_width
    height: float = SAVE_DEFAULTS.view_height


@dataclass
class PartRecord:
    """A part with its world position."""

    type: Component
    x: int
    y: int
    value: int | None = None        # omitted from the file when None


@dataclass
class Connection:
    """Where a chain meets one part.

    Level and rotation are chain-wide, but the file repeats them on
    every connection.
    """

    part_index: PartIndex
    level: ChainLevel
    rotation: Rotation


@dataclass
class ChainRecord:
    connections: list[Connection] = field(default_factory=list)

    @classmethod
    def from_members(
        cls, members: list[PartIndex], level: ChainLevel, rotation: Rotation,
    ) -> ChainRecord:
        return cls(connections=[Connection(m, level, rotation) for m in members])


@dataclass
class SaveFile:
    """Complete save document."""

    parts: list[PartRecord] = field(default_factory=list)
    chains: list[ChainRecord] = field(default_factory=list)
    version: int = SAVE_DEFAULTS.version
    zoom: float = SAVE_DEFAULTS.zoom
    view_dimensions: Dimensions = field(default_factory=Dimensions)


class SaveEncodingError(Exception):
    """Raised when in-memory circuit state cannot be encoded.

    Indicates a broken invariant in the circuit model, not bad input.
    """


class SaveFormatError(ValueError):
    """Raised when a save document is missing fields or has bad values."""
