"""Shared constants for circuit layout and the save-file envelope.

The **layout** (which spaces parts on the grid) and the **save encoder**
(which writes the fixed document header) both read their numbers from
here so the values live in one place.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutRules:
    """Grid placement rules.

    All distances are in simulator units.
    """

    part_spacing: int = 300
    """Distance between neighbouring grid slots, on both axes."""

    invert_y: bool = True
    """The simulator has +y pointing down, so grid rows grow towards -y."""


@dataclass(frozen=True)
class SaveDefaults:
    """Fixed envelope written at the top of every save file.

    None of these are derived from the circuit; the simulator expects
    them to be present.
    """

    version: int = 1
    """Simulator save-format version."""

    zoom: float = 1.0
    """Camera zoom, 0.0 to 1.0."""

    view_width: float = 2000.0
    view_height: float = 2000.0
    """Camera view dimensions."""


# Module-level singletons, importable everywhere.
LAYOUT_RULES = LayoutRules()
SAVE_DEFAULTS = SaveDefaults()
