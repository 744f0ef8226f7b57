"""Circuit model — part registration, grid placement and chain levels."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from spintronics.config import LAYOUT_RULES, LayoutRules

from .layout import grid_positions
from .models import (
    Chain, ChainIndex, ChainLevel, Component, Part, PartIndex, Rotation,
    DuplicateMemberError, EmptyChainError, LevelCapacityError, PartValueError,
    UnknownPartError,
    DEFAULT_ROTATION, LEVEL_SEARCH_ORDER, LEVELS_PER_PART,
)


log = logging.getLogger(__name__)


class Circuit:
    """A set of parts joined by chains.

    Parts and chains are append-only.  Each part is identified by the
    index returned when it was created; chains refer to parts by those
    indices only.

    Example::

        circuit = Circuit()
        motor = circuit.motor()
        r1 = circuit.resistor(1000)
        circuit.connect([motor, r1])
        circuit.save("circuit.spin")
    """

    def __init__(self, rules: LayoutRules = LAYOUT_RULES) -> None:
        self.rules = rules
        self._parts: list[tuple[Component, int | None]] = []
        self._positions: list[tuple[int, int]] = []
        # part -> [chain occupying BOTTOM, MIDDLE, TOP]
        self._level_occupied: list[list[ChainIndex | None]] = []
        self._chains: list[tuple[ChainLevel, Rotation, tuple[PartIndex, ...]]] = []

    def __len__(self) -> int:
        return len(self._parts)

    def __repr__(self) -> str:
        return f"Circuit(parts={len(self._parts)}, chains={len(self._chains)})"

    # ── Parts ──────────────────────────────────────────────────────

    def add_part(self, kind: Component, value: int | None = None) -> PartIndex:
        """Append a part and re-lay the whole grid.  Returns its index.

        Raises PartValueError if a resistor has no integer ``value`` or a
        motor/junction is given one.
        """
        kind = Component(kind)
        if kind is Component.RESISTOR:
            if isinstance(value, bool) or not isinstance(value, int):
                raise PartValueError(kind, value)
        elif value is not None:
            raise PartValueError(kind, value)

        index = len(self._parts)
        self._parts.append((kind, value))
        self._level_occupied.append([None] * LEVELS_PER_PART)
        self._positions.append((0, 0))

        self._adjust_positions()

        log.debug("Added %s #%d at %s", kind.value, index, self._positions[index])
        return index

    def motor(self) -> PartIndex:
        return self.add_part(Component.MOTOR)

    def resistor(self, value: int) -> PartIndex:
        return self.add_part(Component.RESISTOR, value)

    def junction(self) -> PartIndex:
        return self.add_part(Component.JUNCTION)

    def _adjust_positions(self) -> None:
        # Grid size depends on the part count, so every slot can move.
        self._positions = grid_positions(len(self._parts), self.rules)

    # ── Chains ─────────────────────────────────────────────────────

    def connect(self, members: Sequence[PartIndex]) -> ChainIndex:
        """Join ``members`` with a new chain on the lowest shared free level.

        Levels are tried in order BOTTOM, MIDDLE, TOP; the first one free
        on every member is taken.  Nothing is modified unless a level is
        found.

        Raises
        ------
        EmptyChainError
            ``members`` is empty.
        UnknownPartError
            A member is not the index of an existing part.
        DuplicateMemberError
            A part appears more than once in ``members``.
        LevelCapacityError
            No level is free on every member.
        """
        members = tuple(members)
        self._check_members(members)

        level = self._find_free_level(members)
        if level is None:
            err = LevelCapacityError(
                members,
                {m: tuple(self._level_occupied[m]) for m in members},
            )
            log.warning("%s", err)
            raise err

        chain = self._add_chain(level, members)
        for part in members:
            self._level_occupied[part][level] = chain

        log.debug("Chain #%d on %s joins %s", chain, level.name, list(members))
        return chain

    def _check_members(self, members: tuple[PartIndex, ...]) -> None:
        if not members:
            raise EmptyChainError()

        seen: set[PartIndex] = set()
        for part in members:
            if isinstance(part, bool) or not isinstance(part, int):
                raise TypeError(f"Part index must be an int, got {part!r}")
            if part < 0 or part >= len(self._parts):
                raise UnknownPartError(part, len(self._parts))
            if part in seen:
                raise DuplicateMemberError(part)
            seen.add(part)

    def _find_free_level(self, members: tuple[PartIndex, ...]) -> ChainLevel | None:
        for level in LEVEL_SEARCH_ORDER:
            if all(self._level_occupied[part][level] is None for part in members):
                return level
        return None

    def _add_chain(self, level: ChainLevel, members: tuple[PartIndex, ...]) -> ChainIndex:
        index = len(self._chains)
        self._chains.append((level, DEFAULT_ROTATION, members))
        return index

    # ── Views ──────────────────────────────────────────────────────

    @property
    def parts(self) -> tuple[Part, ...]:
        """Snapshot of every part with its current position."""
        return tuple(
            Part(index=i, kind=kind, x=x, y=y, value=value)
            for i, ((kind, value), (x, y)) in enumerate(zip(self._parts, self._positions))
        )

    @property
    def chains(self) -> tuple[Chain, ...]:
        """Snapshot of every chain, in creation order."""
        return tuple(
            Chain(index=i, level=level, rotation=rotation, members=members)
            for i, (level, rotation, members) in enumerate(self._chains)
        )

    @property
    def positions(self) -> tuple[tuple[int, int], ...]:
        return tuple(self._positions)

    def occupancy(self, part: PartIndex) -> tuple[ChainIndex | None, ...]:
        """Chain index on each level of ``part`` (BOTTOM, MIDDLE, TOP)."""
        if part < 0 or part >= len(self._parts):
            raise UnknownPartError(part, len(self._parts))
        return tuple(self._level_occupied[part])

    def free_levels(self, part: PartIndex) -> list[ChainLevel]:
        """Levels of ``part`` not yet used by any chain, lowest first."""
        slots = self.occupancy(part)
        return [level for level in LEVEL_SEARCH_ORDER if slots[level] is None]

    # ── Persistence ────────────────────────────────────────────────

    def to_dict(self, *, arrange_chains: bool = False) -> dict:
        """Save-file document for this circuit as a JSON-safe dict."""
        from spintronics.savefile.serialization import circuit_to_save, save_to_dict

        return save_to_dict(circuit_to_save(self, arrange_chains=arrange_chains))

    def save(self, save_path: str | Path, *, arrange_chains: bool = False) -> Path:
        """Write the circuit to ``save_path`` as a pretty-printed save file."""
        from spintronics.savefile.serialization import circuit_to_save, write_save

        return write_save(circuit_to_save(self, arrange_chains=arrange_chains), save_path)
