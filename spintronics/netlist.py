"""Netlist description — build a Circuit from a JSON-style dict.

Format::

    {
      "parts": [
        {"id": "m",  "type": "motor"},
        {"id": "r1", "type": "resistor", "value": 1000}
      ],
      "chains": [["m", "r1"]]
    }

Parts are created in list order (so list position is the part index in
the save file) and chains are connected in list order.
"""

from __future__ import annotations

import logging

from spintronics.circuit import Circuit, Component
from spintronics.config import LAYOUT_RULES, LayoutRules


log = logging.getLogger(__name__)

PART_TYPES = {c.value for c in Component}


class NetlistError(ValueError):
    """Raised when a netlist description fails validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("Invalid netlist:\n  " + "\n  ".join(errors))


def validate_netlist(data: dict) -> list[str]:
    """Validate a netlist dict. Returns error messages (empty = valid)."""
    errors: list[str] = []

    if not isinstance(data, dict):
        return ["Netlist must be an object with 'parts' and 'chains'"]

    parts = data.get("parts")
    chains = data.get("chains", [])
    if not isinstance(parts, list):
        return ["'parts' must be a list"]
    if not isinstance(chains, list):
        return ["'chains' must be a list"]

    # ── Parts ──
    seen_ids: set[str] = set()
    for i, p in enumerate(parts):
        if not isinstance(p, dict):
            errors.append(f"Part {i}: must be an object")
            continue
        pid = p.get("id")
        if not isinstance(pid, str) or not pid:
            errors.append(f"Part {i}: missing 'id'")
        elif pid in seen_ids:
            errors.append(f"Duplicate part id '{pid}'")
        else:
            seen_ids.add(pid)

        label = pid if isinstance(pid, str) and pid else str(i)
        ptype = p.get("type")
        if not isinstance(ptype, str) or ptype not in PART_TYPES:
            errors.append(
                f"Part '{label}': unknown type {ptype!r} "
                f"(expected one of {sorted(PART_TYPES)})"
            )
            continue

        value = p.get("value")
        if ptype == Component.RESISTOR.value:
            if value is None:
                errors.append(f"Part '{label}': resistor needs a 'value'")
            elif isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(
                    f"Part '{label}': value must be a non-negative integer, got {value!r}")
        elif value is not None:
            errors.append(f"Part '{label}': {ptype} does not take a value")

    # ── Chains ──
    for i, chain in enumerate(chains):
        if not isinstance(chain, list) or not chain:
            errors.append(f"Chain {i}: must be a non-empty list of part ids")
            continue
        members: set[str] = set()
        for ref in chain:
            if not isinstance(ref, str) or ref not in seen_ids:
                errors.append(f"Chain {i}: unknown part id {ref!r}")
            elif ref in members:
                errors.append(f"Chain {i}: part '{ref}' listed more than once")
            else:
                members.add(ref)

    return errors


def build_circuit(data: dict, rules: LayoutRules = LAYOUT_RULES) -> Circuit:
    """Validate ``data`` and build the Circuit it describes.

    Raises
    ------
    NetlistError
        The description is malformed.
    LevelCapacityError
        A chain cannot find a level free on all of its parts.
    """
    errors = validate_netlist(data)
    if errors:
        raise NetlistError(errors)

    circuit = Circuit(rules)
    index_of: dict[str, int] = {}
    for p in data["parts"]:
        index_of[p["id"]] = circuit.add_part(Component(p["type"]), p.get("value"))

    for chain in data.get("chains", []):
        circuit.connect([index_of[ref] for ref in chain])

    log.info("Built %r from netlist", circuit)
    return circuit
