"""Save-file serialization — circuit snapshot to JSON document and back."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from spintronics.circuit.arrange import arrange_members
from spintronics.circuit.models import ChainLevel, Component, Rotation

from .models import (
    ChainRecord, Connection, Dimensions, PartRecord, SaveFile,
    SaveEncodingError, SaveFormatError,
)

if TYPE_CHECKING:
    from spintronics.circuit.engine import Circuit


log = logging.getLogger(__name__)


# The file stores rotation as a boolean "cw" flag.
ROTATION_TO_CW: dict[Rotation, bool] = {
    Rotation.CLOCKWISE: True,
    Rotation.COUNTER_CLOCKWISE: False,
}
CW_TO_ROTATION: dict[bool, Rotation] = {cw: rot for rot, cw in ROTATION_TO_CW.items()}


# ── Circuit -> SaveFile ────────────────────────────────────────────


def circuit_to_save(circuit: Circuit, *, arrange_chains: bool = False) -> SaveFile:
    """Snapshot ``circuit`` into a SaveFile.

    With ``arrange_chains`` each chain's members are reordered into a
    non-crossing loop (see ``arrange_members``); by default member order
    is kept exactly as given to ``connect``.
    """
    positions = circuit.positions
    parts = [
        PartRecord(type=p.kind, x=p.x, y=p.y, value=p.value)
        for p in circuit.parts
    ]

    chains = []
    for chain in circuit.chains:
        members = list(chain.members)
        if arrange_chains:
            members = arrange_members(members, positions)
        chains.append(ChainRecord.from_members(members, chain.level, chain.rotation))

    return SaveFile(parts=parts, chains=chains)


# ── SaveFile -> dict ───────────────────────────────────────────────


def _encode_part(p: PartRecord) -> dict:
    if not isinstance(p.type, Component):
        raise SaveEncodingError(f"Part has unknown type {p.type!r}")
    return {
        "type": p.type.value,
        "x": int(p.x),
        "y": int(p.y),
        **({"value": int(p.value)} if p.value is not None else {}),
    }


def _encode_connection(c: Connection) -> dict:
    if not isinstance(c.level, ChainLevel):
        raise SaveEncodingError(f"Connection to part {c.part_index} has bad level {c.level!r}")
    if c.rotation not in ROTATION_TO_CW:
        raise SaveEncodingError(
            f"Connection to part {c.part_index} has bad rotation {c.rotation!r}")
    return {
        "partIndex": int(c.part_index),
        "level": int(c.level),
        "cw": ROTATION_TO_CW[c.rotation],
    }


def save_to_dict(save: SaveFile) -> dict:
    """Serialize a SaveFile to a JSON-safe dict in simulator field order."""
    return {
        "version": save.version,
        "zoom": float(save.zoom),
        "viewDimensions": {
            "width": float(save.view_dimensions.width),
            "height": float(save.view_dimensions.height),
        },
        "parts": [_encode_part(p) for p in save.parts],
        "chains": [
            {"connections": [_encode_connection(c) for c in chain.connections]}
            for chain in save.chains
        ],
    }


def dumps_save(save: SaveFile) -> str:
    """Pretty-printed JSON text of ``save``."""
    try:
        return json.dumps(save_to_dict(save), indent=2)
    except (TypeError, ValueError) as exc:
        raise SaveEncodingError(f"Failed to encode save file: {exc}") from exc


# ── dict -> SaveFile ───────────────────────────────────────────────


def _require_object(data: object, what: str) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"{what} must be an object, got {data!r}")
    return data


def _parse_part(data: dict) -> PartRecord:
    _require_object(data, "part")
    value = data.get("value")
    return PartRecord(
        type=Component(data["type"]),
        x=int(data["x"]),
        y=int(data["y"]),
        value=int(value) if value is not None else None,
    )


def _parse_connection(data: dict) -> Connection:
    _require_object(data, "connection")
    cw = data["cw"]
    if not isinstance(cw, bool):
        raise ValueError(f"'cw' must be a boolean, got {cw!r}")
    return Connection(
        part_index=int(data["partIndex"]),
        level=ChainLevel(int(data["level"])),
        rotation=CW_TO_ROTATION[cw],
    )


def parse_save(data: dict) -> SaveFile:
    """Parse a save-file dict back into a SaveFile.

    Raises SaveFormatError when a field is missing or has a bad value.
    """
    try:
        _require_object(data, "save file")
        dims = _require_object(data["viewDimensions"], "viewDimensions")
        save = SaveFile(
            version=int(data["version"]),
            zoom=float(data["zoom"]),
            view_dimensions=Dimensions(
                width=float(dims["width"]),
                height=float(dims["height"]),
            ),
            parts=[_parse_part(p) for p in data["parts"]],
            chains=[
                ChainRecord(connections=[
                    _parse_connection(c)
                    for c in _require_object(ch, "chain")["connections"]
                ])
                for ch in data["chains"]
            ],
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SaveFormatError(f"Missing/invalid field: {exc}") from exc

    part_count = len(save.parts)
    for i, chain in enumerate(save.chains):
        for c in chain.connections:
            if not 0 <= c.part_index < part_count:
                raise SaveFormatError(
                    f"Chain {i} references part {c.part_index} "
                    f"but the file has {part_count} parts")
    return save


# ── Files ──────────────────────────────────────────────────────────


def write_save(save: SaveFile, save_path: str | Path) -> Path:
    """Write ``save`` to ``save_path`` in one go.  Returns the path.

    The document is fully encoded before the file is opened, so an
    encoding failure never leaves a partial file.  OSError propagates.
    """
    text = dumps_save(save)
    path = Path(save_path)
    path.write_text(text, encoding="utf-8")
    log.info("Wrote %d parts, %d chains to %s", len(save.parts), len(save.chains), path)
    return path


def read_save(save_path: str | Path) -> SaveFile:
    """Load and parse a save file."""
    path = Path(save_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SaveFormatError(f"{path}: not valid UTF-8 JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SaveFormatError(f"{path}: top level must be an object")
    return parse_save(data)
