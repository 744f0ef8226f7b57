"""Spintronics — author chain-and-sprocket circuits and write simulator save files.

Subpackages:
  circuit   Circuit model: parts, chains, level occupancy, grid layout.
  savefile  Save-file document, encoding and parsing.
  web       FastAPI front end.

Modules:
  config    Layout and save-file constants.
  netlist   Build a Circuit from a JSON netlist description.
  app       Command-line interface.
"""

from .circuit import (
    Circuit, Component, ChainLevel, Rotation, Part, Chain,
    CircuitError, LevelCapacityError, UnknownPartError,
    DuplicateMemberError, EmptyChainError, PartValueError,
)
from .savefile import SaveFile, circuit_to_save, parse_save, read_save, write_save
from .netlist import NetlistError, build_circuit, validate_netlist

__all__ = [
    # Circuit
    "Circuit", "Component", "ChainLevel", "Rotation", "Part", "Chain",
    "CircuitError", "LevelCapacityError", "UnknownPartError",
    "DuplicateMemberError", "EmptyChainError", "PartValueError",
    # Save file
    "SaveFile", "circuit_to_save", "parse_save", "read_save", "write_save",
    # Netlist
    "NetlistError", "build_circuit", "validate_netlist",
]
