"""Save file — the simulator's JSON document, encoded from a Circuit.

Submodules:
  models        Document dataclasses and error types.
  serialization Circuit -> SaveFile -> dict / file, and parsing back.
"""

from .models import (
    Dimensions, PartRecord, Connection, ChainRecord, SaveFile,
    SaveEncodingError, SaveFormatError,
)
from .serialization import (
    circuit_to_save, save_to_dict, dumps_save, parse_save,
    write_save, read_save, ROTATION_TO_CW,
)

__all__ = [
    # Models
    "Dimensions", "PartRecord", "Connection", "ChainRecord", "SaveFile",
    "SaveEncodingError", "SaveFormatError",
    # Serialization
    "circuit_to_save", "save_to_dict", "dumps_save", "parse_save",
    "write_save", "read_save", "ROTATION_TO_CW",
]
