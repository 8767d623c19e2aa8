from rid.identifier import Rid, RidJSONEncoder, SEPARATOR, new, parse, must
from rid.errors import (
    RidError,
    ParseError,
    StructureError,
    IndexFormatError,
    UniquenessFormatError,
    DeserializationError,
    InvalidLiteralError,
)
from rid.config import load_config, configure

__all__ = [
    "Rid",
    "RidJSONEncoder",
    "SEPARATOR",
    "new",
    "parse",
    "must",
    "RidError",
    "ParseError",
    "StructureError",
    "IndexFormatError",
    "UniquenessFormatError",
    "DeserializationError",
    "InvalidLiteralError",
    "load_config",
    "configure",
]
