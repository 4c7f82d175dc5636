"""
tomlwriter - TOML encoder for Python values

Writes mappings and dataclass instances as TOML documents: nested tables,
arrays of tables, inline arrays and typed scalars, with deterministic key
order and strict checks for everything TOML can't express.

Usage:
    import tomlwriter

    # Encode Python data to TOML
    data = {"title": "example", "owner": {"name": "Alice"}}
    text = tomlwriter.encode(data)

    # Write to a file
    with open("config.toml", "w") as fp:
        tomlwriter.dump(data, fp)

    # Dataclasses, with per-field directives
    from dataclasses import dataclass
    from tomlwriter import Modifier, toml_field

    @dataclass
    class Server:
        host: str = toml_field("hostname")
        banner: str = toml_field(modifier=Modifier.MULTILINE_STRING, default="")

    text = tomlwriter.encode(Server("db1"), tomlwriter.EncodeOptions(indent="    "))
"""

__version__ = "0.1.0"

from .encode import Encoder, dump, encode
from .errors import (
    CyclicStructureError,
    InvalidEmbeddingError,
    InvalidKeyNameError,
    MissingRootKeyError,
    MixedArrayTypesError,
    NestedTableArrayError,
    NilArrayElementError,
    NonStringMapKeyError,
    SinkFailureError,
    TomlEncodeError,
    UnrepresentableTypeError,
)
from .fields import toml_field
from .types import EncodeOptions, Key, Kind, Modifier, TextMarshaler

__all__ = [
    # Version
    "__version__",
    # Main API
    "encode",
    "dump",
    "Encoder",
    "toml_field",
    # Options
    "EncodeOptions",
    # Types
    "Key",
    "Kind",
    "Modifier",
    "TextMarshaler",
    # Errors
    "TomlEncodeError",
    "MixedArrayTypesError",
    "NilArrayElementError",
    "NonStringMapKeyError",
    "InvalidEmbeddingError",
    "NestedTableArrayError",
    "MissingRootKeyError",
    "InvalidKeyNameError",
    "UnrepresentableTypeError",
    "CyclicStructureError",
    "SinkFailureError",
]
