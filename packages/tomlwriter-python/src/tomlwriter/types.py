"""Type definitions for the TOML encoder."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class Kind(Enum):
    """Semantic TOML kind of a Python value."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    DATETIME = "datetime"
    ARRAY = "array"
    ARRAY_OF_TABLES = "array-of-tables"
    TABLE = "table"
    ABSENT = "absent"

    @property
    def is_table_like(self) -> bool:
        """Whether values of this kind are written as sections, not key = value lines."""
        return self in (Kind.TABLE, Kind.ARRAY_OF_TABLES)


class Modifier(str, Enum):
    """Rendering directive for string-valued dataclass fields."""

    NONE = ""
    MULTILINE_STRING = "multiline_string"
    MULTILINE_RAWSTRING = "multiline_rawstring"


class Key(tuple):
    """
    A key path from the document root, one segment per nesting level.

    Keys are immutable: ``add`` returns a new key and leaves the parent alone,
    so sibling recursions never see each other's segments.
    """

    def add(self, segment: str) -> "Key":
        return Key((*self, segment))

    @property
    def leaf(self) -> str:
        return self[-1]

    def __str__(self) -> str:
        return ".".join(self)

    def __repr__(self) -> str:
        return f"Key({list(self)!r})"


@runtime_checkable
class TextMarshaler(Protocol):
    """Values that supply their own textual form, written as a TOML string."""

    def marshal_text(self) -> bytes | str: ...


@dataclass
class EncodeOptions:
    """Options for TOML encoding."""

    indent: str = "  "
    """A single indentation level, repeated once per nesting level."""

    def __post_init__(self) -> None:
        if any(c not in " \t" for c in self.indent):
            raise ValueError(f"indent must contain only spaces and tabs, got {self.indent!r}")
