"""Resolution of mapping and dataclass nodes into ordered TOML entries."""

import dataclasses
import functools
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .classify import classify, is_record, is_table
from .errors import (
    CyclicStructureError,
    InvalidEmbeddingError,
    InvalidKeyNameError,
    NonStringMapKeyError,
)
from .types import Key, Kind, Modifier

logger = logging.getLogger(__name__)

# Metadata keys read from dataclass fields
NAME_METADATA = "toml"
MODIFIER_METADATA = "modifier"
EMBED_METADATA = "embed"

# Name that excludes a field from encoding
SKIP = "-"


def toml_field(
    name: str | None = None,
    *,
    skip: bool = False,
    modifier: Modifier = Modifier.NONE,
    embed: bool = False,
    **kwargs: Any,
) -> Any:
    """
    Declare a dataclass field with TOML encoding directives.

    Accepts every argument of ``dataclasses.field``.

    Args:
        name: Key to write instead of the attribute name.
        skip: Never write this field.
        modifier: Multi-line rendering for string values.
        embed: Splice the fields of this field's value into the parent table.

    Example:
        >>> @dataclass
        ... class Server:
        ...     host: str = toml_field("hostname")
        ...     motd: str = toml_field(modifier=Modifier.MULTILINE_STRING, default="")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if skip:
        metadata[NAME_METADATA] = SKIP
    elif name is not None:
        metadata[NAME_METADATA] = name
    if modifier is not Modifier.NONE:
        metadata[MODIFIER_METADATA] = modifier
    if embed:
        metadata[EMBED_METADATA] = True
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True)
class FieldSpec:
    """Encoding directives for one dataclass field."""

    attr: str
    """Attribute name on the instance."""

    name: str
    """Key written to the document."""

    modifier: Modifier = Modifier.NONE
    embedded: bool = False


@dataclass
class Entry:
    """One child of a table node, ready to be written."""

    name: str
    value: Any
    kind: Kind
    modifier: Modifier = Modifier.NONE


@functools.cache
def field_specs(cls: type) -> tuple[FieldSpec, ...]:
    """
    Build the encoding table for a dataclass type, once per type.

    Private fields (leading underscore) and skipped fields are left out.
    """
    logger.debug("building field table for %s", cls.__qualname__)
    specs = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        embedded = bool(f.metadata.get(EMBED_METADATA, False))
        name = f.metadata.get(NAME_METADATA) or f.name
        if name == SKIP and not embedded:
            continue
        specs.append(
            FieldSpec(
                attr=f.name,
                name=name,
                modifier=Modifier(f.metadata.get(MODIFIER_METADATA, Modifier.NONE)),
                embedded=embedded,
            )
        )
    return tuple(specs)


def resolve_entries(key: Key, node: object) -> tuple[list[Entry], list[Entry]]:
    """
    Split a table node into entries written as ``key = value`` lines and
    entries written as nested sections.

    Mapping entries are sorted by key; dataclass entries keep declaration
    order. Entries whose value is None are dropped. Two entries with the same
    name, from renames or embedding, raise InvalidKeyNameError.

    Args:
        key: Key path of the node.
        node: A mapping or a dataclass instance.

    Returns:
        A ``(direct, sub)`` pair of entry lists.
    """
    if isinstance(node, Mapping):
        entries = sorted(_map_entries(key, node), key=lambda e: e.name)
    else:
        entries = list(_record_entries(key, node, frozenset()))

    seen: set[str] = set()
    for entry in entries:
        if entry.name in seen:
            duplicate = key.add(entry.name)
            raise InvalidKeyNameError(f"Key '{duplicate}' is defined more than once.", duplicate)
        seen.add(entry.name)

    direct: list[Entry] = []
    sub: list[Entry] = []
    for entry in entries:
        if entry.kind is Kind.ABSENT:
            continue
        if entry.kind.is_table_like:
            sub.append(entry)
        else:
            direct.append(entry)
    return direct, sub


def _map_entries(key: Key, node: Mapping) -> Iterator[Entry]:
    for name, value in node.items():
        if not isinstance(name, str):
            raise NonStringMapKeyError(key, name)
        yield Entry(name, value, classify(value, key.add(name)))


def _record_entries(key: Key, node: object, embedding: frozenset[int]) -> Iterator[Entry]:
    for spec in field_specs(type(node)):
        value = getattr(node, spec.attr)

        if spec.embedded:
            if not is_table(value):
                raise InvalidEmbeddingError(key, spec.attr)
            inner = embedding | {id(node)}
            if id(value) in inner:
                raise CyclicStructureError(key)
            if is_record(value):
                yield from _record_entries(key, value, inner)
            else:
                yield from sorted(_map_entries(key, value), key=lambda e: e.name)
            continue

        kind = classify(value, key.add(spec.name))
        # Modifiers only apply to plain strings
        modifier = spec.modifier if isinstance(value, str) else Modifier.NONE
        yield Entry(spec.name, value, kind, modifier)
