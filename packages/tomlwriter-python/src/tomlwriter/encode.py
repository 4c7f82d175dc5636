"""TOML encoder implementation."""

import logging
from typing import Any, TextIO

from .classify import classify
from .errors import (
    CyclicStructureError,
    InvalidKeyNameError,
    MissingRootKeyError,
    SinkFailureError,
    UnrepresentableTypeError,
)
from .fields import Entry, resolve_entries
from .primitives import encode_key, encode_value, format_key_path
from .string_utils import is_valid_key_name, is_valid_table_name
from .types import EncodeOptions, Key, Kind, Modifier

logger = logging.getLogger(__name__)


def encode(value: Any, options: EncodeOptions | None = None) -> str:
    """
    Encode a Python value to a TOML document.

    Mapping keys are sorted for deterministic output; dataclass fields keep
    their declaration order. In both, keys holding plain values are written
    before keys holding tables, so that no ``key = value`` line ends up under
    a table header that was meant to come after it.

    Args:
        value: A mapping or dataclass instance.
        options: Encoding options.

    Returns:
        The TOML document.

    Raises:
        TomlEncodeError: If the value has no valid TOML representation.
    """
    opts = options or EncodeOptions()
    writer = _DocumentWriter(opts.indent)
    writer.write_document(value)
    return writer.getvalue()


def dump(value: Any, fp: TextIO, options: EncodeOptions | None = None) -> None:
    """
    Encode a Python value and write the TOML document to a text stream.

    Nothing is written unless encoding succeeds.

    Raises:
        TomlEncodeError: If the value has no valid TOML representation.
        SinkFailureError: If writing to ``fp`` fails.
    """
    document = encode(value, options)
    try:
        fp.write(document)
        fp.flush()
    except (OSError, ValueError) as exc:
        raise SinkFailureError(str(exc)) from exc


class Encoder:
    """
    Writes TOML documents to a text stream.

    Args:
        sink: Text stream receiving each encoded document.
        options: Encoding options; ``indent`` may also be changed on the instance.
    """

    def __init__(self, sink: TextIO, options: EncodeOptions | None = None):
        self.sink = sink
        self.indent = (options or EncodeOptions()).indent

    def encode(self, value: Any) -> None:
        dump(value, self.sink, EncodeOptions(indent=self.indent))


class _DocumentWriter:
    """Recursive descent over one value, collecting the document text."""

    def __init__(self, indent: str):
        self.indent = indent
        self.has_written = False
        self._chunks: list[str] = []
        self._active: list[int] = []

    def getvalue(self) -> str:
        return "".join(self._chunks)

    def write_document(self, value: Any) -> None:
        logger.debug("encoding %s", type(value).__name__)
        if classify(value) is not Kind.TABLE:
            raise MissingRootKeyError()
        self._write_table_body(Key(), value)
        logger.debug("encoded document of %d characters", sum(map(len, self._chunks)))

    def _write(self, text: str) -> None:
        self._chunks.append(text)
        self.has_written = True

    def _newline(self) -> None:
        if self.has_written:
            self._write("\n")

    def _indent_for(self, key: Key) -> str:
        return self.indent * (len(key) - 1)

    def _write_entry(self, key: Key, entry: Entry) -> None:
        if entry.kind is Kind.TABLE:
            self._write_table(key, entry.value)
        elif entry.kind is Kind.ARRAY_OF_TABLES:
            self._write_array_of_tables(key, entry.value)
        else:
            self._write_key_value(key, entry.value, entry.modifier)

    def _write_table(self, key: Key, value: Any) -> None:
        _check_table_name(key)
        self._newline()
        self._write(f"{self._indent_for(key)}[{format_key_path(key)}]")
        self._newline()
        self._write_table_body(key, value)

    def _write_array_of_tables(self, key: Key, values: list | tuple) -> None:
        _check_table_name(key)
        for value in values:
            if value is None:
                continue
            self._write("\n")
            self._write(f"{self._indent_for(key)}[[{format_key_path(key)}]]")
            self._newline()
            self._write_table_body(key, value)

    def _write_table_body(self, key: Key, value: Any) -> None:
        if id(value) in self._active:
            raise CyclicStructureError(key)
        self._active.append(id(value))

        direct, sub = resolve_entries(key, value)
        for entry in direct:
            self._write_entry(key.add(entry.name), entry)
        for entry in sub:
            self._write_entry(key.add(entry.name), entry)

        self._active.pop()

    def _write_key_value(self, key: Key, value: Any, modifier: Modifier) -> None:
        if not is_valid_key_name(key.leaf):
            raise InvalidKeyNameError(
                f"Key '{key}' is not a valid key name. Key names can't be empty.", key
            )
        self._write(f"{self._indent_for(key)}{encode_key(key.leaf)} = ")
        try:
            literal = encode_value(value, modifier)
        except UnrepresentableTypeError as exc:
            if exc.key:
                raise
            raise UnrepresentableTypeError(key, exc.value, exc.message) from exc
        self._write(literal)
        self._newline()


def _check_table_name(key: Key) -> None:
    for segment in key:
        if not is_valid_table_name(segment):
            raise InvalidKeyNameError(
                f"Key '{key}' is not a valid table name. "
                "Table names can't be empty or contain '[', ']' or '.'.",
                key,
            )
