"""Exceptions raised when a value cannot be written as a TOML document."""

from .types import Key


class TomlEncodeError(ValueError):
    """
    Base class for every encoding failure.

    Args:
        message: Human-readable description of the violation.
        key: The key path being written when the violation was found, if known.
    """

    def __init__(self, message: str, key: Key | None = None):
        self.message = message
        self.key = key
        if key:
            message = f"{message} (at key '{key}')"
        super().__init__(message)


class MixedArrayTypesError(TomlEncodeError):
    """Array elements have different kinds."""

    def __init__(self, key: Key | None = None):
        super().__init__("can't encode array with mixed element types", key)


class NilArrayElementError(TomlEncodeError):
    """An array element is None."""

    def __init__(self, key: Key | None = None):
        super().__init__("can't encode array with None element", key)


class NonStringMapKeyError(TomlEncodeError):
    """A mapping has a key that is not a string."""

    def __init__(self, key: Key | None = None, map_key: object = None):
        super().__init__(
            f"can't encode a mapping with non-string key {map_key!r}", key
        )


class InvalidEmbeddingError(TomlEncodeError):
    """An embedded field holds something other than a dataclass or mapping."""

    def __init__(self, key: Key | None = None, field_name: str = ""):
        super().__init__(
            f"can't encode embedded field '{field_name}' that is not a dataclass or mapping",
            key,
        )


class NestedTableArrayError(TomlEncodeError):
    """An array element is itself an array holding tables."""

    def __init__(self, key: Key | None = None):
        super().__init__("TOML array element can't contain a table", key)


class MissingRootKeyError(TomlEncodeError):
    """The top-level value is not a mapping or dataclass instance."""

    def __init__(self):
        super().__init__("top-level value must be a mapping or a dataclass instance")


class InvalidKeyNameError(TomlEncodeError):
    """A key or table name breaks TOML naming rules, or repeats within its table."""


class UnrepresentableTypeError(TomlEncodeError, TypeError):
    """A value has no TOML counterpart."""

    def __init__(self, key: Key | None = None, value: object = None, reason: str | None = None):
        super().__init__(reason or f"unsupported type {type(value).__name__}", key)
        self.value = value


class CyclicStructureError(TomlEncodeError):
    """A table or array contains itself."""

    def __init__(self, key: Key | None = None):
        super().__init__("can't encode a value that contains itself", key)


class SinkFailureError(TomlEncodeError):
    """The output sink rejected the document; ``__cause__`` holds the I/O error."""

    def __init__(self, reason: str):
        super().__init__(f"failed to write TOML document: {reason}")
