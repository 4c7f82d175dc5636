"""Mapping of Python values to TOML kinds, and array homogeneity checks."""

import dataclasses
from collections.abc import Mapping
from datetime import datetime

from .errors import (
    CyclicStructureError,
    MixedArrayTypesError,
    NestedTableArrayError,
    NilArrayElementError,
    UnrepresentableTypeError,
)
from .types import Key, Kind, TextMarshaler

_SCALAR_KINDS: list[tuple[type, Kind]] = [
    # bool before int: bool is an int subclass
    (bool, Kind.BOOLEAN),
    (int, Kind.INTEGER),
    (float, Kind.FLOAT),
    (str, Kind.STRING),
]


def is_record(value: object) -> bool:
    """Check if a value is a dataclass instance (not a dataclass type)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_table(value: object) -> bool:
    """Check if a value is written as a TOML table."""
    return isinstance(value, Mapping) or is_record(value)


def classify(value: object, key: Key = Key(), active: frozenset[int] = frozenset()) -> Kind:
    """
    Determine the TOML kind of a value.

    Args:
        value: The value to classify.
        key: Key path of the value, used in error messages.
        active: Identities of arrays currently being classified further up.

    Returns:
        The value's kind. ``Kind.ABSENT`` means the value is skipped.

    Raises:
        UnrepresentableTypeError: If the value has no TOML counterpart.
        TomlEncodeError: If an array inside the value is not homogeneous.
    """
    # datetime and text marshalers take priority over their structural shape
    if isinstance(value, datetime):
        return Kind.DATETIME
    if isinstance(value, TextMarshaler):
        return Kind.STRING

    for python_type, kind in _SCALAR_KINDS:
        if isinstance(value, python_type):
            return kind

    if isinstance(value, (list, tuple)):
        if element_kind(value, key, active) is Kind.TABLE:
            return Kind.ARRAY_OF_TABLES
        return Kind.ARRAY

    if is_table(value):
        return Kind.TABLE

    if value is None:
        return Kind.ABSENT

    raise UnrepresentableTypeError(key, value)


def element_kind(
    values: list | tuple, key: Key = Key(), active: frozenset[int] = frozenset()
) -> Kind | None:
    """
    Determine the single kind shared by all elements of an array.

    The kind of the first element is the reference; every element is checked
    against it from left to right, so errors report the first offender.

    Args:
        values: The array.
        key: Key path of the array, used in error messages.
        active: Identities of arrays currently being classified further up.

    Returns:
        The element kind, or None for an empty array.

    Raises:
        NilArrayElementError: If an element is None.
        NestedTableArrayError: If an element is an array of tables, or the
            first element's own elements are tables.
        MixedArrayTypesError: If elements have different kinds.
        CyclicStructureError: If the array contains itself.
    """
    if not values:
        return None

    if id(values) in active:
        raise CyclicStructureError(key)
    active = active | {id(values)}

    first_kind = None
    for value in values:
        kind = classify(value, key, active)
        if kind is Kind.ABSENT:
            raise NilArrayElementError(key)
        if kind is Kind.ARRAY_OF_TABLES:
            raise NestedTableArrayError(key)
        if first_kind is None:
            first_kind = kind
        elif kind is not first_kind:
            raise MixedArrayTypesError(key)

    # Arrays may nest arbitrarily deep, but only around non-table values
    if first_kind in (Kind.ARRAY, Kind.ARRAY_OF_TABLES):
        nested = element_kind(values[0], key, active)
        if nested in (Kind.TABLE, Kind.ARRAY_OF_TABLES):
            raise NestedTableArrayError(key)

    return first_kind
