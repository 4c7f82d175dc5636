"""Scalar and inline-array value encoding for TOML."""

import logging
import math
from datetime import datetime, timezone
from decimal import Decimal

from .errors import UnrepresentableTypeError
from .string_utils import escape_multiline_string, escape_string, is_bare_key, is_literal_safe
from .types import Key, Modifier, TextMarshaler

logger = logging.getLogger(__name__)


def encode_value(value: object, modifier: Modifier = Modifier.NONE) -> str:
    """
    Encode a value that can appear on the right-hand side of ``key = value``.

    The value must already have been classified as a scalar, datetime or array;
    tables never reach this function.

    Args:
        value: The value to encode.
        modifier: Rendering directive; only honored for ``str`` values.

    Returns:
        The TOML literal.
    """
    if isinstance(value, datetime):
        return encode_datetime(value)

    if isinstance(value, TextMarshaler):
        return encode_string_literal(marshal_text(value))

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, int):
        return str(value)

    if isinstance(value, float):
        return encode_float(value)

    if isinstance(value, str):
        if modifier is Modifier.MULTILINE_STRING:
            return encode_multiline_string(value, raw=False)
        if modifier is Modifier.MULTILINE_RAWSTRING:
            return encode_multiline_string(value, raw=True)
        return encode_string_literal(value)

    if isinstance(value, (list, tuple)):
        return encode_array(value)

    raise UnrepresentableTypeError(value=value)


def encode_array(values: list | tuple) -> str:
    """Encode an inline array on a single line."""
    return "[" + ", ".join(encode_value(v) for v in values) + "]"


def encode_float(value: float) -> str:
    """
    Encode a float with the shortest digits that round-trip.

    Digits are written positionally (never with an exponent), and TOML requires
    a decimal point, so ``.0`` is appended to whole numbers.
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    s = format(Decimal(repr(value)), "f")
    if "." not in s:
        return s + ".0"
    return s


def encode_datetime(value: datetime) -> str:
    """
    Encode a datetime as UTC with second precision, e.g. ``1979-05-27T07:32:00Z``.

    Naive values are taken as UTC.
    """
    if value.tzinfo is not None:
        try:
            value = value.astimezone(timezone.utc)
        except OverflowError as exc:
            raise UnrepresentableTypeError(
                value=value, reason=f"datetime {value.isoformat()} is out of range in UTC"
            ) from exc
    return value.replace(tzinfo=None, microsecond=0).isoformat() + "Z"


def marshal_text(value: TextMarshaler) -> str:
    """Call a value's ``marshal_text``; errors it raises propagate unchanged."""
    text = value.marshal_text()
    if isinstance(text, bytes):
        return text.decode("utf-8")
    return text


def encode_string_literal(value: str) -> str:
    """Encode a string as a TOML basic string."""
    return f'"{escape_string(value)}"'


def encode_multiline_string(value: str, raw: bool = False) -> str:
    """
    Encode a string as a multi-line block.

    Args:
        value: The string to encode.
        raw: Write a ``'''`` literal block instead of an escaped ``\"\"\"`` block.
            Strings a literal block can't hold fall back to ``\"\"\"``.

    Returns:
        The encoded block.
    """
    if raw and not is_literal_safe(value):
        logger.debug("string can't be a literal block, writing it as a basic block instead")
        raw = False

    marker = "'''" if raw else '"""'
    body = value if raw else escape_multiline_string(value)
    # A newline right after the opening marker is trimmed by decoders
    if body.startswith("\n"):
        body = "\n" + body
    return f"{marker}{body}{marker}"


def encode_key(key: str) -> str:
    """
    Encode a single key segment.

    Args:
        key: The key string.

    Returns:
        The key as-is if it is a bare key, otherwise quoted.
    """
    if is_bare_key(key):
        return key
    return encode_string_literal(key)


def format_key_path(key: Key) -> str:
    """Format a key path for a table header, e.g. ``a."b c".d``."""
    return ".".join(encode_key(segment) for segment in key)
