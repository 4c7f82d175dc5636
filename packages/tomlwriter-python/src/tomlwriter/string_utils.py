"""String utilities for TOML encoding."""

import re

# Short escape sequences TOML basic strings support for characters we must escape
ESCAPE_MAP = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Table names can't contain these; they would change the header's structure
TABLE_NAME_RESERVED = frozenset("[].")

# Keys made only of these characters may be written without quotes
BARE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _is_control(char: str) -> bool:
    return char < " " or char == "\x7f"


def escape_string(value: str) -> str:
    """
    Escape a string for use in a TOML basic (double-quoted) string.

    Backslash, double quote, newline, carriage return and tab get their short
    escapes; every other control character is written as ``\\uXXXX``.

    Args:
        value: The string to escape.

    Returns:
        The escaped string (without surrounding quotes).
    """
    result = []
    for char in value:
        if char in ESCAPE_MAP:
            result.append(ESCAPE_MAP[char])
        elif _is_control(char):
            result.append(f"\\u{ord(char):04X}")
        else:
            result.append(char)
    return "".join(result)


def escape_multiline_string(value: str) -> str:
    """
    Escape a string for use inside a ``\"\"\"`` block.

    Same as ``escape_string`` except that newlines are kept literally.
    """
    return "\n".join(escape_string(line) for line in value.split("\n"))


def is_literal_safe(value: str) -> bool:
    """
    Check if a string can be written verbatim inside a ``'''`` block.

    Literal blocks have no escapes: they can't hold their own delimiter, and the
    only control characters allowed are tab and newline.
    """
    if "'''" in value:
        return False
    return not any(_is_control(c) and c not in "\t\n" for c in value)


def is_bare_key(key: str) -> bool:
    """Check if a key can be written without quotes."""
    return bool(BARE_KEY_PATTERN.match(key))


def is_valid_table_name(segment: str) -> bool:
    """
    Check if a key segment can be part of a table header.

    Args:
        segment: One segment of a table's key path.

    Returns:
        True if non-empty and free of ``[``, ``]`` and ``.``.
    """
    if not segment:
        return False
    return not any(c in TABLE_NAME_RESERVED for c in segment)


def is_valid_key_name(key: str) -> bool:
    """Check if a key can be the left-hand side of ``key = value``."""
    return bool(key)
