"""Command-line adapter: JSON on stdin, TOML on stdout.

Conformance harnesses such as toml-test feed values in their tagged JSON form,
where every scalar is ``{"type": ..., "value": "<text>"}``; ``--tagged``
turns those back into Python values before encoding.
"""

import json
import logging
import math
import os
import sys
from datetime import datetime
from typing import Any, TextIO

import click

from .encode import dump
from .errors import TomlEncodeError
from .types import EncodeOptions

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "TOMLWRITER_LOG_LEVEL"


def resolve_log_level(verbose: int, quiet: int) -> int:
    """Pick the log level from ``-v``/``-q`` counts, falling back to the environment."""
    if verbose or quiet:
        return max(logging.DEBUG, min(logging.CRITICAL, logging.WARNING + 10 * (quiet - verbose)))
    env = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(env) if env else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level: int) -> None:
    """Send log records to stderr so they never mix with the document."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("tomlwriter")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False


def untag(value: Any) -> Any:
    """
    Convert toml-test tagged JSON into plain Python values.

    Raises:
        ValueError: For unknown tags or malformed scalar text.
    """
    if isinstance(value, list):
        return [untag(v) for v in value]
    if isinstance(value, dict):
        if set(value) == {"type", "value"} and isinstance(value["value"], (str, list)):
            if value["type"] == "array":
                return untag(value["value"])
            return _untag_scalar(value["type"], value["value"])
        return {k: untag(v) for k, v in value.items()}
    raise ValueError(f"untagged value in tagged input: {value!r}")


def _untag_scalar(tag: str, text: str) -> Any:
    if tag == "string":
        return text
    if tag == "integer":
        return int(text)
    if tag == "float":
        special = text.lstrip("+-")
        if special in ("inf", "nan"):
            number = math.inf if special == "inf" else math.nan
            return -number if text.startswith("-") else number
        return float(text)
    if tag == "bool":
        if text not in ("true", "false"):
            raise ValueError(f"invalid bool {text!r}")
        return text == "true"
    if tag in ("datetime", "datetime-local"):
        return datetime.fromisoformat(text)
    raise ValueError(f"unsupported value type {tag!r}")


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Read JSON from INPUT (default: stdin) and write it as TOML to stdout.",
)
@click.argument("input_file", metavar="INPUT", type=click.File("r"), default="-")
@click.option("--tagged", is_flag=True, help="Input uses toml-test tagged JSON values.")
@click.option("--indent", default="  ", show_default=repr("  "), help="One indentation level.")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (repeatable).")
@click.option("-q", "--quiet", count=True, help="Decrease log verbosity (repeatable).")
@click.version_option(package_name="tomlwriter")
def main(input_file: TextIO, tagged: bool, indent: str, verbose: int, quiet: int) -> None:
    """Entry point for the tomlwriter CLI."""
    setup_logging(resolve_log_level(verbose, quiet))

    try:
        options = EncodeOptions(indent=indent)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--indent") from exc

    try:
        value = json.load(input_file)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"invalid JSON input: {exc}") from exc

    if tagged:
        try:
            value = untag(value)
        except ValueError as exc:
            raise click.ClickException(f"invalid tagged input: {exc}") from exc

    try:
        dump(value, sys.stdout, options)
    except TomlEncodeError as exc:
        logger.debug("encoding failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc
