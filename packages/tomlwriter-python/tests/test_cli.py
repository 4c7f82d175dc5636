"""Tests for the JSON to TOML command-line adapter."""

import json
import logging
import math
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tomlwriter.cli import LOG_LEVEL_ENV, main, resolve_log_level, untag


@pytest.fixture
def runner():
    return CliRunner()


class TestMain:
    """Test the command end to end."""

    def test_stdin_to_stdout(self, runner):
        result = runner.invoke(main, input='{"a": 1, "b": {"c": true}}')
        assert result.exit_code == 0
        assert result.output == "a = 1\n\n[b]\n  c = true\n"

    def test_file_argument(self, runner, tmp_path):
        source = tmp_path / "in.json"
        source.write_text(json.dumps({"arr": [{"x": 1}]}))
        result = runner.invoke(main, [str(source)])
        assert result.exit_code == 0
        assert result.output == "\n[[arr]]\n  x = 1\n"

    def test_indent_option(self, runner):
        result = runner.invoke(main, ["--indent", "    "], input='{"t": {"k": "v"}}')
        assert result.exit_code == 0
        assert result.output == '[t]\n    k = "v"\n'

    def test_bad_indent(self, runner):
        result = runner.invoke(main, ["--indent", "x"], input="{}")
        assert result.exit_code == 2

    def test_invalid_json(self, runner):
        result = runner.invoke(main, input="{nope")
        assert result.exit_code == 1
        assert "invalid JSON input" in result.output

    def test_encode_error(self, runner):
        result = runner.invoke(main, input='{"a": [1, "x"]}')
        assert result.exit_code == 1
        assert "mixed element types" in result.output

    def test_root_must_be_object(self, runner):
        result = runner.invoke(main, input="[1, 2]")
        assert result.exit_code == 1
        assert "top-level value" in result.output

    def test_tagged(self, runner):
        tagged = {
            "n": {"type": "integer", "value": "7"},
            "t": {"type": "datetime", "value": "1979-05-27T07:32:00-08:00"},
            "arr": [{"type": "float", "value": "2"}],
        }
        result = runner.invoke(main, ["--tagged"], input=json.dumps(tagged))
        assert result.exit_code == 0
        assert result.output == "arr = [2.0]\nn = 7\nt = 1979-05-27T15:32:00Z\n"

    def test_tagged_unknown_type(self, runner):
        tagged = {"d": {"type": "date-local", "value": "1979-05-27"}}
        result = runner.invoke(main, ["--tagged"], input=json.dumps(tagged))
        assert result.exit_code == 1
        assert "invalid tagged input" in result.output


class TestUntag:
    """Test conversion of tagged JSON values."""

    def test_scalars(self):
        assert untag({"type": "string", "value": "s"}) == "s"
        assert untag({"type": "integer", "value": "-3"}) == -3
        assert untag({"type": "bool", "value": "false"}) is False
        assert untag({"type": "float", "value": "-inf"}) == -math.inf
        assert math.isnan(untag({"type": "float", "value": "nan"}))

    def test_datetime(self):
        value = untag({"type": "datetime", "value": "2020-01-01T00:00:00Z"})
        assert value == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_nested(self):
        tagged = {
            "tbl": {"k": {"type": "bool", "value": "true"}},
            "old": {"type": "array", "value": [{"type": "integer", "value": "1"}]},
            "aot": [{"type": {"type": "string", "value": "x"}}],
        }
        assert untag(tagged) == {"tbl": {"k": True}, "old": [1], "aot": [{"type": "x"}]}

    @pytest.mark.parametrize(
        "value",
        [{"type": "bool", "value": "yes"}, {"type": "integer", "value": "x"}, 5],
    )
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            untag(value)


class TestLogLevel:
    """Test log level resolution."""

    def test_flags(self):
        assert resolve_log_level(0, 0) == logging.WARNING
        assert resolve_log_level(2, 0) == logging.DEBUG
        assert resolve_log_level(5, 0) == logging.DEBUG
        assert resolve_log_level(0, 1) == logging.ERROR

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "info")
        assert resolve_log_level(0, 0) == logging.INFO
        monkeypatch.setenv(LOG_LEVEL_ENV, "bogus")
        assert resolve_log_level(0, 0) == logging.WARNING
