"""Tests for the cattocol command line."""

import json

import pytest
from click.testing import CliRunner

from cattocol import __version__
from cattocol.cli import cli as cli_module

LEFT = "Combine two texts\ninto one text\nfrom two columns.\n"
RIGHT = "Returns an iterator\nfrom one\ntext of two\nmerged columns.\nCollect to String.\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def texts(tmp_path):
    left = tmp_path / "left.txt"
    right = tmp_path / "right.txt"
    left.write_text(LEFT, encoding="utf-8")
    right.write_text(RIGHT, encoding="utf-8")
    return left, right


def test_col_command_uses_default_repeat(runner, texts):
    """The configured default gap of one fill character applies."""
    left, right = texts
    result = runner.invoke(cli_module.cli, ["col", str(left), str(right)])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "Combine two texts Returns an iterator"
    assert lines[1] == "into one text     from one"
    assert lines[4] == " " * 18 + "Collect to String."


def test_col_command_options(runner, texts):
    """--fill and --repeat override the defaults."""
    left, right = texts
    result = runner.invoke(
        cli_module.cli, ["col", str(left), str(right), "--fill", ".", "--repeat", "3"]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[1] == "into one text" + "." * 7 + "from one"


def test_col_command_rejects_long_fill(runner, texts):
    """A multi-character fill is a usage error."""
    left, right = texts
    result = runner.invoke(cli_module.cli, ["col", str(left), str(right), "--fill", "ab"])
    assert result.exit_code == 2
    assert "exactly one character" in result.output


def test_col_command_escape_aware(runner, tmp_path, texts):
    """--esc aligns coloured text like plain text."""
    _, right = texts
    colored = tmp_path / "colored.txt"
    colored.write_text("\x1b[31mred\x1b[0m\nlonger\n", encoding="utf-8")
    result = runner.invoke(cli_module.cli, ["col", "--esc", str(colored), str(right)])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "\x1b[31mred\x1b[0m    Returns an iterator"
    assert lines[1] == "longer from one"


def test_col_command_reports_measurement_error(runner, tmp_path, texts):
    """Unmeasurable input exits with a distinct status and message."""
    _, right = texts
    broken = tmp_path / "broken.txt"
    broken.write_bytes(b"\x1b[1mok\x1b[0m\n\xff\xfe\n")
    result = runner.invoke(
        cli_module.cli,
        ["--decode-errors", "surrogateescape", "col", "--esc", str(broken), str(right)],
    )
    assert result.exit_code == 2
    assert "measurement error" in result.output


def test_plain_col_passes_undecodable_bytes_through(runner, tmp_path):
    """With surrogateescape, bytes that are not text round-trip unchanged."""
    broken = tmp_path / "broken.txt"
    broken.write_bytes(b"a\xff\nb\n")
    other = tmp_path / "other.txt"
    other.write_bytes(b"1\n2\n")
    result = runner.invoke(
        cli_module.cli,
        ["--decode-errors", "surrogateescape", "col", "--repeat", "0", str(broken), str(other)],
    )
    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == b"a\xff1\nb 2\n"


def test_invalid_input_encoding_is_an_input_error(runner, tmp_path, texts):
    """Strict decoding failures exit with status 1."""
    _, right = texts
    broken = tmp_path / "broken.txt"
    broken.write_bytes(b"\xff\n")
    result = runner.invoke(cli_module.cli, ["cat", str(broken), str(right)])
    assert result.exit_code == 1
    assert "not valid utf-8 text" in result.output


def test_encoding_option(runner, tmp_path):
    """--encoding decodes inputs and encodes the output."""
    left = tmp_path / "left.txt"
    right = tmp_path / "right.txt"
    left.write_bytes("größe\n".encode("latin-1"))
    right.write_bytes(b"1\n")
    result = runner.invoke(cli_module.cli, ["--encoding", "latin-1", "cat", str(left), str(right)])
    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == "größe 1\n".encode("latin-1")


def test_unknown_encoding_is_rejected(runner, texts):
    """An unknown codec name is reported before reading anything."""
    left, right = texts
    result = runner.invoke(cli_module.cli, ["--encoding", "nope", "cat", str(left), str(right)])
    assert result.exit_code == 2
    assert "unknown encoding" in result.output


def test_cat_command(runner, texts):
    """cat joins with single spaces and leaves leftovers bare."""
    left, right = texts
    result = runner.invoke(cli_module.cli, ["cat", str(left), str(right)])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[1] == "into one text from one"
    assert result.stdout.splitlines()[3] == "merged columns."


def test_lines_command_with_stdin(runner, tmp_path):
    """'-' reads one input from stdin; extra inputs use the N-way join."""
    middle = tmp_path / "middle.txt"
    middle.write_text("\n\n", encoding="utf-8")
    last = tmp_path / "last.txt"
    last.write_text("primary\nsecondary\n", encoding="utf-8")
    result = runner.invoke(
        cli_module.cli, ["lines", "-", str(middle), str(last)], input="one\ntwo\n"
    )
    assert result.exit_code == 0, result.output
    assert result.stdout == "one primary\ntwo secondary\n"


def test_streams_use_interpreter_buffers(runner, tmp_path, monkeypatch):
    """Input and output go through sys.stdin.buffer and sys.stdout.buffer."""

    def unavailable(name):
        raise AssertionError(f"binary stream lookup for {name}")

    monkeypatch.setattr(cli_module.click, "get_binary_stream", unavailable)
    right = tmp_path / "right.txt"
    right.write_bytes("über\n".encode("utf-8"))
    result = runner.invoke(cli_module.cli, ["cat", "-", str(right)], input="grün\n")
    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == "grün über\n".encode("utf-8")


def test_lines_command_needs_two_inputs(runner, texts):
    """A single input is a usage error."""
    left, _ = texts
    result = runner.invoke(cli_module.cli, ["lines", str(left)])
    assert result.exit_code == 2
    assert "at least two inputs" in result.output


def test_stdin_only_once(runner, texts):
    """stdin cannot be read for two inputs."""
    result = runner.invoke(cli_module.cli, ["cat", "-", "-"], input="x\n")
    assert result.exit_code == 2
    assert "only once" in result.output


def test_pairs_command(runner, tmp_path):
    """pairs keeps only positions where both inputs have text."""
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    first.write_text("one\ntwo\nthree\n", encoding="utf-8")
    second.write_text("1\n\n3\n", encoding="utf-8")
    result = runner.invoke(cli_module.cli, ["pairs", str(first), str(second)])
    assert result.exit_code == 0, result.output
    assert result.stdout == "one 1\nthree 3\n"


def test_project_config_supplies_defaults(runner, tmp_path, texts, monkeypatch):
    """Settings from .cattocol/config.json apply when options are omitted."""
    left, right = texts
    project = tmp_path / "project"
    (project / ".cattocol").mkdir(parents=True)
    (project / ".cattocol" / "config.json").write_text(json.dumps({"fill": "_", "repeat": 2}))
    monkeypatch.chdir(project)
    result = runner.invoke(cli_module.cli, ["col", str(left), str(right)])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[0] == "Combine two texts__Returns an iterator"


def test_config_command(runner, tmp_path, monkeypatch):
    """config shows the effective settings."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(cli_module.cli, ["config"])
    assert result.exit_code == 0, result.output
    assert "Repeat: 1" in result.output
    assert "Encoding: utf-8" in result.output
    assert "Fill: ' '" in result.output


def test_version(runner):
    """Both the option and the command print the version."""
    result = runner.invoke(cli_module.cli, ["--version"])
    assert __version__ in result.output
    result = runner.invoke(cli_module.cli, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_log_file_option(runner, tmp_path, texts):
    """--log-file records the invocation."""
    left, right = texts
    log_file = tmp_path / "run.log"
    result = runner.invoke(
        cli_module.cli, ["--log-file", str(log_file), "cat", str(left), str(right)]
    )
    assert result.exit_code == 0, result.output
    cli_module.logger.detach_file_handler()
    assert "[cli] Combining inputs" in log_file.read_text(encoding="utf-8")
