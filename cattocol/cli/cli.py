"""Main CLI entry point for cattocol.

Reads two or more texts from files or stdin, combines them with one of the
join modes and streams the result to stdout.
"""

import codecs
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

import click
from rich.console import Console
from rich.markup import escape

from cattocol import __version__
from cattocol.cli.top_level_cli import config_cmd, version_cmd
from cattocol.core.combine import JoinConfig, JoinMode, combine
from cattocol.core.config import CattocolConfig, get_config
from cattocol.errors import MeasurementError
from cattocol.utils.log import get_logger


console = Console(stderr=True)
logger = get_logger()

STDIN_NAME = "-"
DECODE_ERROR_MODES = ("strict", "replace", "surrogateescape")

INPUT_PATH = click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=str)


class InputError(click.ClickException):
    """An input could not be read or decoded."""

    exit_code = 1


class MeasurementFailed(click.ClickException):
    """A line could not be measured, so columns cannot be aligned."""

    exit_code = 2

    def format_message(self) -> str:
        return f"measurement error: {self.message}"


@dataclass(frozen=True)
class RunContext:
    """Settings shared by the combine commands of one invocation."""

    config: CattocolConfig
    encoding: str
    errors: str


def read_texts(paths: Sequence[str], encoding: str, errors: str = "strict") -> list[str]:
    """Read and decode every input; ``-`` stands for stdin."""
    if sum(1 for path in paths if path == STDIN_NAME) > 1:
        raise click.UsageError("stdin ('-') can be given only once.")

    texts: list[str] = []
    for path in paths:
        if path == STDIN_NAME:
            name = "<stdin>"
            data = sys.stdin.buffer.read()
        else:
            name = path
            try:
                data = Path(path).read_bytes()
            except OSError as exc:
                raise InputError(f"cannot read {name}: {exc.strerror or exc}") from exc
        try:
            texts.append(data.decode(encoding, errors))
        except UnicodeDecodeError as exc:
            raise InputError(
                f"{name} is not valid {encoding} text: {exc.reason} at byte {exc.start}"
            ) from exc
        logger.debug(
            "[cli] Read input",
            extra={"input": name, "bytes": len(data), "encoding": encoding},
        )
    return texts


def write_fragments(fragments: Iterable[str], encoding: str, errors: str = "strict") -> int:
    """Stream fragments to stdout; returns the number of lines written."""
    out = sys.stdout.buffer
    line_count = 0
    for fragment in fragments:
        out.write(fragment.encode(encoding, errors))
        if fragment == "\n":
            line_count += 1
    out.flush()
    return line_count


def _run(
    run: RunContext,
    mode: JoinMode,
    paths: Sequence[str],
    join: Optional[JoinConfig] = None,
    escape_aware: bool = False,
) -> None:
    texts = read_texts(paths, run.encoding, run.errors)
    logger.info(
        "[cli] Combining inputs",
        extra={"mode": mode.value, "inputs": list(paths), "escape_aware": escape_aware},
    )
    try:
        written = write_fragments(
            combine(mode, texts, config=join, escape_aware=escape_aware),
            run.encoding,
            run.errors,
        )
    except MeasurementError as exc:
        logger.error(
            "[cli] Measurement failed: %s",
            exc,
            extra={"mode": mode.value, "line_preview": exc.line[:80]},
        )
        raise MeasurementFailed(str(exc)) from exc
    logger.debug("[cli] Wrote combined text", extra={"lines": written})


def _validate_encoding(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[str]:
    if value is None:
        return value
    try:
        codecs.lookup(value)
    except LookupError as exc:
        raise click.BadParameter(f"unknown encoding '{value}'") from exc
    return value


def _validate_fill(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[str]:
    if value is not None and len(value) != 1:
        raise click.BadParameter("must be exactly one character")
    return value


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="cattocol")
@click.option(
    "--encoding",
    type=str,
    default=None,
    callback=_validate_encoding,
    help="Encoding of inputs and output",
)
@click.option(
    "--decode-errors",
    type=click.Choice(DECODE_ERROR_MODES),
    default="strict",
    show_default=True,
    help="How undecodable input bytes are handled",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write debug logs to this file",
)
@click.option("--verbose", is_flag=True, help="Verbose logging on stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    encoding: Optional[str],
    decode_errors: str,
    log_file: Optional[Path],
    verbose: bool,
) -> None:
    """cattocol - combine texts as columns or by lines"""
    if verbose:
        logger.set_console_level(logging.DEBUG)
    if log_file is not None:
        logger.attach_file_handler(log_file)

    config = get_config(Path.cwd())
    ctx.obj = RunContext(
        config=config,
        encoding=encoding or config.encoding,
        errors=decode_errors,
    )
    logger.debug(
        "[cli] Configuration initialized",
        extra={"encoding": ctx.obj.encoding, "decode_errors": decode_errors},
    )


@cli.command(name="col")
@click.argument("first", type=INPUT_PATH)
@click.argument("second", type=INPUT_PATH)
@click.option("--fill", type=str, default=None, callback=_validate_fill, help="Padding character")
@click.option(
    "--repeat",
    type=click.IntRange(min=0),
    default=None,
    help="Fill characters between the widest line and the second column",
)
@click.option(
    "--esc/--no-esc",
    "escape_aware",
    default=None,
    help="Ignore terminal escape sequences when measuring widths",
)
@click.pass_obj
def col_cmd(
    run: RunContext,
    first: str,
    second: str,
    fill: Optional[str],
    repeat: Optional[int],
    escape_aware: Optional[bool],
) -> None:
    """Put SECOND in an aligned column to the right of FIRST."""
    join = run.config.to_join_config()
    if fill is not None:
        join = join.with_fill(fill)
    if repeat is not None:
        join = join.with_repeat(repeat)
    if escape_aware is None:
        escape_aware = run.config.escape_aware
    _run(run, JoinMode.COLUMN, [first, second], join=join, escape_aware=escape_aware)


@cli.command(name="cat")
@click.argument("first", type=INPUT_PATH)
@click.argument("second", type=INPUT_PATH)
@click.pass_obj
def cat_cmd(run: RunContext, first: str, second: str) -> None:
    """Join the lines of FIRST and SECOND with a single space."""
    _run(run, JoinMode.SIMPLE, [first, second])


@cli.command(name="lines")
@click.argument("texts", nargs=-1, required=True, type=INPUT_PATH)
@click.pass_obj
def lines_cmd(run: RunContext, texts: tuple[str, ...]) -> None:
    """Append matching lines of the other TEXTS to each line of the first."""
    if len(texts) < 2:
        raise click.UsageError("lines needs at least two inputs.")
    _run(run, JoinMode.BY_FIRST, list(texts))


@cli.command(name="pairs")
@click.argument("first", type=INPUT_PATH)
@click.argument("second", type=INPUT_PATH)
@click.pass_obj
def pairs_cmd(run: RunContext, first: str, second: str) -> None:
    """Join only the positions where both FIRST and SECOND have text."""
    _run(run, JoinMode.PAIRS, [first, second])


cli.add_command(config_cmd)
cli.add_command(version_cmd)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except SystemExit:
        raise
    except (RuntimeError, ValueError, OSError) as e:
        console.print(f"[red]Fatal error: {escape(str(e))}[/red]")
        logger.warning(
            "[cli] Fatal error in main CLI entrypoint: %s: %s",
            type(e).__name__,
            e,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
