import logging
import typing as ty
from contextlib import closing
from pathlib import Path
from urllib.parse import urlparse

import click
from omegaconf import DictConfig
from rich.console import Console
from rich.logging import RichHandler

from rewindpipe.config import load_config
from rewindpipe.cursor import ListIteratorWrapper
from rewindpipe.sources import count_lines, line_iter
from rewindpipe._version import version


def _stdin_lines() -> ty.Iterator[str]:
    for raw_line in click.get_binary_stream("stdin"):
        yield raw_line.decode("utf-8").rstrip("\r\n")


def _check_source(source: str) -> None:
    if not (Path(source).is_file() or urlparse(source).netloc):
        raise click.BadParameter(
            f"'{source}' is neither an existing file nor a URL.",
            param_hint="SOURCE",
        )


def _open_lines(source: str) -> ty.Iterator[str]:
    """Returns a single-pass iterator over the lines of SOURCE, which
    may be a file path, a URL, or ``-`` for standard input.
    """
    if source == "-":
        return _stdin_lines()
    _check_source(source)
    return line_iter(source)


def _echo_element(index: int, element: str, display: DictConfig) -> None:
    text = click.style(element, fg=display.color.element)
    if display.show_index:
        index_fmt = click.style(f"{index:>4}", fg=display.color.index)
        text = f"{index_fmt} {text}"
    click.echo(text)


def _apply(
    cursor: ListIteratorWrapper[str], move: str, conf: DictConfig
) -> None:
    """Performs a single cursor move, echoing the element passed over.
    Moves past either end of the data echo a notice instead.
    """
    bindings, display = conf.bindings, conf.display
    try:
        if move == bindings.next:
            index = cursor.next_index()
            _echo_element(index, cursor.next(), display)
        elif move == bindings.previous:
            element = cursor.previous()
            _echo_element(cursor.next_index(), element, display)
        elif move == bindings.reset:
            cursor.reset()
            click.secho("-- reset --", fg=display.color.notice)
        else:
            raise ValueError(f"Unknown move '{move}'.")
    except StopIteration:
        notice = "end" if move == bindings.next else "start"
        click.secho(f"-- {notice} of data --", fg=display.color.notice)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file overriding the default key bindings and display.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=version)
@click.pass_context
def main(ctx, config_path, verbose):
    """Step backward and forward over the lines of forward-only data
    sources, such as pipes, streams, and remote files.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True))],
    )
    ctx.obj = {}
    try:
        ctx.obj["config"] = load_config(config_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config") from None


@main.command()
@click.argument("source")
@click.argument("moves")
@click.pass_context
def walk(ctx, source, moves):
    """Applies MOVES, a string of key bindings, to a cursor over the
    lines of SOURCE.
    """
    conf = ctx.obj["config"]
    known = set(conf.bindings.values())
    unknown = sorted(set(moves) - known)
    if unknown:
        raise click.BadParameter(
            f"Unknown moves {unknown}, expected any of {sorted(known)}.",
            param_hint="MOVES",
        )
    with closing(_open_lines(source)) as lines:  # type: ignore
        cursor = ListIteratorWrapper(lines)
        for move in moves:
            if move == conf.bindings.quit:
                break
            _apply(cursor, move, conf)


@main.command()
@click.argument("source")
@click.pass_context
def browse(ctx, source):
    """Interactively steps through the lines of SOURCE."""
    if source == "-":
        raise click.BadParameter(
            "Cannot browse standard input interactively.",
            param_hint="SOURCE",
        )
    conf = ctx.obj["config"]
    bindings = conf.bindings
    title = "Rewindpipe Browser"
    underline = "-" * len(title)
    title_fmt = click.style(title, fg="green")
    keys_str = ", ".join(f"{key}: {name}" for name, key in bindings.items())
    click.echo(f"\n{title_fmt}\n{underline}\nversion: {version}\n{keys_str}\n")
    with closing(_open_lines(source)) as lines:  # type: ignore
        cursor = ListIteratorWrapper(lines)
        while True:
            try:
                move = click.prompt(
                    "move", default=bindings.next, show_default=False
                )
            except click.Abort:
                break
            move = move.strip()
            if move == bindings.quit:
                break
            try:
                _apply(cursor, move, conf)
            except ValueError as e:
                click.secho(str(e), fg=conf.display.color.notice)


@main.command()
@click.argument("source")
def count(source):
    """Prints the number of lines in SOURCE."""
    if source == "-":
        click.echo(sum(1 for _ in _stdin_lines()))
    else:
        _check_source(source)
        click.echo(count_lines(source))
