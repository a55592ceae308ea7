"""
``rewindpipe.sources``
======================

Single-pass data sources, suitable for wrapping in a
``ListIteratorWrapper``. Text data may be read lazily from paths, gzip
compressed files, URLs, strings, or bytes objects.
"""

import gzip
import io
import logging
import typing as ty
from contextlib import ExitStack, contextmanager
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import urlopen

from rewindpipe import base

__all__ = [
    "IteratorSource",
    "source_adapter",
    "line_iter",
    "count_lines",
]

logger = logging.getLogger(__name__)

E = ty.TypeVar("E")
_TEXT_STORAGE = ty.Union[Path, str, bytes]
_EMPTY = object()


class IteratorSource(base.SourceProducer[E]):
    """Adapts any Python iterable to the ``SourceProducer`` interface.

    Parameters
    ----------
    iterable : Iterable
        The data to be consumed. It is iterated once, and only as far
        as is requested.

    Notes
    -----
    Python iterators cannot report whether they are exhausted without
    being advanced, so ``has_next()`` pulls at most one element ahead
    into a lookahead slot. The held element is handed out by the
    following call to ``__next__``, so each element of ``iterable`` is
    pulled exactly once.
    """

    def __init__(self, iterable: ty.Iterable[E]) -> None:
        self._iterator = iter(iterable)
        self._lookahead: ty.Any = _EMPTY

    def has_next(self) -> bool:
        if self._lookahead is not _EMPTY:
            return True
        try:
            self._lookahead = next(self._iterator)
        except StopIteration:
            return False
        return True

    def __next__(self) -> E:
        if self._lookahead is not _EMPTY:
            element, self._lookahead = self._lookahead, _EMPTY
            return element
        return next(self._iterator)

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(iterator={self._iterator!r})"


_GZIP_MAGIC = b"\x1f\x8b"


def _open_raw(source: _TEXT_STORAGE) -> io.BufferedReader:
    """Opens ``source`` as a peekable binary stream, undecompressed."""
    if isinstance(source, bytes):
        return io.BufferedReader(io.BytesIO(source))  # type: ignore
    if isinstance(source, (str, Path)) and Path(source).is_file():
        return open(source, "rb")
    if isinstance(source, str):
        if urlparse(source).netloc:
            return io.BufferedReader(urlopen(source))
        return io.BufferedReader(io.BytesIO(source.encode()))  # type: ignore
    raise NotImplementedError(
        f"Cannot read data from source of type {type(source).__name__}."
    )


@contextmanager
def source_adapter(source: _TEXT_STORAGE) -> ty.Iterator[io.BufferedIOBase]:
    """Context manager to provide a consistent adapter interface for
    text data stored in various formats.

    Parameters
    ----------
    source : Pathlike, string, or bytes
        The variable or filepath containing the data. May be a path,
        url, string, or bytes object. Gzip compression is detected from
        the leading bytes of any of these.

    Returns
    -------
    text_file : io.BufferedIOBase
        Binary file-like object containing the decompressed data.

    Raises
    ------
    NotImplementedError
        If ``source`` is not one of the supported storage types.
    """
    with ExitStack() as stack:
        raw = stack.enter_context(_open_raw(source))
        is_gzip = raw.peek(2)[:2] == _GZIP_MAGIC
        logger.debug(
            "Opened %s source (gzip=%s)", type(source).__name__, is_gzip
        )
        if is_gzip:
            yield stack.enter_context(gzip.GzipFile(fileobj=raw, mode="rb"))
        else:
            yield raw


def line_iter(
    source: _TEXT_STORAGE, strip: bool = True, encoding: str = "utf-8"
) -> ty.Iterator[str]:
    """Iterates over the lines of a text source, decoding them lazily.

    Parameters
    ----------
    source : Pathlike, string, or bytes
        The variable or filepath containing the data. May be a path,
        url, string, or bytes object. Gzip compression is allowed.
    strip : bool
        Whether to remove trailing newline characters. Default is
        ``True``.
    encoding : str
        Text encoding of the data. Default is ``"utf-8"``.

    Yields
    ------
    str
        Each successive line of the source.

    Notes
    -----
    The underlying file object is kept open until the generator is
    exhausted or closed.
    """
    with source_adapter(source) as text_source:
        for raw_line in text_source:
            line = raw_line.decode(encoding)
            if strip:
                line = line.rstrip("\r\n")
            yield line


def count_lines(source: _TEXT_STORAGE) -> int:
    """Returns the number of lines stored in ``source``.

    Parameters
    ----------
    source : pathlib.Path | str | bytes
        File or string object containing text data.

    Returns
    -------
    count : int
        The number of lines.
    """
    with source_adapter(source) as text_source:
        num_lines = 0
        for _ in text_source:
            num_lines = num_lines + 1
    return num_lines
