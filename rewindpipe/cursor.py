"""
``rewindpipe.cursor``
=====================

The rewindpipe cursor module provides a bidirectional, index-aware view
over forward-only data sources. Elements are pulled from the source
lazily, buffered as they are first encountered, and replayed from the
buffer whenever the cursor moves back over them.
"""
import logging
import typing as ty

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from rewindpipe import base
from rewindpipe.sources import IteratorSource

__all__ = ["ListIteratorWrapper", "iter_previous"]

logger = logging.getLogger(__name__)

E = ty.TypeVar("E")

UNSUPPORTED_OPERATION_MESSAGE = (
    "ListIteratorWrapper does not support optional operations of "
    "ListCursor."
)


class ListIteratorWrapper(base.ListCursor[E]):
    """As the wrapped source is traversed, ``ListIteratorWrapper``
    buffers its values, permitting backward traversal and index queries
    over a source which only supports moving forward.

    Parameters
    ----------
    source : SourceProducer | Iterable
        The source to wrap. Plain iterables are adapted with
        ``IteratorSource``. Ownership of the source remains with the
        caller, it is never reset or closed by the wrapper.

    Attributes
    ----------
    buffered : int
        Number of elements pulled from the source so far.

    Raises
    ------
    TypeError
        If ``source`` is ``None``, or is not iterable.

    Notes
    -----
    The source is only advanced when the cursor sits at the frontier,
    ie. when every buffered element has already been passed over. While
    the cursor is behind the frontier, forward moves replay the buffer.
    """

    def __init__(
        self, source: ty.Union[base.SourceProducer[E], ty.Iterable[E]]
    ) -> None:
        if source is None:
            raise TypeError("Iterator must not be None")
        if not isinstance(source, base.SourceProducer):
            source = IteratorSource(source)
        self._source: base.SourceProducer[E] = source
        self._buffer: ty.List[E] = []
        # position of this cursor
        self._current_index = 0
        # position of the wrapped source, only advanced to fill the buffer
        self._wrapped_iterator_index = 0

    def __rich__(self) -> Tree:
        name = self.__class__.__name__
        tree = Tree(
            f"{name}(next_index=[yellow]{self._current_index}[default], "
            f"buffered=[yellow]{self._wrapped_iterator_index}[default])"
        )
        tree.add(f"[blue]source [default]= [green]{escape(repr(self._source))}")
        return tree

    def __repr__(self) -> str:
        console = Console(color_system=None)
        with console.capture() as capture:
            console.print(self)
        return capture.get()

    @property
    def buffered(self) -> int:
        """Number of elements pulled from the source so far."""
        return self._wrapped_iterator_index

    def has_next(self) -> bool:
        """Returns ``True`` if there are more elements ahead of the
        cursor, either buffered or in the source.
        """
        if self._current_index == self._wrapped_iterator_index:
            return self._source.has_next()
        return True

    def has_previous(self) -> bool:
        """Returns ``True`` if there are elements behind the cursor."""
        return self._current_index != 0

    def next(self) -> E:
        """Moves the cursor forward, returning the element passed over.

        Raises
        ------
        StopIteration
            If the cursor is at the frontier and the source is
            exhausted.
        """
        if self._current_index < self._wrapped_iterator_index:
            self._current_index += 1
            return self._buffer[self._current_index - 1]
        element = next(self._source)
        self._buffer.append(element)
        self._current_index += 1
        self._wrapped_iterator_index += 1
        logger.debug(
            "Pulled element %d from source", self._wrapped_iterator_index
        )
        return element

    def previous(self) -> E:
        """Moves the cursor backward, returning the element passed over.

        Raises
        ------
        StopIteration
            If there are no elements behind the cursor.
        """
        if self._current_index == 0:
            raise StopIteration("No elements behind the cursor.")
        self._current_index -= 1
        return self._buffer[self._current_index]

    def next_index(self) -> int:
        """Index of the element which a subsequent ``next()`` would
        return.
        """
        return self._current_index

    def previous_index(self) -> int:
        """Index of the element which a subsequent ``previous()`` would
        return. This is ``-1`` when the cursor is at the start.
        """
        return self._current_index - 1

    def reset(self) -> None:
        """Moves the cursor back to the start of the buffered data. The
        source is untouched, so replay begins from the first element.
        """
        logger.debug("Reset cursor from index %d", self._current_index)
        self._current_index = 0

    def add(self, element: E) -> None:
        """Throws ``NotImplementedError``."""
        raise NotImplementedError(UNSUPPORTED_OPERATION_MESSAGE)

    def remove(self) -> None:
        """Throws ``NotImplementedError``."""
        raise NotImplementedError(UNSUPPORTED_OPERATION_MESSAGE)

    def set(self, element: E) -> None:
        """Throws ``NotImplementedError``."""
        raise NotImplementedError(UNSUPPORTED_OPERATION_MESSAGE)


def iter_previous(cursor: base.ListCursor[E]) -> ty.Generator[E, None, None]:
    """Walks ``cursor`` backward to its start, yielding each element it
    passes over.

    Parameters
    ----------
    cursor : ListCursor
        The cursor to rewind. It is moved as a side-effect, so once
        this generator is exhausted ``cursor.has_previous()`` is
        ``False``.

    Yields
    ------
    element
        Elements behind the cursor, nearest first.
    """
    while cursor.has_previous():
        yield cursor.previous()
