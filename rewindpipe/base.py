from abc import ABC, abstractmethod
from typing import TypeVar, Generic
from collections.abc import Iterator


__all__ = [
    "SourceProducer",
    "ListCursor",
]


E = TypeVar("E")


class SourceProducer(ABC, Iterator, Generic[E]):
    """Adapter pattern interface for forward-only, single-pass data
    sources. Each call to ``__next__`` consumes an element permanently.
    """

    @abstractmethod
    def has_next(self) -> bool:
        """Whether a subsequent call to ``__next__`` will yield an
        element. Must not consume anything from the source.
        """

    @abstractmethod
    def __next__(self) -> E:
        """Returns the next element, raising ``StopIteration`` once the
        source is exhausted.
        """


class ListCursor(ABC, Iterator, Generic[E]):
    """Bidirectional cursor interface, with index queries and optional
    structural modification operations.
    """

    @abstractmethod
    def has_next(self) -> bool:
        pass

    @abstractmethod
    def next(self) -> E:
        pass

    @abstractmethod
    def has_previous(self) -> bool:
        pass

    @abstractmethod
    def previous(self) -> E:
        pass

    @abstractmethod
    def next_index(self) -> int:
        pass

    @abstractmethod
    def previous_index(self) -> int:
        pass

    @abstractmethod
    def add(self, element: E) -> None:
        pass

    @abstractmethod
    def remove(self) -> None:
        pass

    @abstractmethod
    def set(self, element: E) -> None:
        pass

    def __next__(self) -> E:
        return self.next()
