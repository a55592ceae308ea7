"""
``rewindpipe``
==============

Provides adapter interfaces which turn forward-only, single-pass
iterators into bidirectional list cursors, buffering each element once
as it is first encountered.
"""
from ._version import __version__
from . import base
from . import cursor
from . import sources
from .cursor import ListIteratorWrapper, iter_previous
from .sources import IteratorSource


__all__ = [
    "__version__",
    "base",
    "cursor",
    "sources",
    "ListIteratorWrapper",
    "IteratorSource",
    "iter_previous",
]
