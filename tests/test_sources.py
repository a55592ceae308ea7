import gzip
import typing as ty
from pathlib import Path

import pytest
from hypothesis import given, settings, strategies as st

import rewindpipe as rwp
from rewindpipe import sources


TEXT = "alpha\nbeta\ngamma\n"


def recording(
    data: ty.Iterable[ty.Any], log: ty.List[ty.Any]
) -> ty.Iterator[ty.Any]:
    """Generator passing through ``data``, appending every element it
    yields to ``log``.
    """
    for element in data:
        log.append(element)
        yield element


def test_lookahead_single_pull() -> None:
    """Tests that ``has_next()`` pulls at most one element ahead, and
    that the held element is handed out by ``next()``.
    """
    log: ty.List[int] = []
    source = rwp.IteratorSource(recording([1, 2], log))
    assert log == []
    assert source.has_next() is True
    assert source.has_next() is True
    assert log == [1]
    assert next(source) == 1
    assert log == [1]
    assert next(source) == 2
    assert source.has_next() is False
    with pytest.raises(StopIteration):
        next(source)


@given(st.lists(st.integers(), max_size=30), st.lists(st.booleans()))
@settings(max_examples=50, deadline=None)
def test_drain(data: ty.List[int], queries: ty.List[bool]) -> None:
    """Tests that interleaving ``has_next()`` queries with pulls yields
    the data unchanged.
    """
    source = rwp.IteratorSource(data)
    out = []
    for query in queries + [True] * (len(data) + 1):
        if query and not source.has_next():
            break
        if not query:
            continue
        out.append(next(source))
    assert out == data


def test_lookahead_failure_propagates() -> None:
    def broken() -> ty.Iterator[int]:
        yield 1
        raise OSError("stream closed")

    source = rwp.IteratorSource(broken())
    assert next(source) == 1
    with pytest.raises(OSError):
        source.has_next()


@pytest.fixture
def text_path(tmp_path: Path) -> Path:
    path = tmp_path / "data.txt"
    path.write_text(TEXT)
    return path


@pytest.fixture
def gzip_path(tmp_path: Path) -> Path:
    path = tmp_path / "data.txt.gz"
    with gzip.open(path, "wb") as f:
        f.write(TEXT.encode())
    return path


@pytest.mark.parametrize(
    "kind", ["str", "bytes", "path", "str_path", "gzip", "gzip_bytes"]
)
def test_source_adapter(
    kind: str, text_path: Path, gzip_path: Path
) -> None:
    """Tests that each storage type provides the same content."""
    storage = {
        "str": TEXT,
        "bytes": TEXT.encode(),
        "path": text_path,
        "str_path": str(text_path),
        "gzip": gzip_path,
        "gzip_bytes": gzip.compress(TEXT.encode()),
    }[kind]
    with sources.source_adapter(storage) as f:
        assert f.read() == TEXT.encode()


def test_source_adapter_closes(text_path: Path) -> None:
    with sources.source_adapter(text_path) as f:
        pass
    assert f.closed


def test_source_adapter_unsupported() -> None:
    with pytest.raises(NotImplementedError):
        with sources.source_adapter(42):  # type: ignore
            pass


def test_source_adapter_directory(tmp_path: Path) -> None:
    with pytest.raises(NotImplementedError):
        with sources.source_adapter(tmp_path):
            pass


def test_line_iter(gzip_path: Path) -> None:
    assert list(sources.line_iter(gzip_path)) == ["alpha", "beta", "gamma"]
    assert list(sources.line_iter(b"a\r\nb", strip=False)) == ["a\r\n", "b"]


def test_line_iter_is_lazy(text_path: Path) -> None:
    """Tests that the cursor only reads as far as it is advanced."""
    lines = sources.line_iter(text_path)
    cursor = rwp.ListIteratorWrapper(lines)
    assert cursor.next() == "alpha"
    assert cursor.previous() == "alpha"
    assert cursor.buffered == 1
    assert next(lines) == "beta"
    lines.close()


def test_count_lines(text_path: Path) -> None:
    assert sources.count_lines(text_path) == 3
    assert sources.count_lines("a\nb") == 2
    assert sources.count_lines(b"") == 0
