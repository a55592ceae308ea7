from pathlib import Path

import pytest

from rewindpipe.config import DEFAULTS, load_config


def test_defaults() -> None:
    conf = load_config()
    assert conf.bindings.next == DEFAULTS["bindings"]["next"]
    assert conf.display.show_index is True


def test_merge(tmp_path: Path) -> None:
    """Tests that user settings override the defaults, leaving the
    remaining defaults in place.
    """
    path = tmp_path / "config.yaml"
    path.write_text("bindings:\n  quit: x\ndisplay:\n  color:\n    index: blue\n")
    conf = load_config(path)
    assert conf.bindings.quit == "x"
    assert conf.bindings.next == "n"
    assert conf.display.color.index == "blue"
    assert conf.display.color.element == "green"


@pytest.mark.parametrize(
    "bindings", ["next: nn", "reset: n", "nxt: x", "next: 1"]
)
def test_invalid_bindings(tmp_path: Path, bindings: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(f"bindings:\n  {bindings}\n")
    with pytest.raises(ValueError):
        load_config(path)
