"""Configuration for the ``rewindpipe`` command line interface."""
from pathlib import Path
from typing import Any, Dict, Optional, Union

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import ConfigKeyError


__all__ = ["DEFAULTS", "load_config"]


DEFAULTS: Dict[str, Any] = {
    "bindings": {
        "next": "n",
        "previous": "p",
        "reset": "r",
        "quit": "q",
    },
    "display": {
        "show_index": True,
        "color": {
            "element": "green",
            "index": "yellow",
            "notice": "red",
        },
    },
}


def load_config(path: Optional[Union[str, Path]] = None) -> DictConfig:
    """Loads the CLI settings, merging the YAML file at ``path`` over
    the defaults.

    Raises
    ------
    ValueError
        If the file sets an unknown key, or the key bindings are not
        distinct single characters.
    """
    conf = OmegaConf.create(DEFAULTS)
    OmegaConf.set_struct(conf, True)
    if path is not None:
        try:
            conf = OmegaConf.merge(conf, OmegaConf.load(path))
        except ConfigKeyError as e:
            raise ValueError(f"Unknown setting in {path}: {e}") from None
    bindings = list(conf.bindings.values())
    if any(not isinstance(key, str) or len(key) != 1 for key in bindings):
        raise ValueError(f"Key bindings must be single characters: {bindings}.")
    if len(set(bindings)) != len(bindings):
        raise ValueError(f"Key bindings must be distinct: {bindings}.")
    return conf  # type: ignore
