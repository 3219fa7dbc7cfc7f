import os
from contextlib import contextmanager
from copy import copy
from typing import Literal, Optional, TypedDict, Union

tempdir = os.environ.get("TEMPOBJECT_TMPDIR") or None

Config = TypedDict(
    "Config",
    {
        "block_size": int,
        "tempdir": Optional[str],
        "tempfile_prefix": str,
        "file_mode": int,
    },
)

# https://github.com/python/mypy/issues/6262
CONFIG_KEYS = Literal[
    "block_size",
    "tempdir",
    "tempfile_prefix",
    "file_mode",
]


class PartialConfig(Config, total=False):
    pass


_default_config: Config = {
    "block_size": 8192,
    "tempdir": tempdir,
    "tempfile_prefix": "tempobject",
    "file_mode": 0o644,
}

config = copy(_default_config)


def _validate(key: str, value):
    if key == "block_size" and (not isinstance(value, int) or value < 1):
        raise ValueError(f"block_size must be a positive int, got {value!r}")
    if key == "file_mode" and not isinstance(value, int):
        raise ValueError(f"file_mode must be an int, got {value!r}")


def reset_config():
    config.update(_default_config)


def set_config(key: CONFIG_KEYS, value: Optional[Union[str, int]]):
    if key not in config:
        raise KeyError(f"Non existing config '{key}'")
    _validate(key, value)
    config[key] = value  # type: ignore


def get_config(key: Optional[CONFIG_KEYS] = None):
    if key is None:
        return config
    if key not in config:
        raise KeyError(f"Non existing config '{key}'")
    return config[key]  # type: ignore


@contextmanager
def config_context(*args):
    """Temporarily override config items, restoring them on exit.

    Example:

        >>> with config_context("block_size", 65536, "tempdir", "/var/tmp"):
        ...     chunks = list(temp_object)
    """
    if len(args) % 2 != 0 or len(args) < 2:
        raise ValueError(
            "Need to invoke as config_context(key, value, [(key, value), ...])."
        )

    overrides = dict(zip(args[::2], args[1::2]))
    previous = {key: get_config(key) for key in overrides}
    try:
        for key, value in overrides.items():
            set_config(key, value)
        yield
    finally:
        config.update(previous)
